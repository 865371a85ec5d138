from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from starlette.concurrency import run_in_threadpool

from src.app.deps import CurrentUser, read_json_body, require_admin
from src.app.schemas.assist import AssistRequest, AssistResponse
from src.services import assist_agent
from src.services.errors import (
    AssistBackendError,
    AssistDisabledError,
    AssistUnavailableError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assist", tags=["assist"])

_UNAVAILABLE_DETAIL = "AI assistance unavailable. Make sure Ollama is running."


@router.post("", response_model=AssistResponse)
async def assist(
    request: Request,
    admin: CurrentUser = Depends(require_admin),
) -> AssistResponse:
    payload = await read_json_body(request, AssistRequest)
    try:
        text = await run_in_threadpool(
            assist_agent.run_assist,
            payload.action,
            payload.context.to_domain(),
        )
    except AssistDisabledError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    except AssistUnavailableError as exc:
        logger.warning("Assist backend unreachable: %s", exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=_UNAVAILABLE_DETAIL)
    except AssistBackendError as exc:
        logger.error("Assist backend error: %s", exc)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_UNAVAILABLE_DETAIL)

    logger.info("Assist completed: action=%s, user=%s", payload.action.value, admin.id)
    return AssistResponse(response=text)
