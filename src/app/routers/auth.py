from __future__ import annotations
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.concurrency import run_in_threadpool
from supabase import Client

from src.app.deps import get_current_user, get_supabase, is_admin_email, CurrentUser
from src.app.schemas.auth import LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, supa: Client = Depends(get_supabase)):
    try:
        res = await run_in_threadpool(
            supa.auth.sign_in_with_password,
            {"email": payload.email, "password": payload.password},
        )
    except Exception as exc:
        logger.warning("Login failed for %s: %s", payload.email, exc)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    session = getattr(res, "session", None)
    user = getattr(res, "user", None)
    if session is None or user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not is_admin_email(user.email):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")

    meta = getattr(user, "user_metadata", None) or {}
    name = meta.get("name") if isinstance(meta, dict) else None
    return LoginResponse(
        access_token=session.access_token,
        expires_in=getattr(session, "expires_in", None),
        user=CurrentUser(id=str(user.id), email=user.email, name=name),
    )


@router.get("/me", response_model=CurrentUser)
async def me(user: CurrentUser = Depends(get_current_user)):
    return user
