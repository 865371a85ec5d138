# src/app/routers/projects.py
"""
Project catalog routes.

- GET    /projects          : public list, display order
- POST   /projects          : create (admin)
- PUT    /projects          : whole-record replace by id (admin)
- DELETE /projects?id=...   : delete (admin)

Mutation bodies are parsed only after the admin gate, so an anonymous caller
gets 401 whatever the body holds.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from starlette.concurrency import run_in_threadpool

from src.app.deps import CurrentUser, get_catalog_service, read_json_body, require_admin
from src.app.domain.errors import (
    CatalogStorageError,
    DuplicateProjectError,
    ProjectNotFoundError,
)
from src.app.schemas.projects import (
    ProjectMutationResponse,
    ProjectPayload,
    SuccessResponse,
)
from src.app.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


def _storage_failure(action: str, exc: Exception) -> HTTPException:
    logger.error("Catalog storage failure while trying to %s: %s", action, exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )


@router.get("", response_model=list[ProjectPayload], response_model_exclude_none=True)
async def list_projects(
    catalog: CatalogService = Depends(get_catalog_service),
) -> list[ProjectPayload]:
    try:
        projects = await run_in_threadpool(catalog.list_projects)
    except CatalogStorageError as exc:
        raise _storage_failure("fetch projects", exc)
    return [ProjectPayload.from_domain(p) for p in projects]


@router.post("", response_model=ProjectMutationResponse, response_model_exclude_none=True)
async def create_project(
    request: Request,
    admin: CurrentUser = Depends(require_admin),
    catalog: CatalogService = Depends(get_catalog_service),
) -> ProjectMutationResponse:
    payload = await read_json_body(request, ProjectPayload)
    try:
        stored = await run_in_threadpool(catalog.create_project, payload.to_domain())
    except DuplicateProjectError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except CatalogStorageError as exc:
        raise _storage_failure("create project", exc)
    return ProjectMutationResponse(project=ProjectPayload.from_domain(stored))


@router.put("", response_model=ProjectMutationResponse, response_model_exclude_none=True)
async def update_project(
    request: Request,
    admin: CurrentUser = Depends(require_admin),
    catalog: CatalogService = Depends(get_catalog_service),
) -> ProjectMutationResponse:
    payload = await read_json_body(request, ProjectPayload)
    if not payload.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Project ID required")
    try:
        stored = await run_in_threadpool(catalog.update_project, payload.to_domain())
    except ProjectNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    except CatalogStorageError as exc:
        raise _storage_failure("update project", exc)
    return ProjectMutationResponse(project=ProjectPayload.from_domain(stored))


@router.delete("", response_model=SuccessResponse)
async def delete_project(
    project_id: Optional[str] = Query(default=None, alias="id"),
    admin: CurrentUser = Depends(require_admin),
    catalog: CatalogService = Depends(get_catalog_service),
) -> SuccessResponse:
    if not project_id or not project_id.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Project ID required")
    try:
        await run_in_threadpool(catalog.delete_project, project_id.strip())
    except ProjectNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    except CatalogStorageError as exc:
        raise _storage_failure("delete project", exc)
    return SuccessResponse()
