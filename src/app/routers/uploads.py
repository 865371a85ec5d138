# src/app/routers/uploads.py
"""
Image upload route for project pictures.
The returned path is what the dashboard stores as a project's image reference.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from src.app.deps import CurrentUser, get_image_storage, require_admin
from src.app.domain.errors import InvalidUploadError, StorageError
from src.app.infra.storage.base import ImageStorageProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/uploads", tags=["uploads"])


# Allowed content types for upload
ALLOWED_CONTENT_TYPES = {
    "image/jpeg",
    "image/png",
    "image/webp",
    "image/gif",
    "image/svg+xml",
}

# Max file size (10MB)
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024


class UploadResponse(BaseModel):
    success: bool = True
    path: str = Field(..., description="Path or URL to store as the project image")
    content_type: str
    size_bytes: int


@router.post("", response_model=UploadResponse)
async def upload_image(
    file: UploadFile = File(...),
    admin: CurrentUser = Depends(require_admin),
    storage: ImageStorageProvider = Depends(get_image_storage),
):
    content_type = (file.content_type or "").lower()
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Content type '{content_type}' not allowed. Allowed types: {', '.join(sorted(ALLOWED_CONTENT_TYPES))}",
        )

    data = await file.read(MAX_FILE_SIZE_BYTES + 1)
    if len(data) > MAX_FILE_SIZE_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File too large. Maximum size: {MAX_FILE_SIZE_BYTES // (1024*1024)}MB",
        )

    try:
        stored = await run_in_threadpool(
            storage.save_image, data, file.filename or "image", content_type
        )
    except InvalidUploadError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.reason)
    except StorageError as e:
        logger.error("Failed to store upload: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to store image",
        )

    logger.info("Image uploaded: user=%s, path=%s", admin.id, stored.path)
    return UploadResponse(
        path=stored.path,
        content_type=stored.content_type,
        size_bytes=stored.size_bytes,
    )
