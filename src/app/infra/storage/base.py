# src/app/infra/storage/base.py
"""
Abstract base class for image storage providers.
This interface allows easy swapping between storage backends (local disk, R2, ...)
"""
from __future__ import annotations

import os
import re
import secrets
from abc import ABC, abstractmethod

from src.app.domain.models import StoredImage

MAX_FILENAME_LENGTH = 100


def sanitize_filename(filename: str) -> str:
    """Sanitize filename for storage."""
    # Remove path components
    filename = os.path.basename(filename or "")
    # Replace unsafe characters
    filename = re.sub(r'[^a-zA-Z0-9._-]', '_', filename).lstrip(".")
    # Limit length
    if len(filename) > MAX_FILENAME_LENGTH:
        name, ext = os.path.splitext(filename)
        filename = name[:MAX_FILENAME_LENGTH - len(ext)] + ext
    return filename or "image"


class ImageStorageProvider(ABC):
    """
    Abstract interface for storing uploaded project images.

    Implementations:
    - LocalImageStorage: files under a directory served as static content
    - R2ImageStorage: Cloudflare R2 (S3-compatible) bucket with a public URL
    """

    @abstractmethod
    def save_image(
        self,
        data: bytes,
        filename: str,
        content_type: str,
    ) -> StoredImage:
        """
        Persist an uploaded image.

        Args:
            data: Raw file content
            filename: Original filename as sent by the client
            content_type: MIME type of the content (e.g., "image/png")

        Returns:
            StoredImage whose ``path`` can be stored as a project's image reference
        """
        pass

    def generate_image_name(self, filename: str) -> str:
        """
        Generate a collision-resistant file name.

        Format: {hex8}_{sanitized filename}
        """
        return f"{secrets.token_hex(4)}_{sanitize_filename(filename)}"
