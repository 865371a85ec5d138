"""
Local filesystem storage provider.
Images land in a directory the web server exposes as static files.
"""
from __future__ import annotations

import logging
from pathlib import Path

from src.app.domain.errors import InvalidUploadError, StorageError
from src.app.domain.models import StoredImage
from src.app.infra.storage.base import ImageStorageProvider

logger = logging.getLogger(__name__)


class LocalImageStorage(ImageStorageProvider):
    def __init__(self, root: Path | str, public_prefix: str = "/uploads"):
        self.root = Path(root)
        prefix = public_prefix.strip("/")
        self.public_prefix = f"/{prefix}" if prefix else ""

    def save_image(self, data: bytes, filename: str, content_type: str) -> StoredImage:
        if not data:
            raise InvalidUploadError("Uploaded file is empty")

        name = self.generate_image_name(filename)
        target = self.root / name
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            logger.error("Failed to write upload %s: %s", target, e)
            raise StorageError(f"Failed to store image: {e}") from e

        logger.info("Stored image: path=%s, size=%d bytes", target, len(data))
        return StoredImage(
            path=f"{self.public_prefix}/{name}",
            content_type=content_type,
            size_bytes=len(data),
        )
