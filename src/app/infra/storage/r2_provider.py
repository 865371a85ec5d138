# src/app/infra/storage/r2_provider.py
"""
Cloudflare R2 storage provider for project images.
R2 is S3-compatible, so we use boto3 with custom endpoint.
"""
from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from src.app.domain.errors import InvalidUploadError, StorageError
from src.app.domain.models import StoredImage
from src.app.infra.storage.base import ImageStorageProvider

logger = logging.getLogger(__name__)


class R2ImageStorage(ImageStorageProvider):
    """
    Cloudflare R2 image storage using boto3 (S3-compatible).

    Environment variables required:
    - R2_ACCOUNT_ID: Cloudflare account ID
    - R2_ACCESS_KEY_ID: R2 access key ID
    - R2_SECRET_ACCESS_KEY: R2 secret access key
    - R2_BUCKET_NAME: Name of the R2 bucket
    - R2_PUBLIC_URL: Public URL the bucket is served from
    """

    def __init__(
        self,
        account_id: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        bucket_name: Optional[str] = None,
        public_url: Optional[str] = None,
        key_prefix: str = "portfolio",
        client=None,
    ):
        self.account_id = account_id or os.getenv("R2_ACCOUNT_ID")
        self.access_key_id = access_key_id or os.getenv("R2_ACCESS_KEY_ID")
        self.secret_access_key = secret_access_key or os.getenv("R2_SECRET_ACCESS_KEY")
        self.bucket_name = bucket_name or os.getenv("R2_BUCKET_NAME")
        self.public_url = (public_url or os.getenv("R2_PUBLIC_URL") or "").rstrip("/")
        self.key_prefix = key_prefix.strip("/")

        if not all([self.account_id, self.access_key_id, self.secret_access_key,
                    self.bucket_name, self.public_url]):
            raise StorageError(
                "Missing R2 configuration. Required: R2_ACCOUNT_ID, R2_ACCESS_KEY_ID, "
                "R2_SECRET_ACCESS_KEY, R2_BUCKET_NAME, R2_PUBLIC_URL"
            )

        self.endpoint_url = f"https://{self.account_id}.r2.cloudflarestorage.com"

        self._client = client or boto3.client(
            "s3",
            endpoint_url=self.endpoint_url,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            config=Config(
                signature_version="s3v4",
                retries={"max_attempts": 3, "mode": "adaptive"},
            ),
            region_name="auto",  # R2 uses 'auto' as region
        )

        logger.info(
            "R2ImageStorage initialized: bucket=%s, endpoint=%s",
            self.bucket_name,
            self.endpoint_url,
        )

    def object_key_for(self, name: str, now: Optional[datetime] = None) -> str:
        """Format: {prefix}/{YYYY}/{MM}/{name}"""
        now = now or datetime.now(timezone.utc)
        return f"{self.key_prefix}/{now:%Y}/{now:%m}/{name}"

    def save_image(self, data: bytes, filename: str, content_type: str) -> StoredImage:
        if not data:
            raise InvalidUploadError("Uploaded file is empty")

        object_key = self.object_key_for(self.generate_image_name(filename))
        try:
            self._client.put_object(
                Bucket=self.bucket_name,
                Key=object_key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to upload image to R2: %s", e)
            raise StorageError(f"Failed to upload image: {e}") from e

        logger.info("Uploaded image to R2: key=%s, size=%d bytes", object_key, len(data))
        return StoredImage(
            path=f"{self.public_url}/{object_key}",
            content_type=content_type,
            size_bytes=len(data),
        )
