"""
Blob storage for uploaded images (inspiration photos and portfolio).
Objects live in a PUBLIC Cloudflare R2 bucket; the database stores their public URLs.
"""

import logging
import time
from typing import Optional

import boto3
from botocore.config import Config

from ..config import (
    R2_ACCESS_KEY_ID,
    R2_ACCOUNT_ID,
    R2_BUCKET_NAME,
    R2_PUBLIC_BASE_URL,
    R2_SECRET_ACCESS_KEY,
)
from .sanitization import safe_filename

logger = logging.getLogger(__name__)


def get_r2_client():
    """Get configured boto3 client for Cloudflare R2"""
    return boto3.client(
        "s3",
        endpoint_url=f"https://{R2_ACCOUNT_ID}.r2.cloudflarestorage.com",
        aws_access_key_id=R2_ACCESS_KEY_ID,
        aws_secret_access_key=R2_SECRET_ACCESS_KEY,
        config=Config(signature_version="s3v4"),
        region_name="auto",
    )


def build_object_key(prefix: str, filename: Optional[str]) -> str:
    """
    Generate a unique key for an upload.

    Format: {prefix}/{epoch_ms}-{safe_filename}
    """
    timestamp_ms = int(time.time() * 1000)
    return f"{prefix}/{timestamp_ms}-{safe_filename(filename)}"


class BlobStorage:
    """Thin wrapper over the R2 bucket that speaks in public URLs."""

    def __init__(
        self,
        client=None,
        bucket: str = R2_BUCKET_NAME,
        public_base_url: Optional[str] = R2_PUBLIC_BASE_URL,
    ):
        self._client = client
        self.bucket = bucket
        base_url = public_base_url or f"https://{R2_ACCOUNT_ID}.r2.cloudflarestorage.com/{bucket}"
        self.public_base_url = base_url.rstrip("/")

    @property
    def client(self):
        if self._client is None:
            self._client = get_r2_client()
        return self._client

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    def key_from_url(self, url: str) -> Optional[str]:
        """Return the object key for a URL served from this bucket, else None."""
        prefix = f"{self.public_base_url}/"
        if not url or not url.startswith(prefix):
            return None
        key = url[len(prefix):].split("?")[0]
        return key or None

    def put(self, key: str, body: bytes, content_type: str) -> str:
        """Upload bytes and return the public URL."""
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            CacheControl="public, max-age=31536000",  # 1 year cache
        )
        logger.info(f"✅ Uploaded blob: {key} ({len(body)} bytes)")
        return self.public_url(key)

    def delete(self, url: str) -> bool:
        """
        Delete the object behind a public URL.

        Returns False (and does nothing) for URLs that are not served from
        this bucket, e.g. seeded images hosted elsewhere.
        """
        key = self.key_from_url(url)
        if key is None:
            logger.info(f"ℹ️ Skipping blob delete for external URL: {url}")
            return False

        self.client.delete_object(Bucket=self.bucket, Key=key)
        logger.info(f"🗑️ Deleted blob: {key}")
        return True


def get_blob_storage() -> BlobStorage:
    """Dependency injection for BlobStorage"""
    return BlobStorage()
