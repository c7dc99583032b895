"""Portfolio service - Business logic for the photo portfolio"""

import logging
import uuid
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import PORTFOLIO_MAX_BYTES
from ...shared.validators import image_extension, validate_image_content_type
from ...utils.blob_storage import BlobStorage
from .repository import PortfolioRepository

logger = logging.getLogger(__name__)


def resolve_image_extension(filename: Optional[str], content_type: str) -> str:
    try:
        return image_extension(filename, content_type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


class PortfolioService:
    """Service layer for portfolio images"""

    def __init__(self, db: Session, storage: BlobStorage):
        self.db = db
        self.storage = storage
        self.repo = PortfolioRepository()

    def list_urls(self) -> list[str]:
        try:
            return [image.url for image in self.repo.list_images(self.db)]
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to fetch portfolio images: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch portfolio images") from e

    def upload_image(
        self, filename: Optional[str], content_type: Optional[str], contents: bytes
    ) -> tuple[str, str]:
        """Store an image and register it in the portfolio. Returns (url, key)."""
        try:
            content_type = validate_image_content_type(content_type)
        except ValueError as e:
            logger.warning(f"⚠️ Rejected portfolio upload {filename} ({content_type})")
            raise HTTPException(status_code=400, detail=str(e)) from None
        if len(contents) == 0:
            raise HTTPException(status_code=400, detail="Empty file")
        if len(contents) > PORTFOLIO_MAX_BYTES:
            raise HTTPException(
                status_code=400,
                detail=f"Image too large (max {PORTFOLIO_MAX_BYTES // (1024 * 1024)}MB)",
            )

        key = f"portfolio/{uuid.uuid4().hex}{resolve_image_extension(filename, content_type)}"

        try:
            url = self.storage.put(key, contents, content_type)
        except Exception as e:
            logger.error(f"❌ Portfolio upload failed: {e}")
            raise HTTPException(status_code=500, detail="Failed to upload image.") from e

        try:
            self.repo.create_image(self.db, url)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to save portfolio image {url}: {e}")
            try:
                self.storage.delete(url)
            except Exception as cleanup_error:
                logger.error(f"❌ Could not remove orphaned upload {url}: {cleanup_error}")
            raise HTTPException(status_code=500, detail="Failed to upload image.") from e

        logger.info(f"✅ Portfolio image added: {url}")
        return url, key

    def delete_image(self, url: Optional[str]) -> None:
        """
        Remove an image from the portfolio.

        The row delete is flushed before the blob goes and committed after it.
        A flush error leaves both in place; a storage error rolls the row back.
        """
        url = (url or "").strip()
        if not url:
            raise HTTPException(status_code=400, detail="Image URL is required.")

        image = self.repo.get_image_by_url(self.db, url)
        if not image:
            raise HTTPException(status_code=404, detail="Image not found")

        try:
            self.repo.delete_image(self.db, image)
            self.storage.delete(url)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to delete portfolio image {url}: {e}")
            raise HTTPException(status_code=500, detail="Failed to delete image.") from e
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Failed to delete blob {url}: {e}")
            raise HTTPException(status_code=500, detail="Failed to delete image.") from e

        logger.info(f"🗑️ Portfolio image removed: {url}")
