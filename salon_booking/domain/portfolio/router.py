"""Portfolio router - public gallery and admin management"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from ...auth import require_admin
from ...database import get_db
from ...utils.blob_storage import BlobStorage, get_blob_storage
from .schemas import MessageResponse, PortfolioDeleteRequest, PortfolioUploadResponse
from .service import PortfolioService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/portfolio", tags=["Portfolio"])


def get_portfolio_service(
    db: Session = Depends(get_db),
    storage: BlobStorage = Depends(get_blob_storage),
) -> PortfolioService:
    """Dependency injection for PortfolioService"""
    return PortfolioService(db, storage)


@router.get("", response_model=list[str])
async def list_portfolio_images(service: PortfolioService = Depends(get_portfolio_service)):
    """Image URLs, newest first"""
    return service.list_urls()


@router.post("", response_model=PortfolioUploadResponse, dependencies=[Depends(require_admin)])
async def upload_portfolio_image(
    file: UploadFile = File(...),
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Upload a new portfolio photo (admin)"""
    logger.info(f"📤 Uploading portfolio image: {file.filename}")
    contents = await file.read()
    url, key = service.upload_image(file.filename, file.content_type, contents)
    return PortfolioUploadResponse(url=url, key=key)


@router.delete("", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_portfolio_image(
    data: PortfolioDeleteRequest,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Remove a photo from the portfolio and from storage (admin)"""
    service.delete_image(data.url)
    return MessageResponse(message="Image deleted successfully.")
