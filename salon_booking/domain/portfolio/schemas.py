"""Portfolio domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel


class PortfolioUploadResponse(BaseModel):
    url: str
    key: str


class PortfolioDeleteRequest(BaseModel):
    # Blank or missing is a 400 from PortfolioService.delete_image
    url: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
