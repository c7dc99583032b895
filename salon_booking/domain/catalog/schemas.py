"""Catalog domain schemas - Pydantic models for validation"""

from pydantic import BaseModel


class ServiceResponse(BaseModel):
    """Schema for a catalog entry"""

    id: str
    name: str
    price: float
    duration: int


class QuoteRequest(BaseModel):
    """Schema for quote calculation"""

    serviceIds: list[str]


class QuoteResponse(BaseModel):
    serviceNames: list[str]
    totalCost: float
    totalDuration: int


class BusinessInfoResponse(BaseModel):
    name: str
    address: str
    whatsapp: str
    openTime: str
    closeTime: str
    closedWeekdays: list[int]
