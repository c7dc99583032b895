"""Catalog router - services offered and business contact details"""

import logging

from fastapi import APIRouter, HTTPException

from ...config import (
    BUSINESS_ADDRESS,
    BUSINESS_CLOSE_TIME,
    BUSINESS_NAME,
    BUSINESS_OPEN_TIME,
    BUSINESS_WHATSAPP_NUMBER,
    CLOSED_WEEKDAYS,
)
from .schemas import BusinessInfoResponse, QuoteRequest, QuoteResponse, ServiceResponse
from .services import list_services, resolve_selection

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Catalog"])


@router.get("/services", response_model=list[ServiceResponse])
async def get_services():
    """List the services that can be booked"""
    return [
        ServiceResponse(id=s.id, name=s.name, price=s.price, duration=s.duration_minutes)
        for s in list_services()
    ]


@router.post("/services/quote", response_model=QuoteResponse)
async def quote_services(data: QuoteRequest):
    """Total cost and duration for a selection of services"""
    try:
        selection = resolve_selection(data.serviceIds)
    except ValueError as e:
        logger.info(f"⚠️ Rejected quote for {data.serviceIds}: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from None

    return QuoteResponse(
        serviceNames=selection.names,
        totalCost=selection.total_cost,
        totalDuration=selection.total_duration,
    )


@router.get("/business", response_model=BusinessInfoResponse)
async def get_business_info():
    return BusinessInfoResponse(
        name=BUSINESS_NAME,
        address=BUSINESS_ADDRESS,
        whatsapp=BUSINESS_WHATSAPP_NUMBER,
        openTime=BUSINESS_OPEN_TIME,
        closeTime=BUSINESS_CLOSE_TIME,
        closedWeekdays=CLOSED_WEEKDAYS,
    )
