"""Booking router - FastAPI endpoints for the booking wizard"""

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ...auth import require_admin
from ...config import BOOKING_RATE_LIMIT, BOOKING_RATE_WINDOW_SECONDS
from ...database import get_db
from ...models import Booking
from ...rate_limiter import create_rate_limiter
from ...shared.validators import validate_iso_date
from ...utils.blob_storage import BlobStorage, get_blob_storage
from ...utils.sanitization import sanitize_string
from ..catalog.services import resolve_selection
from .schemas import (
    AvailabilityResponse,
    BookingCreate,
    BookingCreatedResponse,
    BookingResponse,
    ExistingBookingResponse,
)
from .service import BookingService, InspirationUpload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])

booking_rate_limit = create_rate_limiter(
    limit=BOOKING_RATE_LIMIT, window_seconds=BOOKING_RATE_WINDOW_SECONDS, key_prefix="booking"
)


def get_booking_service(
    db: Session = Depends(get_db),
    storage: BlobStorage = Depends(get_blob_storage),
) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db, storage)


def _parse_date_param(date: Optional[str]):
    if not date:
        raise HTTPException(status_code=400, detail="Date parameter is required")
    try:
        return validate_iso_date(date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


def _booking_response(booking: Booking, sanitize: bool = False) -> BookingResponse:
    clean = sanitize_string if sanitize else (lambda value: value)
    return BookingResponse(
        id=booking.id,
        bookingDate=booking.booking_date,
        startTime=booking.start_time,
        durationMinutes=booking.duration_minutes,
        clientName=clean(booking.client_name),
        clientPhone=booking.client_phone,
        services=[clean(name) for name in (booking.services or [])],
        totalCost=booking.total_cost,
        inspirationUrl=booking.inspiration_url,
        created_at=booking.created_at,
    )


@router.get("", response_model=list[ExistingBookingResponse])
async def get_bookings_for_date(
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    service: BookingService = Depends(get_booking_service),
):
    """Busy intervals already booked on a date (used to grey out time slots)"""
    day = _parse_date_param(date)
    return [
        ExistingBookingResponse(start_time=b.start_time, duration_minutes=b.duration_minutes)
        for b in service.get_busy_intervals(day)
    ]


@router.get("/availability", response_model=AvailabilityResponse)
async def get_availability(
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    duration: Optional[int] = Query(None, description="Total duration in minutes"),
    services: Optional[str] = Query(None, description="Comma-separated service ids"),
    service: BookingService = Depends(get_booking_service),
):
    """Free start times for a date, by explicit duration or by selected services"""
    day = _parse_date_param(date)

    if services:
        try:
            duration = resolve_selection(
                [s.strip() for s in services.split(",") if s.strip()]
            ).total_duration
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from None
    elif duration is None:
        raise HTTPException(status_code=400, detail="Provide either duration or services")

    closed, slots = service.get_available_slots(day, duration)
    return AvailabilityResponse(
        date=day.isoformat(), duration_minutes=duration, closed=closed, slots=slots
    )


@router.get("/admin", response_model=list[BookingResponse], dependencies=[Depends(require_admin)])
async def list_bookings_admin(
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    service: BookingService = Depends(get_booking_service),
):
    """Full booking records for a date (admin)"""
    day = _parse_date_param(date)
    return [_booking_response(b, sanitize=True) for b in service.list_bookings(day)]


@router.post(
    "",
    status_code=201,
    response_model=BookingCreatedResponse,
    dependencies=[Depends(booking_rate_limit)],
)
async def create_booking(
    bookingData: Optional[str] = Form(None),
    inspirationFile: Optional[UploadFile] = File(None),
    service: BookingService = Depends(get_booking_service),
):
    """Create a booking from the wizard's multipart submission.

    ``bookingData`` carries the booking as a JSON string; ``inspirationFile``
    is an optional reference photo.
    """
    if not bookingData:
        raise HTTPException(status_code=400, detail="bookingData field is missing")

    try:
        payload = BookingCreate.model_validate(json.loads(bookingData))
    except json.JSONDecodeError:
        raise HTTPException(status_code=400, detail="bookingData is not valid JSON") from None
    except ValidationError as e:
        errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        logger.warning(f"⚠️ Invalid booking data: {errors}")
        raise HTTPException(
            status_code=400,
            detail={"message": "Missing or invalid booking data", "errors": errors},
        ) from None

    inspiration = None
    if inspirationFile is not None:
        inspiration = InspirationUpload(
            filename=inspirationFile.filename,
            content_type=inspirationFile.content_type,
            contents=await inspirationFile.read(),
        )

    booking, whatsapp_url = service.create_booking(payload, inspiration)
    return BookingCreatedResponse(
        message="Booking created successfully",
        inspirationUrl=booking.inspiration_url,
        whatsappUrl=whatsapp_url,
        booking=_booking_response(booking),
    )
