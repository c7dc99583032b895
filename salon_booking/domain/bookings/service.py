"""Booking service - Business logic for booking operations"""

import logging
import os
from datetime import date, datetime
from typing import NamedTuple, Optional
from zoneinfo import ZoneInfo

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import (
    BUSINESS_CLOSE_TIME,
    BUSINESS_OPEN_TIME,
    BUSINESS_TIMEZONE,
    CLOSED_WEEKDAYS,
    INSPIRATION_MAX_BYTES,
    SLOT_INTERVAL_MINUTES,
)
from ...models import Booking
from ...services.whatsapp_service import build_confirmation_message, build_whatsapp_url
from ...shared.validators import image_extension, validate_image_content_type
from ...utils.blob_storage import BlobStorage, build_object_key
from ...utils.sanitization import safe_filename
from ..catalog.services import resolve_names
from .availability import compute_available_slots, time_to_minutes
from .repository import BookingRepository
from .schemas import BookingCreate

logger = logging.getLogger(__name__)


class InspirationUpload(NamedTuple):
    filename: Optional[str]
    content_type: Optional[str]
    contents: bytes


def business_today() -> date:
    return datetime.now(ZoneInfo(BUSINESS_TIMEZONE)).date()


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session, storage: BlobStorage):
        self.db = db
        self.storage = storage
        self.repo = BookingRepository()
        self.window_start = time_to_minutes(BUSINESS_OPEN_TIME)
        self.window_end = time_to_minutes(BUSINESS_CLOSE_TIME)

    def closed_reason(self, day: date) -> Optional[str]:
        """Why the studio takes no bookings on ``day``, or None when open"""
        if day < business_today():
            return "Selected date is in the past"
        if day.weekday() in CLOSED_WEEKDAYS:
            return "We are closed on this day of the week"
        return None

    def get_busy_intervals(self, day: date) -> list:
        try:
            return self.repo.get_busy_intervals(self.db, day)
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to fetch bookings for {day}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch bookings") from e

    def get_available_slots(self, day: date, duration_minutes: int) -> tuple[bool, list[str]]:
        """Returns (closed, slots) for a day and total service duration"""
        if self.closed_reason(day):
            return True, []

        slots = compute_available_slots(
            day,
            duration_minutes,
            self.get_busy_intervals(day),
            window_start_minutes=self.window_start,
            window_end_minutes=self.window_end,
            interval_minutes=SLOT_INTERVAL_MINUTES,
        )
        return False, slots

    def list_bookings(self, day: date) -> list[Booking]:
        try:
            return self.repo.get_bookings_for_date(self.db, day)
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to list bookings for {day}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch bookings") from e

    def _validate_inspiration(self, inspiration: InspirationUpload) -> tuple[str, str]:
        """Returns (content_type, object name) for an acceptable inspiration photo"""
        try:
            content_type = validate_image_content_type(inspiration.content_type)
            ext = image_extension(inspiration.filename, content_type)
        except ValueError as e:
            logger.warning(
                f"⚠️ Rejected inspiration upload {inspiration.filename} ({inspiration.content_type})"
            )
            raise HTTPException(status_code=400, detail=str(e)) from None
        if len(inspiration.contents) > INSPIRATION_MAX_BYTES:
            raise HTTPException(
                status_code=400,
                detail=f"Image too large (max {INSPIRATION_MAX_BYTES // (1024 * 1024)}MB)",
            )
        stem = os.path.splitext(safe_filename(inspiration.filename))[0]
        return content_type, f"{stem}{ext}"

    def create_booking(
        self, data: BookingCreate, inspiration: Optional[InspirationUpload] = None
    ) -> tuple[Booking, str]:
        """
        Validate and persist a booking.

        Returns the stored booking and the WhatsApp confirmation link.
        Nothing is uploaded or written until every check has passed.
        """
        day = data.booking_date

        reason = self.closed_reason(day)
        if reason:
            raise HTTPException(status_code=400, detail=reason)

        try:
            selection = resolve_names(data.serviceNames)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from None

        if (
            data.totalDuration != selection.total_duration
            or abs(data.totalCost - selection.total_cost) > 0.005
        ):
            logger.warning(
                f"⚠️ Booking totals mismatch: got {data.totalDuration}min/R${data.totalCost}, "
                f"expected {selection.total_duration}min/R${selection.total_cost}"
            )
            raise HTTPException(
                status_code=400, detail="Booking totals do not match the selected services"
            )

        _, slots = self.get_available_slots(day, selection.total_duration)
        if data.selectedTime not in slots:
            logger.info(f"⚠️ Slot {day} {data.selectedTime} no longer available")
            raise HTTPException(status_code=409, detail="Selected time is no longer available")

        has_file = inspiration is not None and len(inspiration.contents) > 0
        if has_file:
            content_type, object_name = self._validate_inspiration(inspiration)

        inspiration_url = None
        if has_file:
            key = build_object_key("inspirations", object_name)
            try:
                inspiration_url = self.storage.put(key, inspiration.contents, content_type)
            except Exception as e:
                logger.error(f"❌ Inspiration upload failed: {e}")
                raise HTTPException(status_code=500, detail="Failed to create booking") from e

        try:
            booking = self.repo.create_booking(
                self.db,
                booking_date=day,
                start_time=data.selectedTime,
                duration_minutes=selection.total_duration,
                client_name=data.userInfo.name,
                client_phone=data.userInfo.phone,
                services=selection.names,
                total_cost=selection.total_cost,
                inspiration_url=inspiration_url,
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to save booking: {e}")
            if inspiration_url:
                self._discard_upload(inspiration_url)
            raise HTTPException(status_code=500, detail="Failed to create booking") from e

        logger.info(f"✅ Booking {booking.id} created for {day} at {booking.start_time}")

        message = build_confirmation_message(
            client_name=booking.client_name,
            service_names=selection.names,
            day=day,
            start_time=booking.start_time,
            total_cost=selection.total_cost,
        )
        return booking, build_whatsapp_url(message)

    def _discard_upload(self, url: str) -> None:
        """Best-effort removal of a blob whose booking row was never written"""
        try:
            self.storage.delete(url)
        except Exception as e:
            logger.error(f"❌ Could not remove orphaned upload {url}: {e}")
