"""Booking domain schemas - Pydantic models for validation"""

import math
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_br_phone, validate_iso_date, validate_time_hhmm


class UserInfo(BaseModel):
    name: str
    phone: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        if len(v) > 255:
            raise ValueError("Name is too long")
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if not v or not v.strip():
            raise ValueError("Phone is required")
        return validate_br_phone(v)


class BookingCreate(BaseModel):
    """Schema for the bookingData JSON sent by the booking wizard"""

    userInfo: UserInfo
    selectedDate: str
    selectedTime: str
    totalDuration: int
    serviceNames: list[str]
    totalCost: float

    @field_validator("selectedDate")
    @classmethod
    def validate_date(cls, v):
        validate_iso_date(v)
        return v.strip()

    @field_validator("selectedTime")
    @classmethod
    def validate_time(cls, v):
        return validate_time_hhmm(v)

    @field_validator("totalDuration")
    @classmethod
    def validate_duration(cls, v):
        if v <= 0:
            raise ValueError("Total duration must be greater than 0")
        return v

    @field_validator("serviceNames")
    @classmethod
    def validate_services(cls, v):
        if not v:
            raise ValueError("Select at least one service")
        return v

    @field_validator("totalCost")
    @classmethod
    def validate_cost(cls, v):
        if not math.isfinite(v):
            raise ValueError("Total cost must be a number")
        if v < 0:
            raise ValueError("Total cost cannot be negative")
        return v

    @property
    def booking_date(self) -> date:
        return validate_iso_date(self.selectedDate)


class ExistingBookingResponse(BaseModel):
    """Busy interval as consumed by the date/time picker"""

    start_time: str
    duration_minutes: int


class AvailabilityResponse(BaseModel):
    date: str
    duration_minutes: int
    closed: bool
    slots: list[str]


class BookingResponse(BaseModel):
    id: int
    bookingDate: date
    startTime: str
    durationMinutes: int
    clientName: str
    clientPhone: str
    services: list[str]
    totalCost: float
    inspirationUrl: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BookingCreatedResponse(BaseModel):
    message: str
    inspirationUrl: Optional[str] = None
    whatsappUrl: str
    booking: BookingResponse
