"""Booking repository - Database operations for bookings"""

from datetime import date

from sqlalchemy.orm import Session

from ...models import Booking
from .availability import ExistingBooking


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def get_busy_intervals(db: Session, booking_date: date) -> list[ExistingBooking]:
        """Start time and duration of every booking on a date"""
        rows = (
            db.query(Booking.start_time, Booking.duration_minutes, Booking.booking_date)
            .filter(Booking.booking_date == booking_date)
            .order_by(Booking.start_time)
            .all()
        )
        return [ExistingBooking(*row) for row in rows]

    @staticmethod
    def get_bookings_for_date(db: Session, booking_date: date) -> list[Booking]:
        return (
            db.query(Booking)
            .filter(Booking.booking_date == booking_date)
            .order_by(Booking.start_time)
            .all()
        )

    @staticmethod
    def create_booking(db: Session, **booking_data) -> Booking:
        """Create a new booking"""
        booking = Booking(**booking_data)
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking
