"""Slot availability - which start times are still free on a given day.

Candidate start times step through the business window at a fixed interval.
A candidate survives when the whole appointment fits before closing time and
its half-open interval [start, start + duration) does not intersect any
existing booking, so back-to-back appointments are allowed.
"""

from datetime import date
from typing import Iterable, NamedTuple, Optional

WORK_DAY_START_MINUTES = 7 * 60  # 07:00
WORK_DAY_END_MINUTES = 18 * 60  # 18:00
SLOT_INTERVAL_MINUTES = 30


class ExistingBooking(NamedTuple):
    start_time: str  # HH:MM
    duration_minutes: int
    booking_date: Optional[date] = None


def time_to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def compute_available_slots(
    day: date,
    total_duration_minutes: int,
    existing_bookings: Iterable[ExistingBooking],
    window_start_minutes: int = WORK_DAY_START_MINUTES,
    window_end_minutes: int = WORK_DAY_END_MINUTES,
    interval_minutes: int = SLOT_INTERVAL_MINUTES,
) -> list[str]:
    """
    Compute the ordered list of free start times for a day.

    Args:
        day: Date being booked
        total_duration_minutes: Combined duration of the selected services
        existing_bookings: Booked intervals; a ``booking_date`` other than
            ``day`` excludes the booking from the check
        window_start_minutes: Opening time as minutes from midnight
        window_end_minutes: Closing time as minutes from midnight
        interval_minutes: Step between candidate start times

    Returns:
        Start times as "HH:MM" strings in ascending order
    """
    if total_duration_minutes <= 0 or interval_minutes <= 0:
        return []

    busy = []
    for booking in existing_bookings:
        booking_day = getattr(booking, "booking_date", None)
        if booking_day is not None and booking_day != day:
            continue
        start = time_to_minutes(booking.start_time)
        busy.append((start, start + int(booking.duration_minutes)))

    slots = []
    for slot_start in range(window_start_minutes, window_end_minutes, interval_minutes):
        slot_end = slot_start + total_duration_minutes
        if slot_end > window_end_minutes:
            break

        if any(slot_start < busy_end and slot_end > busy_start for busy_start, busy_end in busy):
            continue

        slots.append(minutes_to_time(slot_start))

    return slots
