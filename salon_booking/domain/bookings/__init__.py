"""Bookings domain - Slot availability and booking creation"""

from .router import router

__all__ = ["router"]
