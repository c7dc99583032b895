"""Portfolio domain - Photo gallery shown to clients, managed by the admin"""

from .router import router

__all__ = ["router"]
