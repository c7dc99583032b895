"""Catalog domain - Services offered by the studio and business details"""

from .router import router

__all__ = ["router"]
