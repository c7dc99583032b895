"""Shared validation utilities"""

import mimetypes
import os
import re
from datetime import date, datetime
from typing import Optional

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def validate_br_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a Brazilian phone number to E.164 format.

    Args:
        phone: Phone number string in various formats, e.g. "(73) 98106-7554"

    Returns:
        Normalized phone number in E.164 format (+55DDXXXXXXXXX)

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    # Remove all non-digit characters
    digits = re.sub(r"\D", "", phone)

    # Handle +55 prefix
    if digits.startswith("55") and len(digits) in (12, 13):
        digits = digits[2:]

    # Area code (2 digits) + 8 digit landline or 9 digit mobile
    if len(digits) not in (10, 11):
        raise ValueError("Phone number must have an area code followed by 8 or 9 digits")

    return f"+55{digits}"


def validate_iso_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD date string.

    Raises:
        ValueError: If the value is not a valid calendar date
    """
    if not value or not isinstance(value, str):
        raise ValueError("Date is required")
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValueError("Invalid date format. Expected YYYY-MM-DD") from None


def validate_time_hhmm(value: str) -> str:
    """Validate a 24h HH:MM time string and return it stripped."""
    if not value or not isinstance(value, str):
        raise ValueError("Time is required")
    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Invalid time format. Expected HH:MM")
    return value


# Raster formats only, no SVG
ALLOWED_IMAGE_CONTENT_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
    "image/gif",
    "image/heic",
    "image/heif",
    "image/avif",
}


def validate_image_content_type(content_type: Optional[str]) -> str:
    """
    Normalize an upload's content type and check it against the allowed images.

    Raises:
        ValueError: If the type is missing or not an allowed raster image
    """
    normalized = (content_type or "").split(";")[0].strip().lower()
    if normalized not in ALLOWED_IMAGE_CONTENT_TYPES:
        raise ValueError("Only JPEG, PNG, WebP, GIF, HEIC or AVIF images are allowed")
    # Non-standard alias some phones send
    if normalized == "image/jpg":
        return "image/jpeg"
    return normalized


ALLOWED_IMAGE_EXTENSIONS = {
    ".jpg",
    ".jpeg",
    ".png",
    ".webp",
    ".gif",
    ".heic",
    ".heif",
    ".avif",
}


def image_extension(filename: Optional[str], content_type: str) -> str:
    """
    Pick the stored extension from the filename, falling back to the MIME type.

    Raises:
        ValueError: If neither gives an allowed image extension
    """
    ext = os.path.splitext(filename or "")[1].lower()
    if ext in ALLOWED_IMAGE_EXTENSIONS:
        return ext

    guessed = (mimetypes.guess_extension(content_type) or "").lower()
    if guessed == ".jpe":
        guessed = ".jpg"
    if guessed in ALLOWED_IMAGE_EXTENSIONS:
        return guessed

    raise ValueError("Unsupported image type")
