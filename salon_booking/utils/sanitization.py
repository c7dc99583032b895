import html
import re
from typing import Optional


def sanitize_string(value: Optional[str]) -> Optional[str]:
    """
    Sanitize a string by escaping HTML special characters to prevent XSS.
    Returns None if input is None.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        return value
    return html.escape(str(value), quote=True)


def safe_filename(filename: Optional[str], max_len: int = 100, default: str = "upload") -> str:
    """Reduce a client-supplied filename to a storage-safe basename."""
    name = (filename or "").replace("\\", "/").split("/")[-1].strip()
    name = re.sub(r"[^A-Za-z0-9._-]+", "-", name).strip("-.")
    return name[-max_len:] or default
