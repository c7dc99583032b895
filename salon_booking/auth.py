import hmac
import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import ADMIN_API_TOKEN

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> None:
    """Allow the request only with the configured admin bearer token"""
    if not ADMIN_API_TOKEN:
        logger.error("❌ ADMIN_API_TOKEN not configured")
        raise HTTPException(status_code=500, detail="Admin access not configured")

    if credentials is None:
        logger.warning("🔒 Rejected admin request without Bearer token")
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not hmac.compare_digest(credentials.credentials.encode(), ADMIN_API_TOKEN.encode()):
        logger.warning("🔒 Rejected admin request with invalid token")
        raise HTTPException(
            status_code=401, detail="Invalid admin token", headers={"WWW-Authenticate": "Bearer"}
        )
