"""Admin authentication dependency.

Admin endpoints are guarded by a shared key sent in the X-Admin-Key header
and compared in constant time with ADMIN_API_KEY.

Responses:
    503 - ADMIN_API_KEY is not configured (admin surface disabled)
    401 - header missing or wrong
"""

import hmac

from fastapi import Depends, Header, HTTPException, status

from src.core.config import Settings, get_settings

ADMIN_KEY_HEADER = "X-Admin-Key"


async def require_admin_key(
    x_admin_key: str | None = Header(default=None, alias=ADMIN_KEY_HEADER),
    settings: Settings = Depends(get_settings),
) -> None:
    """Reject the request unless it carries the configured admin key.

    Raises:
        HTTPException: 503 when no key is configured, 401 on mismatch.
    """
    expected = settings.admin_api_key
    if not expected:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin API is not configured",
        )
    if x_admin_key is None or not hmac.compare_digest(
        x_admin_key.encode(), expected.encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing admin key",
            headers={"WWW-Authenticate": ADMIN_KEY_HEADER},
        )
