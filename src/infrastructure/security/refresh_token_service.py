"""Refresh token service.

Generates opaque refresh tokens that carry their family id.

Architecture:
    - Infrastructure service (no protocol needed - not a domain boundary)
    - Used by application handlers directly
    - Token lineage is tracked by the token family tracker, not here

Token Strategy:
    - Format: ``{family_id}.{secret}``
    - Secret: 32-byte random string (urlsafe base64)
    - Rotated on every use; the new token keeps the family id
"""

import secrets

from uuid_extensions import uuid7

from src.core.constants import REFRESH_TOKEN_SEPARATOR, TOKEN_BYTES


def new_family_id() -> str:
    """Mint an opaque, time-ordered family identifier (uuid7 hex)."""
    return uuid7().hex


class RefreshTokenService:
    """Refresh token generation and parsing service.

    Usage:
        service = RefreshTokenService(expiration_days=30)

        token = service.generate_token(family_id)
        family_id = service.parse_family_id(token)
    """

    def __init__(self, expiration_days: int = 30) -> None:
        """Initialize refresh token service.

        Args:
            expiration_days: Token expiration in days (default: 30).
        """
        self._expiration_days = expiration_days

    def new_family_id(self) -> str:
        return new_family_id()

    def generate_token(self, family_id: str) -> str:
        """Generate a refresh token bound to a family.

        Args:
            family_id: Family the token belongs to (must not contain the
                separator).

        Returns:
            Plain token to return to the client.

        Raises:
            ValueError: If family_id is empty or contains the separator.
        """
        if not family_id or REFRESH_TOKEN_SEPARATOR in family_id:
            raise ValueError("family_id must be non-empty and separator-free")
        secret = secrets.token_urlsafe(TOKEN_BYTES)
        return f"{family_id}{REFRESH_TOKEN_SEPARATOR}{secret}"

    def parse_family_id(self, token: str) -> str | None:
        """Extract the family id from a refresh token.

        Returns:
            Family id, or None when the token is malformed.
        """
        family_id, separator, secret = token.strip().partition(
            REFRESH_TOKEN_SEPARATOR
        )
        if not separator or not family_id or not secret:
            return None
        return family_id

    @property
    def ttl_seconds(self) -> int:
        """Token lifetime in seconds."""
        return self._expiration_days * 24 * 60 * 60
