"""Security infrastructure adapters.

This package contains security-related infrastructure implementations:
- Refresh token family tracking (Redis)
- Issuer classification of bearer tokens (PyJWT, claims only)
- Refresh token generation (opaque ``{family_id}.{secret}`` tokens)
"""

from src.infrastructure.security.issuer_classifier import IssuerClassifier
from src.infrastructure.security.refresh_token_service import RefreshTokenService
from src.infrastructure.security.token_family_tracker import (
    RedisTokenFamilyTracker,
)

__all__ = [
    "IssuerClassifier",
    "RedisTokenFamilyTracker",
    "RefreshTokenService",
]
