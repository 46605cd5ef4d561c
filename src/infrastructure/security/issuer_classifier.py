"""Dual-issuer token classification.

Decides whether an incoming bearer token was minted by the legacy in-house
authority or by the external identity provider, so the request can take the
matching validation path.

The classifier only reads claims: the signature is NOT verified here.
Classification picks the validator; the validator verifies.

Rules (first match wins):
    1. Token is not a decodable JWT -> UNKNOWN
    2. ``iss`` equals the external issuer URL -> EXTERNAL
    3. ``iss`` equals the legacy issuer -> LEGACY
    4. Any external-only claim (realm_access, resource_access, azp) -> EXTERNAL
    5. Otherwise -> UNKNOWN

Issuer comparisons are case-insensitive. Deterministic and side-effect free.
"""

from collections.abc import Mapping
from typing import Any

import jwt
from jwt.exceptions import InvalidTokenError

from src.core.constants import BEARER_PREFIX, EXTERNAL_IDP_CLAIMS
from src.domain.enums import TokenIssuerType


class IssuerClassifier:
    """Classify bearer tokens by issuer.

    Usage:
        classifier = IssuerClassifier(
            external_issuer="https://idp.example.com/realms/identity",
            legacy_issuer="trustshift-identity",
        )
        issuer = classifier.classify(authorization_header)
    """

    def __init__(self, external_issuer: str | None, legacy_issuer: str) -> None:
        """Initialize classifier.

        Args:
            external_issuer: Canonical external issuer URL
                (``{base_url}/realms/{realm}``), or None when not configured.
            legacy_issuer: Issuer string of the legacy authority.
        """
        self._external_issuer = (
            external_issuer.rstrip("/").casefold() if external_issuer else None
        )
        self._legacy_issuer = legacy_issuer.casefold() if legacy_issuer else None

    def classify(self, token: str | None) -> TokenIssuerType:
        """Classify a raw token or ``Bearer`` header value.

        Never raises: anything that is not a decodable JWT is UNKNOWN.
        """
        claims = self._decode(token)
        if claims is None:
            return TokenIssuerType.UNKNOWN
        return self.classify_claims(claims)

    def classify_claims(self, claims: Mapping[str, Any]) -> TokenIssuerType:
        """Classify an already decoded claim set."""
        issuer = claims.get("iss")
        if isinstance(issuer, str) and issuer.strip():
            normalized = issuer.strip().casefold()
            if self._external_issuer and normalized == self._external_issuer:
                return TokenIssuerType.EXTERNAL
            if self._legacy_issuer and normalized == self._legacy_issuer:
                return TokenIssuerType.LEGACY

        if any(claim in claims for claim in EXTERNAL_IDP_CLAIMS):
            return TokenIssuerType.EXTERNAL

        return TokenIssuerType.UNKNOWN

    def is_external(self, token: str | None) -> bool:
        return self.classify(token) is TokenIssuerType.EXTERNAL

    def is_legacy(self, token: str | None) -> bool:
        return self.classify(token) is TokenIssuerType.LEGACY

    @staticmethod
    def _decode(token: str | None) -> dict[str, Any] | None:
        if not token or not token.strip():
            return None
        raw = token.strip()
        if raw[: len(BEARER_PREFIX)].lower() == BEARER_PREFIX.lower():
            raw = raw[len(BEARER_PREFIX) :].strip()
        if not raw:
            return None
        try:
            claims = jwt.decode(
                raw,
                options={"verify_signature": False, "verify_exp": False},
            )
        except InvalidTokenError:
            return None
        return claims if isinstance(claims, dict) else None
