"""Refresh token family events.

Events:
    - RefreshTokenReuseDetected: a superseded token was presented; the whole
      family was revoked.
    - TokenFamilyRevoked: explicit revocation (logout or admin).
"""

from dataclasses import dataclass

from src.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True, slots=True)
class RefreshTokenReuseDetected(DomainEvent):
    """Replay of a superseded refresh token (theft signal).

    Attributes:
        family_id: Family that was revoked in response.
        revoked_count: Tokens invalidated.
        reason: Why the token was rejected (stale_token_reuse).
    """

    family_id: str
    revoked_count: int
    reason: str


@dataclass(frozen=True, kw_only=True, slots=True)
class TokenFamilyRevoked(DomainEvent):
    """Family revoked on request.

    Attributes:
        family_id: Revoked family.
        revoked_count: Tokens invalidated.
        initiated_by: Who asked for the revocation (e.g. "api.admin.revoke").
    """

    family_id: str
    revoked_count: int
    initiated_by: str
