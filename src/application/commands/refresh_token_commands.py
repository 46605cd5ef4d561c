"""Refresh token commands (CQRS write operations).

All commands are immutable (frozen=True) and use keyword-only arguments
(kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic and return Result types
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class IssueRefreshToken:
    """Issue the first refresh token of a new family (login).

    Attributes:
        user_id: Authenticated user.
    """

    user_id: str


@dataclass(frozen=True, kw_only=True)
class RotateRefreshToken:
    """Exchange a refresh token for the next one in its family.

    Attributes:
        refresh_token: Token presented by the client.
    """

    refresh_token: str


@dataclass(frozen=True, kw_only=True)
class RevokeTokenFamily:
    """Revoke the family a refresh token belongs to (logout, admin action).

    Attributes:
        refresh_token: Any token of the family.
        initiated_by: Caller identity for the audit trail.
    """

    refresh_token: str
    initiated_by: str = "user.logout"


@dataclass(frozen=True, kw_only=True)
class IssuedRefreshToken:
    """Response from a successful issuance or rotation.

    This is a response DTO, not a command.

    Attributes:
        refresh_token: Token to return to the client.
        family_id: Family the token belongs to.
        sequence: Zero-based position in the family.
        expires_in: Token lifetime in seconds.
    """

    refresh_token: str
    family_id: str
    sequence: int
    expires_in: int
