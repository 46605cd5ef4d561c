"""Token family error types.

Usage:
    from src.domain.errors import TokenFamilyError

    return Failure(error=TokenFamilyError(
        code=ErrorCode.TOKEN_FAMILY_REVOKED,
        message="Refresh token family has been revoked",
        family_id=family_id,
    ))
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenFamilyError(DomainError):
    """Token family failure.

    Codes:
        TOKEN_FAMILY_REVOKED: terminal, the client must re-authenticate.
        TOKEN_STORE_UNAVAILABLE: shared store unreachable, the calling
            operation fails closed.

    Attributes:
        family_id: Family concerned, when known.
    """

    family_id: str | None = None
