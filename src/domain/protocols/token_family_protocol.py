"""Token family tracker protocol.

Shared-state tracker of refresh token lineages. Every method returns a
Result; a Failure with TOKEN_STORE_UNAVAILABLE means the shared store could
not be consulted and the caller MUST reject the request (fail closed).

Caller protocol (refresh):
    1. is_revoked(family_id) -> True: reject.
    2. is_latest(family_id, token) -> False: reject. Only when
       family_exists(family_id) is True is it a replay: revoke_family(...).
    3. Otherwise issue a new token and register() it in the same family.
"""

from typing import Protocol

from src.core.result import Result
from src.domain.entities.token_family import (
    TokenFamilyRegistration,
    TokenFamilyRevocation,
)
from src.domain.errors import TokenFamilyError


class TokenFamilyTrackerProtocol(Protocol):
    """Refresh token family tracking."""

    async def register(
        self,
        token: str,
        ttl_seconds: int,
        family_id: str | None = None,
    ) -> Result[TokenFamilyRegistration, TokenFamilyError]:
        """Append token to a family (minting the family when family_id is None).

        Fails with TOKEN_FAMILY_REVOKED when the family is revoked.
        """
        ...

    async def is_latest(
        self, family_id: str, token: str
    ) -> Result[bool, TokenFamilyError]:
        """Check whether token is the most recently registered one."""
        ...

    async def family_exists(self, family_id: str) -> Result[bool, TokenFamilyError]:
        """Check whether the family still holds any registered token."""
        ...

    async def is_revoked(self, family_id: str) -> Result[bool, TokenFamilyError]:
        """Check whether the family is currently revoked."""
        ...

    async def revoke_family(
        self, family_id: str, ttl_seconds: int
    ) -> Result[TokenFamilyRevocation, TokenFamilyError]:
        """Revoke the family for ttl_seconds and return every token it issued."""
        ...
