"""RevokeTokenFamily command handler.

Explicit revocation (logout, administrator response to an incident). Every
token of the family, past and present, is rejected until the revocation
marker expires.
"""

from src.application.commands.refresh_token_commands import RevokeTokenFamily
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities.token_family import TokenFamilyRevocation
from src.domain.events import TokenFamilyRevoked
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.token_family_protocol import TokenFamilyTrackerProtocol
from src.infrastructure.security.refresh_token_service import RefreshTokenService


class RevokeTokenFamilyHandler:
    """Handler for RevokeTokenFamily command."""

    def __init__(
        self,
        tracker: TokenFamilyTrackerProtocol,
        refresh_token_service: RefreshTokenService,
        event_bus: EventBusProtocol,
        family_ttl_seconds: int,
    ) -> None:
        self._tracker = tracker
        self._refresh_token_service = refresh_token_service
        self._event_bus = event_bus
        self._family_ttl_seconds = family_ttl_seconds

    async def handle(
        self, cmd: RevokeTokenFamily
    ) -> Result[TokenFamilyRevocation, DomainError]:
        """Handle RevokeTokenFamily command.

        Returns:
            Success(TokenFamilyRevocation), Failure(ValidationError) for a
            malformed token, or Failure(TokenFamilyError) on store outage.

        Side Effects:
            - Publishes TokenFamilyRevoked on success.
        """
        family_id = self._refresh_token_service.parse_family_id(cmd.refresh_token)
        if family_id is None:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_INPUT,
                    message="Malformed refresh token",
                    field="refresh_token",
                )
            )

        revoked = await self._tracker.revoke_family(
            family_id, self._family_ttl_seconds
        )
        if isinstance(revoked, Failure):
            return revoked

        await self._event_bus.publish(
            TokenFamilyRevoked(
                family_id=family_id,
                revoked_count=revoked.value.revoked_count,
                initiated_by=cmd.initiated_by,
            )
        )
        return Success(value=revoked.value)
