"""RotateRefreshToken command handler.

Implements the token family caller protocol:

1. Parse the family id from the presented token
2. Family revoked -> Failure(TOKEN_FAMILY_REVOKED), client must log in again
3. Token is not the latest of a family that was never issued (or has
   expired) -> Failure(TOKEN_INVALID); nothing is written, nothing published
4. Token is not the latest of a live family -> theft: revoke the whole
   family, publish RefreshTokenReuseDetected, Failure(AUTHENTICATION_FAILED)
   with no hint
5. Token is the latest -> generate the next token, register it in the same
   family, Success(IssuedRefreshToken)

Any shared store failure is returned as is: the refresh fails closed.
"""

from src.application.commands.refresh_token_commands import (
    IssuedRefreshToken,
    RotateRefreshToken,
)
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, DomainError
from src.core.result import Failure, Result, Success
from src.domain.errors import TokenFamilyError
from src.domain.events import RefreshTokenReuseDetected
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.token_family_protocol import TokenFamilyTrackerProtocol
from src.infrastructure.security.refresh_token_service import RefreshTokenService

REASON_STALE_TOKEN_REUSE = "stale_token_reuse"


def _authentication_failed() -> Failure[AuthenticationError]:
    return Failure(
        error=AuthenticationError(
            code=ErrorCode.AUTHENTICATION_FAILED,
            message="Authentication failed",
        )
    )


def _token_invalid(message: str) -> Failure[AuthenticationError]:
    return Failure(
        error=AuthenticationError(code=ErrorCode.TOKEN_INVALID, message=message)
    )


class RotateRefreshTokenHandler:
    """Handler for RotateRefreshToken command."""

    def __init__(
        self,
        tracker: TokenFamilyTrackerProtocol,
        refresh_token_service: RefreshTokenService,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        family_ttl_seconds: int,
    ) -> None:
        self._tracker = tracker
        self._refresh_token_service = refresh_token_service
        self._event_bus = event_bus
        self._logger = logger
        self._family_ttl_seconds = family_ttl_seconds

    async def handle(
        self, cmd: RotateRefreshToken
    ) -> Result[IssuedRefreshToken, DomainError]:
        """Handle RotateRefreshToken command.

        Returns:
            Success(IssuedRefreshToken) with the next token of the family.
            Failure(AuthenticationError) for malformed or replayed tokens.
            Failure(TokenFamilyError) for revoked families or store outages.

        Side Effects:
            - Revokes the family and publishes RefreshTokenReuseDetected when
              a superseded token is presented.
        """
        family_id = self._refresh_token_service.parse_family_id(cmd.refresh_token)
        if family_id is None:
            return _token_invalid("Malformed refresh token")

        revoked = await self._tracker.is_revoked(family_id)
        if isinstance(revoked, Failure):
            return revoked
        if revoked.value:
            self._logger.warning("refresh_rejected_family_revoked", family_id=family_id)
            return Failure(
                error=TokenFamilyError(
                    code=ErrorCode.TOKEN_FAMILY_REVOKED,
                    message="Refresh token family has been revoked",
                    family_id=family_id,
                )
            )

        latest = await self._tracker.is_latest(family_id, cmd.refresh_token)
        if isinstance(latest, Failure):
            return latest
        if not latest.value:
            return await self._reject_stale(family_id)

        next_token = self._refresh_token_service.generate_token(family_id)
        registered = await self._tracker.register(
            next_token, self._family_ttl_seconds, family_id
        )
        if isinstance(registered, Failure):
            return registered

        registration = registered.value
        self._logger.info(
            "refresh_token_rotated",
            family_id=family_id,
            sequence=registration.sequence,
        )
        return Success(
            value=IssuedRefreshToken(
                refresh_token=next_token,
                family_id=registration.family_id,
                sequence=registration.sequence,
                expires_in=self._refresh_token_service.ttl_seconds,
            )
        )

    async def _reject_stale(
        self, family_id: str
    ) -> Failure[AuthenticationError] | Failure[TokenFamilyError]:
        exists = await self._tracker.family_exists(family_id)
        if isinstance(exists, Failure):
            return exists
        if not exists.value:
            self._logger.info("refresh_rejected_unknown_family", family_id=family_id)
            return _token_invalid("Invalid refresh token")

        self._logger.warning("refresh_token_reuse_detected", family_id=family_id)

        revocation = await self._tracker.revoke_family(
            family_id, self._family_ttl_seconds
        )
        if isinstance(revocation, Failure):
            return revocation

        await self._event_bus.publish(
            RefreshTokenReuseDetected(
                family_id=family_id,
                revoked_count=revocation.value.revoked_count,
                reason=REASON_STALE_TOKEN_REUSE,
            )
        )
        return _authentication_failed()
