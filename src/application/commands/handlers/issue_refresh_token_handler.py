"""IssueRefreshToken command handler.

Flow:
1. Mint a family id
2. Generate a token bound to it
3. Register the token as sequence 0
4. Return Success(IssuedRefreshToken)
"""

from src.application.commands.refresh_token_commands import (
    IssueRefreshToken,
    IssuedRefreshToken,
)
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.token_family_protocol import TokenFamilyTrackerProtocol
from src.infrastructure.security.refresh_token_service import RefreshTokenService


class IssueRefreshTokenHandler:
    """Handler for IssueRefreshToken command."""

    def __init__(
        self,
        tracker: TokenFamilyTrackerProtocol,
        refresh_token_service: RefreshTokenService,
        logger: LoggerProtocol,
        family_ttl_seconds: int,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            tracker: Token family tracker.
            refresh_token_service: Token generator.
            logger: Structured logger.
            family_ttl_seconds: Family lifetime (<= 0 means no expiry).
        """
        self._tracker = tracker
        self._refresh_token_service = refresh_token_service
        self._logger = logger
        self._family_ttl_seconds = family_ttl_seconds

    async def handle(
        self, cmd: IssueRefreshToken
    ) -> Result[IssuedRefreshToken, DomainError]:
        """Handle IssueRefreshToken command.

        Returns:
            Success(IssuedRefreshToken), or Failure(TokenFamilyError) when the
            shared store is unavailable.
        """
        family_id = self._refresh_token_service.new_family_id()
        token = self._refresh_token_service.generate_token(family_id)

        registered = await self._tracker.register(
            token, self._family_ttl_seconds, family_id
        )
        if isinstance(registered, Failure):
            return registered

        registration = registered.value
        self._logger.info(
            "refresh_token_issued",
            user_id=cmd.user_id,
            family_id=registration.family_id,
        )
        return Success(
            value=IssuedRefreshToken(
                refresh_token=token,
                family_id=registration.family_id,
                sequence=registration.sequence,
                expires_in=self._refresh_token_service.ttl_seconds,
            )
        )
