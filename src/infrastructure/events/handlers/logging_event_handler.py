"""Logging event handler for domain events.

Structured logging for the security-relevant domain events.

Log Levels:
    - INFO: credential rotation and drain completion (normal operations)
    - WARNING: explicit family revocation
    - ERROR: refresh token reuse (theft signal)

Usage:
    >>> logging_handler = LoggingEventHandler(logger=get_logger())
    >>> logging_handler.subscribe(get_event_bus())
    >>> # ... at shutdown
    >>> logging_handler.unsubscribe(get_event_bus())
"""

from collections.abc import Callable
from typing import Any

from src.domain.events import (
    DatabaseConnectionsDrained,
    DatabaseCredentialsRotated,
    RefreshTokenReuseDetected,
    TokenFamilyRevoked,
)
from src.domain.events.base_event import DomainEvent
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol


class LoggingEventHandler:
    """Event handler for structured logging of domain events.

    Attributes:
        _logger: Logger protocol implementation (from container).
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        """Initialize logging handler with logger.

        Args:
            logger: Logger protocol implementation from container.
        """
        self._logger = logger

    def _subscriptions(self) -> list[tuple[type[DomainEvent], Callable[[Any], Any]]]:
        return [
            (DatabaseCredentialsRotated, self.handle_credentials_rotated),
            (DatabaseConnectionsDrained, self.handle_connections_drained),
            (RefreshTokenReuseDetected, self.handle_refresh_token_reuse_detected),
            (TokenFamilyRevoked, self.handle_token_family_revoked),
        ]

    def subscribe(self, event_bus: EventBusProtocol) -> None:
        """Register every handler of this class on the bus."""
        for event_type, handler in self._subscriptions():
            event_bus.subscribe(event_type, handler)

    def unsubscribe(self, event_bus: EventBusProtocol) -> None:
        """Remove every handler of this class from the bus."""
        for event_type, handler in self._subscriptions():
            event_bus.unsubscribe(event_type, handler)

    # =========================================================================
    # Credential Event Handlers
    # =========================================================================

    async def handle_credentials_rotated(
        self,
        event: DatabaseCredentialsRotated,
    ) -> None:
        """Log credential rotation (INFO level). Never logs the password."""
        self._logger.info(
            "database_credentials_rotated",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            username=event.credential.username,
            previous_username=event.previous_username,
            lease_id=event.credential.lease_id,
        )

    async def handle_connections_drained(
        self,
        event: DatabaseConnectionsDrained,
    ) -> None:
        """Log end of a drain grace window (INFO level)."""
        self._logger.info(
            "database_connections_drained",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            username=event.username,
            grace_seconds=event.grace_seconds,
            manual=event.manual,
        )

    # =========================================================================
    # Token Family Event Handlers
    # =========================================================================

    async def handle_refresh_token_reuse_detected(
        self,
        event: RefreshTokenReuseDetected,
    ) -> None:
        """Log refresh token reuse (ERROR level)."""
        self._logger.error(
            "refresh_token_reuse_detected",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            family_id=event.family_id,
            revoked_count=event.revoked_count,
            reason=event.reason,
        )

    async def handle_token_family_revoked(
        self,
        event: TokenFamilyRevoked,
    ) -> None:
        """Log explicit family revocation (WARNING level)."""
        self._logger.warning(
            "token_family_revocation_requested",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            family_id=event.family_id,
            revoked_count=event.revoked_count,
            initiated_by=event.initiated_by,
        )
