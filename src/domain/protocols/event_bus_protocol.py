"""Event bus protocol (port) for domain events.

The bus is the in-process notification channel. Subscriptions have an
explicit lifecycle: components subscribe at application startup and
unsubscribe at shutdown.

Usage:
    >>> event_bus = get_event_bus()
    >>> event_bus.subscribe(DatabaseCredentialsRotated, drainer.handle_rotation)
    >>> await event_bus.publish(DatabaseCredentialsRotated(...))
    >>> event_bus.unsubscribe(DatabaseCredentialsRotated, drainer.handle_rotation)
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from src.domain.events.base_event import DomainEvent

EventHandler = Callable[[Any], Awaitable[None]]
"""Async handler called with one event instance. Returns None."""


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations.

    Key Requirements:
        1. Fail-open: one handler failure must NOT prevent other handlers
           from executing.
        2. Handlers registered for an event type only receive events of that
           exact type.
        3. No ordering guarantees between handlers.
    """

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Register handler for an event type."""
        ...

    def unsubscribe(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> bool:
        """Remove a previously registered handler.

        Returns:
            True if the handler was registered, False otherwise.
        """
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Publish event to all handlers registered for its type.

        Never raises because of handler failures.
        """
        ...
