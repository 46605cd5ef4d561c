"""Process-local event bus.

Carries credential rotation notices from the CredentialStore to the
connection pool drainer, and token theft signals from the refresh flow to
the logging handler. Everything runs on one event loop; nothing leaves the
process.

Example:
    >>> bus = InMemoryEventBus(logger=get_logger())
    >>> bus.subscribe(DatabaseCredentialsRotated, drainer.handle_rotation)
    >>> await bus.publish(DatabaseCredentialsRotated(...))
"""

import asyncio
from collections import defaultdict
from collections.abc import Sequence

from src.domain.events.base_event import DomainEvent
from src.domain.protocols.event_bus_protocol import EventHandler
from src.domain.protocols.logger_protocol import LoggerProtocol


def _handler_label(handler: EventHandler) -> str:
    qualname = getattr(handler, "__qualname__", None)
    return qualname or getattr(handler, "__name__", None) or repr(handler)


class InMemoryEventBus:
    """EventBusProtocol adapter keyed by exact event class.

    Subscribers of a type run concurrently on publish. A subscriber that
    raises is reported at warning level and never reaches the publisher, so
    a broken drainer cannot stall a credential reload.

    Not thread-safe.
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._subscribers: defaultdict[type[DomainEvent], list[EventHandler]] = (
            defaultdict(list)
        )
        self._logger = logger

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Add handler for event_type. Subclasses of event_type do not match.

        Registering the same handler twice makes it run twice.
        """
        self._subscribers[event_type].append(handler)

    def unsubscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> bool:
        """Drop one registration of handler.

        Returns:
            False when handler was not registered for event_type.
        """
        registered = self._subscribers.get(event_type, [])
        try:
            registered.remove(handler)
        except ValueError:
            return False
        if not registered:
            self._subscribers.pop(event_type, None)
        return True

    def handler_count(self, event_type: type[DomainEvent]) -> int:
        return len(self._subscribers.get(event_type, ()))

    async def publish(self, event: DomainEvent) -> None:
        """Deliver event to every handler registered for its class.

        The handler list is copied before delivery; subscription changes
        made by a running handler apply to the next publish.
        """
        handlers = tuple(self._subscribers.get(type(event), ()))
        if not handlers:
            return

        name = type(event).__name__
        self._logger.debug(
            "event_publishing",
            event_type=name,
            event_id=str(event.event_id),
            handler_count=len(handlers),
        )
        outcomes = await asyncio.gather(
            *[handler(event) for handler in handlers], return_exceptions=True
        )
        self._report_failures(event, handlers, outcomes)

    def _report_failures(
        self,
        event: DomainEvent,
        handlers: Sequence[EventHandler],
        outcomes: Sequence[object],
    ) -> None:
        for handler, outcome in zip(handlers, outcomes, strict=True):
            if not isinstance(outcome, Exception):
                continue
            self._logger.warning(
                "event_handler_failed",
                event_type=type(event).__name__,
                event_id=str(event.event_id),
                handler_name=_handler_label(handler),
                error_type=type(outcome).__name__,
                error_message=str(outcome),
            )
