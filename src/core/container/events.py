"""Event bus dependency factory.

Application-scoped singleton for domain event publishing. Subscriptions are
made by the application lifespan (startup) and removed at shutdown, not here.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.protocols.event_bus_protocol import EventBusProtocol
    from src.infrastructure.events.handlers.logging_event_handler import (
        LoggingEventHandler,
    )


@lru_cache()
def get_event_bus() -> "EventBusProtocol":
    """Get event bus singleton (app-scoped).

    Returns:
        Event bus implementing EventBusProtocol.

    Usage:
        event_bus = get_event_bus()
        await event_bus.publish(DatabaseCredentialsRotated(...))
    """
    from src.core.container.infrastructure import get_logger
    from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus

    return InMemoryEventBus(logger=get_logger())


@lru_cache()
def get_logging_event_handler() -> "LoggingEventHandler":
    """Get the structured logging event handler singleton."""
    from src.core.container.infrastructure import get_logger
    from src.infrastructure.events.handlers.logging_event_handler import (
        LoggingEventHandler,
    )

    return LoggingEventHandler(logger=get_logger())
