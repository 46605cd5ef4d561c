"""Infrastructure event implementations.

Event Bus:
    - InMemoryEventBus: Process-local event bus with fail-open behavior

Event Handlers:
    - LoggingEventHandler: Structured logging for security-relevant events
"""

from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus

__all__ = [
    "InMemoryEventBus",
]
