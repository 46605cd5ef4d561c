"""Event handlers for infrastructure integration.

Handlers:
    - LoggingEventHandler: Structured logging with appropriate severity levels

All handlers follow fail-open design - one handler failure doesn't break others.
"""

from src.infrastructure.events.handlers.logging_event_handler import LoggingEventHandler

__all__ = ["LoggingEventHandler"]
