"""structlog-backed logger writing to stdout.

Development gets the colored console renderer; every other environment
gets one JSON object per line. Values under sensitive keys are masked
before rendering.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

SENSITIVE_KEYS = frozenset(
    {"password", "refresh_token", "access_token", "token", "authorization"}
)
REDACTED = "***"


def redact_sensitive_values(
    _logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Replace the value of any SENSITIVE_KEYS entry with REDACTED."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def _min_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _with_exception(context: dict[str, Any], error: Exception | None) -> dict[str, Any]:
    if error is not None:
        context.update(error_type=type(error).__name__, error_message=str(error))
    return context


class ConsoleAdapter:
    """LoggerProtocol adapter.

    Args:
        use_json: Render JSON lines instead of the console format.
        level: Lowest level emitted. Unrecognised names mean INFO.
    """

    def __init__(self, *, use_json: bool = False, level: str = "INFO") -> None:
        renderer: structlog.types.Processor = (
            structlog.processors.JSONRenderer()
            if use_json
            else structlog.dev.ConsoleRenderer(colors=True)
        )
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                redact_sensitive_values,
                renderer,
            ],
            wrapper_class=structlog.make_filtering_bound_logger(_min_level(level)),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=True,
        )
        self._logger = structlog.get_logger()

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._logger.error(message, **_with_exception(context, error))

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._logger.critical(message, **_with_exception(context, error))

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Child adapter sharing the configuration, with context bound."""
        child = ConsoleAdapter.__new__(ConsoleAdapter)
        child._logger = self._logger.bind(**context)
        return child
