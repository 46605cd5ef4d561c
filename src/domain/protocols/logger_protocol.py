"""Structured logger port.

Callers pass an event name plus keyword context, never a formatted string.
Passwords and raw refresh tokens must not appear in context; usernames,
lease ids, family ids and counters may.

Example:
    logger = get_logger()
    logger.info("credentials_loaded", username=credential.username)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Logger used by every engine and adapter."""

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Something degraded; work continues."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Record a failed operation.

        Args:
            message: Event name.
            error: Exception behind the failure. Adapters add its type and
                text as error_type and error_message.
            **context: Extra fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Like error, for failures that need an operator now."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Child logger that adds context to every entry.

        Example:
            run_logger = logger.bind(run_id=run_id, dry_run=True)
            run_logger.info("batch_started", page=0)
        """
        ...
