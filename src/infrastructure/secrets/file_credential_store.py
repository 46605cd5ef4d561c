"""File-backed database credential store.

Holds the single current database credential for the process and swaps it
when the secret-delivery agent rewrites the credential file.

State machine:
    UNINITIALIZED -> LOADED             first successful load
    LOADED -> ROTATION_IN_FLIGHT        reload resolved a different username
    ROTATION_IN_FLIGHT -> DRAIN_GRACE   drainer cleared the pool
    DRAIN_GRACE -> LOADED               grace window ended

Concurrency:
    - Reloads are serialized by one asyncio.Lock (single writer)
    - Readers take the frozen snapshot without locking once loaded
    - Concurrent get_current() calls before the first load share one load
    - Change signals are debounced: each signal restarts the quiet window and
      only the last signal of a burst reloads

Failure policy:
    A missing, unreadable or malformed file is logged and the previous
    credential stays authoritative.
"""

import asyncio
import contextlib
from pathlib import Path

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities.database_credential import DatabaseCredential
from src.domain.enums import CredentialStoreState
from src.domain.errors import CredentialError
from src.domain.events import DatabaseCredentialsRotated
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import SecretSourceError
from src.infrastructure.secrets.credential_file_reader import read_credential_file
from src.infrastructure.secrets.credential_watcher import (
    WATCH_MODE_NATIVE,
    CredentialFileWatcher,
)


class FileCredentialStore:
    """Credential store fed by a JSON secret file.

    Note: Does NOT inherit from CredentialStoreProtocol (uses structural
    typing).

    Usage:
        store = FileCredentialStore(
            path=Path(settings.database_credentials_path),
            event_bus=get_event_bus(),
            logger=get_logger(),
        )
        await store.start()
        result = await store.get_current()
        ...
        await store.stop()
    """

    def __init__(
        self,
        path: Path,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        *,
        debounce_ms: int = 250,
        watch_mode: str = WATCH_MODE_NATIVE,
        poll_interval_seconds: float = 1.0,
    ) -> None:
        """Initialize store (nothing is read until start() or get_current()).

        Args:
            path: Credential file path.
            event_bus: Channel for DatabaseCredentialsRotated.
            logger: Structured logger.
            debounce_ms: Quiet window after the last change signal.
            watch_mode: "native" (OS notifications) or "poll".
            poll_interval_seconds: Timestamp check interval in poll mode.
        """
        self._path = path
        self._event_bus = event_bus
        self._logger = logger
        self._debounce_seconds = max(0, debounce_ms) / 1000
        self._lock = asyncio.Lock()
        self._current: DatabaseCredential | None = None
        self._state = CredentialStoreState.UNINITIALIZED
        self._pending_reload: asyncio.Task[None] | None = None
        self._reloads: set[asyncio.Task[None]] = set()
        self._watcher = CredentialFileWatcher(
            path,
            self.notify_change,
            logger,
            mode=watch_mode,
            poll_interval_seconds=poll_interval_seconds,
        )

    @property
    def path(self) -> Path:
        return self._path

    @property
    def state(self) -> CredentialStoreState:
        return self._state

    @property
    def current(self) -> DatabaseCredential | None:
        return self._current

    @property
    def watcher(self) -> CredentialFileWatcher:
        return self._watcher

    # =========================================================================
    # Reads
    # =========================================================================

    async def get_current(self) -> Result[DatabaseCredential, CredentialError]:
        """Return the current credential, loading it on first use.

        Returns:
            Success(DatabaseCredential) snapshot.
            Failure(CredentialError) with CREDENTIALS_UNAVAILABLE while the
            secret has not been delivered (retryable).
        """
        current = self._current
        if current is not None:
            return Success(value=current)

        async with self._lock:
            # Another caller may have loaded while this one waited
            if self._current is None:
                loaded, _ = await self._load_locked()
                if isinstance(loaded, Failure):
                    return Failure(
                        error=CredentialError(
                            code=ErrorCode.CREDENTIALS_UNAVAILABLE,
                            message="Database credentials are not yet available",
                            path=str(self._path),
                            details={"cause": loaded.error.message},
                        )
                    )
            return Success(value=self._current)

    # =========================================================================
    # Reloads
    # =========================================================================

    async def reload(self) -> Result[DatabaseCredential, CredentialError]:
        """Re-read the credential file now.

        Publishes DatabaseCredentialsRotated after the lock is released when
        the username changed.

        Returns:
            Success with the credential now current, or Failure when the file
            could not be used (the previous credential stays current).
        """
        async with self._lock:
            loaded, rotation = await self._load_locked()

        if rotation is not None:
            await self._event_bus.publish(rotation)

        if isinstance(loaded, Failure):
            return Failure(
                error=CredentialError(
                    code=loaded.error.code,
                    message=loaded.error.message,
                    path=str(self._path),
                )
            )
        return Success(value=loaded.value)

    def notify_change(self) -> None:
        """Signal that the file may have changed.

        Restarts the quiet window; the reload runs once no further signal
        arrives for the debounce interval.
        """
        if self._pending_reload is not None and not self._pending_reload.done():
            self._pending_reload.cancel()
        task = asyncio.create_task(self._reload_after_quiet_window())
        self._pending_reload = task
        self._reloads.add(task)
        task.add_done_callback(self._reloads.discard)

    async def _reload_after_quiet_window(self) -> None:
        await asyncio.sleep(self._debounce_seconds)
        # Past the window: a newer signal must not cancel this reload
        if self._pending_reload is asyncio.current_task():
            self._pending_reload = None
        await self.reload()

    async def _load_locked(
        self,
    ) -> tuple[
        Result[DatabaseCredential, SecretSourceError],
        DatabaseCredentialsRotated | None,
    ]:
        result = await asyncio.to_thread(read_credential_file, self._path)

        if isinstance(result, Failure):
            error = result.error
            if error.infrastructure_code is InfrastructureErrorCode.SECRET_NOT_FOUND:
                self._logger.warning(
                    "credentials_file_not_found",
                    path=str(self._path),
                    keeping_previous=self._current is not None,
                )
            else:
                self._logger.error(
                    "credentials_load_failed",
                    path=str(self._path),
                    reason=error.message,
                    keeping_previous=self._current is not None,
                )
            return result, None

        credential = result.value
        previous = self._current
        self._current = credential
        if self._state is CredentialStoreState.UNINITIALIZED:
            self._state = CredentialStoreState.LOADED

        self._logger.info(
            "credentials_loaded",
            username=credential.username,
            lease_id=credential.lease_id,
            renewable=credential.renewable,
        )

        if previous is None or not credential.is_rotation_of(previous):
            return result, None

        self._state = CredentialStoreState.ROTATION_IN_FLIGHT
        self._logger.info(
            "credentials_rotation_detected",
            username=credential.username,
            previous_username=previous.username,
        )
        return result, DatabaseCredentialsRotated(
            credential=credential, previous_username=previous.username
        )

    # =========================================================================
    # Drain transitions
    # =========================================================================

    def enter_drain_grace(self) -> None:
        """Pool cleared; in-flight connections are finishing."""
        if self._current is None:
            return
        self._state = CredentialStoreState.DRAIN_GRACE

    def complete_drain(self) -> None:
        """Grace window ended."""
        if self._state is CredentialStoreState.DRAIN_GRACE:
            self._state = CredentialStoreState.LOADED

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def start(self) -> None:
        """Load the credential (if available) and start watching the file."""
        result = await self.get_current()
        if isinstance(result, Failure):
            self._logger.warning(
                "credentials_unavailable_at_startup", path=str(self._path)
            )
        self._watcher.start()

    async def stop(self) -> None:
        """Stop the watcher and cancel pending reloads."""
        await self._watcher.stop()
        pending = list(self._reloads)
        self._pending_reload = None
        for task in pending:
            task.cancel()
        for task in pending:
            with contextlib.suppress(asyncio.CancelledError):
                await task
