"""Background watcher for the credential file.

Two strategies feed the same change callback:

- native: OS file notifications through ``watchfiles.awatch`` on the file's
  directory, filtered to the file name (the agent may replace the file by
  rename, so the directory is watched rather than the inode).
- poll: fixed interval comparison of the file modification timestamp.

Native mode falls back to polling when the notifier cannot start (missing
directory, exhausted inotify watches, unsupported filesystem).

The callback only signals; debouncing and reloading belong to the store.
"""

import asyncio
import contextlib
from collections.abc import Callable
from pathlib import Path

from watchfiles import Change, awatch

from src.domain.protocols.logger_protocol import LoggerProtocol

WATCH_MODE_NATIVE = "native"
WATCH_MODE_POLL = "poll"


class CredentialFileWatcher:
    """Watches one file and calls on_change for every observed change.

    Attributes:
        mode: Strategy currently in use ("native" or "poll").
    """

    def __init__(
        self,
        path: Path,
        on_change: Callable[[], None],
        logger: LoggerProtocol,
        *,
        mode: str = WATCH_MODE_NATIVE,
        poll_interval_seconds: float = 1.0,
    ) -> None:
        """Initialize watcher.

        Args:
            path: File to watch.
            on_change: Synchronous callback run on the event loop per change.
            logger: Structured logger.
            mode: "native" or "poll".
            poll_interval_seconds: Interval between timestamp checks in poll mode.
        """
        self._path = path
        self._on_change = on_change
        self._logger = logger
        self.mode = mode
        self._poll_interval = max(0.01, poll_interval_seconds)
        self._task: asyncio.Task[None] | None = None
        self._stop_event = asyncio.Event()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the background task (no-op when already running)."""
        if self.running:
            return
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(
            self._run(), name=f"credential-watcher:{self._path.name}"
        )

    async def stop(self) -> None:
        """Stop the background task and wait for it to finish."""
        task = self._task
        self._task = None
        if task is None:
            return
        self._stop_event.set()
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self) -> None:
        if self.mode == WATCH_MODE_NATIVE:
            try:
                await self._watch_native()
                return
            except (OSError, RuntimeError) as e:
                self._logger.warning(
                    "credential_watcher_native_unavailable",
                    path=str(self._path),
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                self.mode = WATCH_MODE_POLL
        await self._watch_poll()

    def _matches(self, change: Change, changed_path: str) -> bool:
        return Path(changed_path).name == self._path.name

    async def _watch_native(self) -> None:
        directory = self._path.parent
        self._logger.info(
            "credential_watcher_started", path=str(self._path), mode=self.mode
        )
        async for _changes in awatch(
            directory,
            watch_filter=self._matches,
            stop_event=self._stop_event,
            recursive=False,
        ):
            self._on_change()

    def _mtime(self) -> int | None:
        try:
            return self._path.stat().st_mtime_ns
        except OSError:
            return None

    async def _watch_poll(self) -> None:
        self._logger.info(
            "credential_watcher_started",
            path=str(self._path),
            mode=WATCH_MODE_POLL,
            interval_seconds=self._poll_interval,
        )
        last_seen = self._mtime()
        while not self._stop_event.is_set():
            await asyncio.sleep(self._poll_interval)
            current = self._mtime()
            if current != last_seen:
                last_seen = current
                if current is not None:
                    self._on_change()
