"""Connection pool drainer.

Reacts to credential rotation by clearing the database pool immediately and
then holding a grace window during which connections opened with the old
credential finish their in-flight work.

Timeline (rotation):
    t0      DatabaseCredentialsRotated received
    t0      pool invalidated, store enters DRAIN_GRACE
    t0+30s  store back to LOADED, DatabaseConnectionsDrained published

The grace wait runs in a tracked background task so the publisher (the
credential store reload) is never blocked for the window. Shutdown cancels
pending waits.

Usage:
    drainer = ConnectionPoolDrainer(pool=database, credential_store=store,
                                    event_bus=event_bus, logger=logger)
    drainer.subscribe()      # application startup
    ...
    await drainer.shutdown()  # application shutdown
"""

import asyncio
import contextlib

from src.domain.events import DatabaseConnectionsDrained, DatabaseCredentialsRotated
from src.domain.protocols.connection_pool_protocol import ConnectionPoolProtocol
from src.domain.protocols.credential_store_protocol import CredentialStoreProtocol
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol


class ConnectionPoolDrainer:
    """Clears pooled connections after credential rotation.

    Attributes:
        rotation_grace_seconds: Grace window after an automatic rotation.
        manual_grace_seconds: Grace window after an operator drain.
    """

    def __init__(
        self,
        pool: ConnectionPoolProtocol,
        credential_store: CredentialStoreProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        *,
        rotation_grace_seconds: float = 30.0,
        manual_grace_seconds: float = 10.0,
    ) -> None:
        self._pool = pool
        self._store = credential_store
        self._event_bus = event_bus
        self._logger = logger
        self.rotation_grace_seconds = rotation_grace_seconds
        self.manual_grace_seconds = manual_grace_seconds
        self._grace_tasks: set[asyncio.Task[None]] = set()
        self._subscribed = False

    @property
    def subscribed(self) -> bool:
        return self._subscribed

    @property
    def pending_drains(self) -> int:
        """Grace windows still open."""
        return len(self._grace_tasks)

    def subscribe(self) -> None:
        """Start receiving rotation notifications (idempotent)."""
        if self._subscribed:
            return
        self._event_bus.subscribe(DatabaseCredentialsRotated, self.handle_rotation)
        self._subscribed = True

    def unsubscribe(self) -> None:
        """Stop receiving rotation notifications (idempotent)."""
        if not self._subscribed:
            return
        self._event_bus.unsubscribe(DatabaseCredentialsRotated, self.handle_rotation)
        self._subscribed = False

    async def handle_rotation(self, event: DatabaseCredentialsRotated) -> None:
        """Drain connections opened with the superseded credential."""
        self._logger.info(
            "connection_drain_started",
            previous_username=event.previous_username,
            username=event.credential.username,
            grace_seconds=self.rotation_grace_seconds,
        )
        await self._drain(
            event.previous_username, self.rotation_grace_seconds, manual=False
        )

    async def drain_old_connections(self, username: str) -> float:
        """Operator-triggered drain for connections opened as username.

        Returns:
            Grace window length in seconds.
        """
        self._logger.info(
            "connection_drain_requested",
            username=username,
            grace_seconds=self.manual_grace_seconds,
        )
        await self._drain(username, self.manual_grace_seconds, manual=True)
        return self.manual_grace_seconds

    async def _drain(self, username: str, grace_seconds: float, *, manual: bool) -> None:
        await self._pool.invalidate_pool()
        self._store.enter_drain_grace()
        task = asyncio.create_task(
            self._finish_after_grace(username, grace_seconds, manual),
            name=f"connection-drain:{username}",
        )
        self._grace_tasks.add(task)
        task.add_done_callback(self._grace_tasks.discard)

    async def _finish_after_grace(
        self, username: str, grace_seconds: float, manual: bool
    ) -> None:
        await asyncio.sleep(grace_seconds)
        # Overlapping drains: the last window to close completes the drain
        if self._grace_tasks - {asyncio.current_task()}:
            self._logger.debug("connection_drain_overlapping", username=username)
        else:
            self._store.complete_drain()
        self._logger.info(
            "connection_drain_completed",
            username=username,
            grace_seconds=grace_seconds,
            manual=manual,
        )
        await self._event_bus.publish(
            DatabaseConnectionsDrained(
                username=username, grace_seconds=grace_seconds, manual=manual
            )
        )

    async def shutdown(self) -> None:
        """Unsubscribe and cancel pending grace windows."""
        self.unsubscribe()
        pending = list(self._grace_tasks)
        for task in pending:
            task.cancel()
        for task in pending:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._grace_tasks.clear()
