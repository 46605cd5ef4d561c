"""Unit tests for FileCredentialStore.

Tests cover:
- First load and CREDENTIALS_UNAVAILABLE before delivery
- Concurrent first reads share one load
- Rotation detection and notification (username change only)
- Failed reloads keep the previous credential
- Debounce: a burst of change signals reloads once
- Snapshot reads never observe a mixed credential
- Drain state transitions and lifecycle
"""

import asyncio
import os
from unittest.mock import patch

import pytest

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import CredentialStoreState
from src.domain.events import DatabaseCredentialsRotated
from src.infrastructure.secrets.credential_file_reader import read_credential_file
from src.infrastructure.secrets.credential_watcher import WATCH_MODE_POLL
from src.infrastructure.secrets.file_credential_store import FileCredentialStore


@pytest.fixture
def store(credential_path, mock_event_bus, mock_logger) -> FileCredentialStore:
    return FileCredentialStore(
        path=credential_path,
        event_bus=mock_event_bus,
        logger=mock_logger,
        debounce_ms=50,
        watch_mode=WATCH_MODE_POLL,
        poll_interval_seconds=0.02,
    )


def _rotations(mock_event_bus) -> list[DatabaseCredentialsRotated]:
    return [
        call.args[0]
        for call in mock_event_bus.publish.await_args_list
        if isinstance(call.args[0], DatabaseCredentialsRotated)
    ]


@pytest.mark.unit
class TestGetCurrent:
    """Test get_current() and the first load."""

    async def test_unavailable_before_delivery(self, store):
        result = await store.get_current()

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CREDENTIALS_UNAVAILABLE
        assert store.state is CredentialStoreState.UNINITIALIZED
        assert store.current is None

    async def test_loads_on_first_use(self, store, write_credentials):
        write_credentials(username="v-identity-a")

        result = await store.get_current()

        assert isinstance(result, Success)
        assert result.value.username == "v-identity-a"
        assert store.state is CredentialStoreState.LOADED

    async def test_available_after_late_delivery(self, store, write_credentials):
        assert isinstance(await store.get_current(), Failure)

        write_credentials(username="v-identity-a")

        assert (await store.get_current()).value.username == "v-identity-a"

    async def test_concurrent_first_reads_share_one_load(
        self, store, write_credentials
    ):
        write_credentials()
        with patch(
            "src.infrastructure.secrets.file_credential_store.read_credential_file",
            wraps=read_credential_file,
        ) as reader:
            results = await asyncio.gather(*(store.get_current() for _ in range(10)))

        assert reader.call_count == 1
        assert len({id(r.value) for r in results}) == 1

    async def test_loaded_reads_do_not_touch_the_file(self, store, write_credentials):
        write_credentials()
        await store.get_current()

        with patch(
            "src.infrastructure.secrets.file_credential_store.read_credential_file"
        ) as reader:
            await store.get_current()

        reader.assert_not_called()


@pytest.mark.unit
class TestReload:
    """Test reload() and rotation notification."""

    async def test_username_change_publishes_rotation(
        self, store, write_credentials, mock_event_bus
    ):
        write_credentials(username="v-identity-a")
        await store.get_current()
        write_credentials(username="v-identity-b", password="s3cret-b")

        result = await store.reload()

        assert result.value.username == "v-identity-b"
        assert store.state is CredentialStoreState.ROTATION_IN_FLIGHT
        rotations = _rotations(mock_event_bus)
        assert len(rotations) == 1
        assert rotations[0].previous_username == "v-identity-a"
        assert rotations[0].credential.username == "v-identity-b"

    async def test_same_username_is_not_a_rotation(
        self, store, write_credentials, mock_event_bus
    ):
        write_credentials(username="v-identity-a", password="old")
        await store.get_current()
        write_credentials(username="v-identity-a", password="renewed")

        await store.reload()

        assert store.current.password == "renewed"
        assert store.state is CredentialStoreState.LOADED
        mock_event_bus.publish.assert_not_called()

    async def test_missing_file_keeps_previous(
        self, store, write_credentials, credential_path
    ):
        write_credentials(username="v-identity-a")
        await store.get_current()
        credential_path.unlink()

        result = await store.reload()

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CREDENTIALS_UNAVAILABLE
        assert store.current.username == "v-identity-a"
        assert (await store.get_current()).value.username == "v-identity-a"

    async def test_malformed_file_keeps_previous(self, store, write_credentials):
        write_credentials(username="v-identity-a")
        await store.get_current()
        write_credentials(raw='{"username": "v-identity-b"')

        result = await store.reload()

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CREDENTIALS_INVALID
        assert store.current.username == "v-identity-a"

    async def test_readers_never_see_a_mixed_credential(
        self, store, write_credentials
    ):
        write_credentials(username="user-0", password="password-0")
        await store.get_current()
        observed: set[tuple[str, str]] = set()
        stop = asyncio.Event()

        async def reader():
            while not stop.is_set():
                credential = (await store.get_current()).value
                observed.add((credential.username, credential.password))
                await asyncio.sleep(0)

        task = asyncio.create_task(reader())
        for i in range(1, 6):
            write_credentials(username=f"user-{i}", password=f"password-{i}")
            await store.reload()
        stop.set()
        await task

        assert observed
        for username, password in observed:
            assert username.split("-")[1] == password.split("-")[1]


@pytest.mark.unit
class TestDebounce:
    """Test notify_change() debouncing."""

    async def test_burst_of_signals_reloads_once(
        self, store, write_credentials, mock_event_bus
    ):
        write_credentials(username="v-identity-a")
        await store.get_current()

        write_credentials(username="v-identity-b")
        store.notify_change()
        await asyncio.sleep(0.01)
        write_credentials(username="v-identity-c")
        store.notify_change()
        await asyncio.sleep(0.2)

        rotations = _rotations(mock_event_bus)
        assert len(rotations) == 1
        assert rotations[0].credential.username == "v-identity-c"
        assert rotations[0].previous_username == "v-identity-a"

    async def test_signals_apart_reload_separately(
        self, store, write_credentials, mock_event_bus
    ):
        write_credentials(username="v-identity-a")
        await store.get_current()

        write_credentials(username="v-identity-b")
        store.notify_change()
        await asyncio.sleep(0.2)
        write_credentials(username="v-identity-c")
        store.notify_change()
        await asyncio.sleep(0.2)

        assert [r.credential.username for r in _rotations(mock_event_bus)] == [
            "v-identity-b",
            "v-identity-c",
        ]

    async def test_stop_cancels_pending_reload(
        self, store, write_credentials, mock_event_bus
    ):
        write_credentials(username="v-identity-a")
        await store.get_current()
        write_credentials(username="v-identity-b")

        store.notify_change()
        await store.stop()
        await asyncio.sleep(0.1)

        mock_event_bus.publish.assert_not_called()
        assert store.current.username == "v-identity-a"


@pytest.mark.unit
class TestDrainTransitions:
    async def test_drain_cycle(self, store, write_credentials):
        write_credentials(username="v-identity-a")
        await store.get_current()
        write_credentials(username="v-identity-b")
        await store.reload()

        store.enter_drain_grace()
        assert store.state is CredentialStoreState.DRAIN_GRACE

        store.complete_drain()
        assert store.state is CredentialStoreState.LOADED

    async def test_drain_grace_requires_a_credential(self, store):
        store.enter_drain_grace()

        assert store.state is CredentialStoreState.UNINITIALIZED

    async def test_complete_drain_outside_grace_is_noop(self, store, write_credentials):
        write_credentials()
        await store.get_current()

        store.complete_drain()

        assert store.state is CredentialStoreState.LOADED


@pytest.mark.unit
class TestLifecycle:
    async def test_start_loads_and_watches(
        self, store, write_credentials, credential_path, mock_event_bus
    ):
        write_credentials(username="v-identity-a")
        await store.start()
        try:
            assert store.current.username == "v-identity-a"
            assert store.watcher.running
            # Let the watcher record the initial timestamp
            await asyncio.sleep(0.05)

            write_credentials(username="v-identity-b")
            stat = credential_path.stat()
            os.utime(credential_path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 10**9))

            for _ in range(100):
                if _rotations(mock_event_bus):
                    break
                await asyncio.sleep(0.02)
        finally:
            await store.stop()

        assert store.current.username == "v-identity-b"
        assert len(_rotations(mock_event_bus)) == 1
        assert not store.watcher.running

    async def test_start_without_file_still_watches(self, store, mock_logger):
        await store.start()
        try:
            assert store.current is None
            assert store.watcher.running
        finally:
            await store.stop()

        warned = [call.args[0] for call in mock_logger.warning.call_args_list]
        assert "credentials_unavailable_at_startup" in warned
