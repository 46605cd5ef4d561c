"""Pytest configuration for async testing.

This configuration ensures:
1. Async tests are marked automatically
2. Redis fixtures use fakeredis (no server needed)
3. Credential files live in per-test temporary directories
4. Cross-cutting mocks (logger, event bus) are consistent across tests
"""

import inspect
import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, Mock

import fakeredis.aioredis
import pytest
import pytest_asyncio

from src.infrastructure.cache.cache_keys import CacheKeys
from src.infrastructure.cache.redis_adapter import RedisAdapter

pytest_plugins = ("pytest_asyncio",)


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with a real (sqlite) database"
    )
    config.addinivalue_line("markers", "api: HTTP tests through TestClient")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


# =============================================================================
# Redis (fakeredis)
# =============================================================================


@pytest_asyncio.fixture
async def redis_client():
    """Provide a fresh in-memory Redis client per test."""
    client = fakeredis.aioredis.FakeRedis(decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest.fixture
def cache_adapter(redis_client) -> RedisAdapter:
    """RedisAdapter on top of fakeredis."""
    return RedisAdapter(redis_client=redis_client)


@pytest.fixture
def cache_keys() -> CacheKeys:
    return CacheKeys(prefix="test")


# =============================================================================
# Reusable Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger():
    """Provide a mock logger for testing.

    bind() returns the same mock so bound calls can be asserted on it.

    Usage:
        def test_something(mock_logger):
            service = MyService(logger=mock_logger)
            service.do_something()
            mock_logger.info.assert_called_once()
    """
    logger = Mock()
    logger.info = Mock()
    logger.debug = Mock()
    logger.error = Mock()
    logger.warning = Mock()
    logger.critical = Mock()
    logger.bind = Mock(return_value=logger)
    return logger


@pytest.fixture
def mock_event_bus():
    """Provide a mock event bus for testing.

    Usage:
        async def test_something(mock_event_bus):
            service = MyService(event_bus=mock_event_bus)
            await service.do_something()
            mock_event_bus.publish.assert_called()
    """
    event_bus = Mock()
    event_bus.publish = AsyncMock(return_value=None)
    event_bus.subscribe = Mock()
    event_bus.unsubscribe = Mock(return_value=True)
    return event_bus


@pytest.fixture
def event_bus(mock_logger):
    """Real in-memory event bus."""
    from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus

    return InMemoryEventBus(logger=mock_logger)


# =============================================================================
# Credential files
# =============================================================================


@pytest.fixture
def credential_path(tmp_path: Path) -> Path:
    """Path of the secret file (not created)."""
    return tmp_path / "secrets" / "database-credentials.json"


@pytest.fixture
def write_credentials(credential_path: Path):
    """Factory writing a credential document to credential_path.

    Usage:
        write_credentials(username="v-identity-a")
        write_credentials(raw="{not json")
    """

    def factory(
        username: str = "v-identity-a",
        password: str = "s3cret-a",
        *,
        raw: str | None = None,
        **extra: Any,
    ) -> Path:
        credential_path.parent.mkdir(parents=True, exist_ok=True)
        if raw is None:
            document = {
                "username": username,
                "password": password,
                "lease_id": f"database/creds/identity/{username}",
                "lease_duration": 3600,
                "renewable": True,
                **extra,
            }
            raw = json.dumps(document)
        credential_path.write_text(raw, encoding="utf-8")
        return credential_path

    return factory
