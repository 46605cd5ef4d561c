"""Unit tests for RedisAdapter.

Tests cover:
- Basic key operations on fakeredis
- Pipelined list primitives (append_with_pointer, push_bounded)
- RedisError mapped to CacheError (never raised)
"""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.infrastructure.cache.redis_adapter import RedisAdapter
from src.infrastructure.enums import InfrastructureErrorCode


@pytest.mark.unit
class TestRedisAdapterOperations:
    """Test RedisAdapter against fakeredis."""

    async def test_set_and_get(self, cache_adapter):
        await cache_adapter.set("k", "v", ttl=60)

        assert await cache_adapter.get("k") == Success(value="v")
        ttl = await cache_adapter.ttl("k")
        assert 0 < ttl.value <= 60

    async def test_set_without_ttl_never_expires(self, cache_adapter):
        await cache_adapter.set("k", "v", ttl=0)

        assert await cache_adapter.ttl("k") == Success(value=None)

    async def test_get_missing_key(self, cache_adapter):
        assert await cache_adapter.get("missing") == Success(value=None)

    async def test_delete_reports_existence(self, cache_adapter):
        await cache_adapter.set("k", "v")

        assert await cache_adapter.delete("k") == Success(value=True)
        assert await cache_adapter.delete("k") == Success(value=False)

    async def test_increment(self, cache_adapter):
        await cache_adapter.increment("counter")
        result = await cache_adapter.increment("counter", 4)

        assert result == Success(value=5)

    async def test_append_with_pointer_returns_length(self, cache_adapter, redis_client):
        first = await cache_adapter.append_with_pointer("list", "ptr", "a", ttl=60)
        second = await cache_adapter.append_with_pointer("list", "ptr", "b", ttl=60)

        assert (first.value, second.value) == (1, 2)
        assert await redis_client.lrange("list", 0, -1) == ["a", "b"]
        assert await redis_client.get("ptr") == "b"
        assert 0 < await redis_client.ttl("ptr") <= 60

    async def test_push_bounded_trims_oldest(self, cache_adapter):
        for i in range(5):
            await cache_adapter.push_bounded("recent", str(i), max_length=3)

        result = await cache_adapter.list_range("recent")

        assert result == Success(value=["4", "3", "2"])

    async def test_list_range_missing_key_is_empty(self, cache_adapter):
        assert await cache_adapter.list_range("missing") == Success(value=[])

    async def test_ping(self, cache_adapter):
        assert await cache_adapter.ping() == Success(value=True)


@pytest.mark.unit
class TestRedisAdapterFailures:
    """Redis exceptions become CacheError failures."""

    @pytest.fixture
    def broken_adapter(self) -> RedisAdapter:
        client = AsyncMock()
        client.get.side_effect = RedisConnectionError("Connection refused")
        client.setex.side_effect = RedisConnectionError("Connection refused")
        client.lrange.side_effect = RedisConnectionError("Connection refused")
        client.ping.side_effect = RedisConnectionError("Connection refused")
        return RedisAdapter(redis_client=client)

    async def test_get_failure(self, broken_adapter):
        result = await broken_adapter.get("k")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CACHE_UNAVAILABLE
        assert result.error.infrastructure_code == InfrastructureErrorCode.CACHE_GET_ERROR
        assert result.error.details["key"] == "k"

    async def test_set_failure(self, broken_adapter):
        result = await broken_adapter.set("k", "v", ttl=10)

        assert isinstance(result, Failure)
        assert result.error.infrastructure_code == InfrastructureErrorCode.CACHE_SET_ERROR

    async def test_list_failure(self, broken_adapter):
        result = await broken_adapter.list_range("k")

        assert isinstance(result, Failure)
        assert (
            result.error.infrastructure_code == InfrastructureErrorCode.CACHE_LIST_ERROR
        )

    async def test_ping_failure(self, broken_adapter):
        result = await broken_adapter.ping()

        assert isinstance(result, Failure)
        assert (
            result.error.infrastructure_code
            == InfrastructureErrorCode.CACHE_CONNECTION_ERROR
        )
