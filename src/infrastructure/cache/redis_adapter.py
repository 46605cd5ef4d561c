"""Redis adapter for shared-state primitives.

Wraps the async Redis client and handles all Redis-specific operations and
error mapping. Only per-key primitives are exposed (GET/SET/DEL/EXPIRE,
list push/range, INCRBY) plus MULTI/EXEC pipelines for multi-key writes that
must land together.

Architecture:
- Used by token family tracking and migration telemetry
- Maps Redis exceptions to CacheError with proper ErrorCode
- Returns Result types for all operations
- Never decides fail-open or fail-closed itself; callers do
"""

from redis.asyncio import Redis
from redis.exceptions import RedisError

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import CacheError


def _failure(
    infrastructure_code: InfrastructureErrorCode,
    message: str,
    error: Exception,
    **details: object,
) -> Failure[CacheError]:
    return Failure(
        error=CacheError(
            code=ErrorCode.CACHE_UNAVAILABLE,
            infrastructure_code=infrastructure_code,
            message=message,
            details={**details, "error": str(error), "type": type(error).__name__},
        )
    )


class RedisAdapter:
    """Result-returning wrapper over redis.asyncio.

    Clients built with ``decode_responses=False`` also work; values are
    decoded as UTF-8.
    """

    def __init__(self, redis_client: Redis) -> None:
        self._redis = redis_client

    @staticmethod
    def _decode(value: str | bytes) -> str:
        return value.decode("utf-8") if isinstance(value, bytes) else value

    async def get(self, key: str) -> Result[str | None, CacheError]:
        """GET. Success(None) when the key is absent."""
        try:
            value = await self._redis.get(key)
        except RedisError as e:
            return _failure(
                InfrastructureErrorCode.CACHE_GET_ERROR,
                f"Failed to get key '{key}' from cache",
                e,
                key=key,
            )
        if value is None:
            return Success(value=None)
        return Success(value=self._decode(value))

    async def set(
        self,
        key: str,
        value: str,
        ttl: int | None = None,
    ) -> Result[None, CacheError]:
        """SET, or SETEX when ttl is a positive number of seconds."""
        try:
            if ttl is not None and ttl > 0:
                await self._redis.setex(key, ttl, value)
            else:
                await self._redis.set(key, value)
            return Success(value=None)
        except RedisError as e:
            return _failure(
                InfrastructureErrorCode.CACHE_SET_ERROR,
                f"Failed to set key '{key}' in cache",
                e,
                key=key,
            )

    async def delete(self, key: str) -> Result[bool, CacheError]:
        """DEL. The value is False when nothing was removed."""
        try:
            deleted = await self._redis.delete(key)
            return Success(value=deleted > 0)
        except RedisError as e:
            return _failure(
                InfrastructureErrorCode.CACHE_DELETE_ERROR,
                f"Failed to delete key '{key}' from cache",
                e,
                key=key,
            )

    async def expire(self, key: str, seconds: int) -> Result[bool, CacheError]:
        """EXPIRE. The value is False for a missing key."""
        try:
            was_set = await self._redis.expire(key, seconds)
            return Success(value=bool(was_set))
        except RedisError as e:
            return _failure(
                InfrastructureErrorCode.CACHE_SET_ERROR,
                f"Failed to set expiration on key '{key}'",
                e,
                key=key,
                seconds=seconds,
            )

    async def ttl(self, key: str) -> Result[int | None, CacheError]:
        """Remaining seconds, or None for a missing or persistent key."""
        try:
            ttl_value = await self._redis.ttl(key)
        except RedisError as e:
            return _failure(
                InfrastructureErrorCode.CACHE_GET_ERROR,
                f"Failed to get TTL for key '{key}'",
                e,
                key=key,
            )
        # -2: no key, -1: no expiry
        if ttl_value < 0:
            return Success(value=None)
        return Success(value=ttl_value)

    async def increment(self, key: str, amount: int = 1) -> Result[int, CacheError]:
        """INCRBY. Missing keys start from zero."""
        try:
            new_value = await self._redis.incrby(key, amount)
            return Success(value=int(new_value))
        except RedisError as e:
            return _failure(
                InfrastructureErrorCode.CACHE_SET_ERROR,
                f"Failed to increment key '{key}'",
                e,
                key=key,
                amount=amount,
            )

    async def list_range(
        self, key: str, start: int = 0, end: int = -1
    ) -> Result[list[str], CacheError]:
        """Read a list slice (LRANGE, inclusive bounds).

        Returns:
            Result with list values (empty when key is missing), or CacheError.
        """
        try:
            values = await self._redis.lrange(key, start, end)
            return Success(value=[self._decode(v) for v in values])
        except RedisError as e:
            return _failure(
                InfrastructureErrorCode.CACHE_LIST_ERROR,
                f"Failed to read list '{key}'",
                e,
                key=key,
            )

    async def push_bounded(
        self, key: str, value: str, max_length: int
    ) -> Result[None, CacheError]:
        """Prepend value to a list and trim it to max_length (LPUSH + LTRIM).

        Both commands run in one MULTI/EXEC pipeline.
        """
        try:
            async with self._redis.pipeline(transaction=True) as pipe:
                pipe.lpush(key, value)
                pipe.ltrim(key, 0, max_length - 1)
                await pipe.execute()
            return Success(value=None)
        except RedisError as e:
            return _failure(
                InfrastructureErrorCode.CACHE_LIST_ERROR,
                f"Failed to push to list '{key}'",
                e,
                key=key,
            )

    async def append_with_pointer(
        self,
        list_key: str,
        pointer_key: str,
        value: str,
        ttl: int | None = None,
    ) -> Result[int, CacheError]:
        """Append value to a list and point pointer_key at it.

        RPUSH, EXPIRE and SET run in one MULTI/EXEC pipeline so the pointer
        never refers to a value missing from the list.

        Args:
            list_key: Key of the append-only list.
            pointer_key: Key holding the most recently appended value.
            value: Value to append.
            ttl: Time to live applied to both keys (None or <= 0 = none).

        Returns:
            Result with the list length after the append, or CacheError.
        """
        expires = ttl is not None and ttl > 0
        try:
            async with self._redis.pipeline(transaction=True) as pipe:
                pipe.rpush(list_key, value)
                if expires:
                    pipe.expire(list_key, ttl)
                    pipe.setex(pointer_key, ttl, value)
                else:
                    pipe.set(pointer_key, value)
                results = await pipe.execute()
            return Success(value=int(results[0]))
        except RedisError as e:
            return _failure(
                InfrastructureErrorCode.CACHE_SET_ERROR,
                f"Failed to append to list '{list_key}'",
                e,
                key=list_key,
            )

    async def ping(self) -> Result[bool, CacheError]:
        try:
            await self._redis.ping()  # type: ignore[misc]
            return Success(value=True)
        except RedisError as e:
            return _failure(
                InfrastructureErrorCode.CACHE_CONNECTION_ERROR,
                "Redis health check failed",
                e,
            )

    async def close(self) -> None:
        """Release the client and its connection pool (application shutdown)."""
        await self._redis.aclose()
