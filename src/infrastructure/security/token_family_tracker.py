"""Redis implementation of TokenFamilyTrackerProtocol.

Tracks refresh token lineages in shared state so every service instance sees
the same families.

Key Patterns:
    - {prefix}:token_family:{family_id} -> Redis list, append-only
    - {prefix}:token_family_latest:{family_id} -> latest token string
    - {prefix}:token_family_revoked:{family_id} -> "true" while revoked

Architecture:
    - Implements TokenFamilyTrackerProtocol (structural typing)
    - Uses RedisAdapter for low-level operations
    - Fail-closed: any Redis failure returns TOKEN_STORE_UNAVAILABLE, never
      a "not revoked" or "is latest" default
"""

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities.token_family import (
    TokenFamilyRegistration,
    TokenFamilyRevocation,
)
from src.domain.errors import TokenFamilyError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.infrastructure.cache.cache_keys import CacheKeys
from src.infrastructure.cache.redis_adapter import RedisAdapter
from src.infrastructure.errors import CacheError
from src.infrastructure.security.refresh_token_service import new_family_id

REVOKED_MARKER = "true"

# Revocation markers always expire (7 days when the caller passes no TTL)
DEFAULT_REVOCATION_TTL_SECONDS = 7 * 24 * 60 * 60


def _store_unavailable(
    family_id: str | None, operation: str, error: CacheError
) -> Failure[TokenFamilyError]:
    return Failure(
        error=TokenFamilyError(
            code=ErrorCode.TOKEN_STORE_UNAVAILABLE,
            message="Token family store is unavailable",
            family_id=family_id,
            details={"operation": operation, "cause": error.message},
        )
    )


class RedisTokenFamilyTracker:
    """Redis-backed refresh token family tracker.

    Note: Does NOT inherit from TokenFamilyTrackerProtocol (uses structural
    typing).

    Attributes:
        _redis: RedisAdapter instance.
        _keys: Key layout.
        _logger: Structured logger.
    """

    def __init__(
        self,
        redis_adapter: RedisAdapter,
        keys: CacheKeys,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize tracker.

        Args:
            redis_adapter: RedisAdapter instance for Redis operations.
            keys: Key layout (carries the configured prefix).
            logger: Structured logger.
        """
        self._redis = redis_adapter
        self._keys = keys
        self._logger = logger

    async def register(
        self,
        token: str,
        ttl_seconds: int,
        family_id: str | None = None,
    ) -> Result[TokenFamilyRegistration, TokenFamilyError]:
        """Append token to a family and make it the latest.

        Args:
            token: Refresh token value.
            ttl_seconds: Family time to live (<= 0 means no expiry).
            family_id: Existing family, or None to mint a new one.

        Returns:
            Success(TokenFamilyRegistration) with the zero-based sequence.
            Failure(TokenFamilyError) with TOKEN_FAMILY_REVOKED or
            TOKEN_STORE_UNAVAILABLE.
        """
        resolved_id = family_id or new_family_id()

        revoked = await self.is_revoked(resolved_id)
        match revoked:
            case Failure():
                return revoked
            case Success(value=True):
                self._logger.warning(
                    "token_family_register_rejected_revoked",
                    family_id=resolved_id,
                )
                return Failure(
                    error=TokenFamilyError(
                        code=ErrorCode.TOKEN_FAMILY_REVOKED,
                        message="Refresh token family has been revoked",
                        family_id=resolved_id,
                    )
                )
            case _:
                pass

        appended = await self._redis.append_with_pointer(
            self._keys.token_family(resolved_id),
            self._keys.token_family_latest(resolved_id),
            token,
            ttl=ttl_seconds,
        )
        if isinstance(appended, Failure):
            self._logger.error(
                "token_family_register_failed",
                family_id=resolved_id,
                cause=appended.error.message,
            )
            return _store_unavailable(resolved_id, "register", appended.error)

        sequence = appended.value - 1
        self._logger.debug(
            "token_family_registered",
            family_id=resolved_id,
            sequence=sequence,
        )
        return Success(
            value=TokenFamilyRegistration(family_id=resolved_id, sequence=sequence)
        )

    async def is_latest(
        self, family_id: str, token: str
    ) -> Result[bool, TokenFamilyError]:
        """Check whether token is the latest of its family.

        Falls back to the tail of the sequence when the latest pointer is
        missing and the family is not revoked.

        Returns:
            Success(True/False), or Failure(TOKEN_STORE_UNAVAILABLE).
        """
        latest = await self._redis.get(self._keys.token_family_latest(family_id))
        match latest:
            case Failure(error=err):
                return _store_unavailable(family_id, "is_latest", err)
            case Success(value=str() as value) if value:
                return Success(value=value == token)
            case _:
                pass

        revoked = await self.is_revoked(family_id)
        match revoked:
            case Failure():
                return revoked
            case Success(value=True):
                return Success(value=False)
            case _:
                pass

        tail = await self._redis.list_range(self._keys.token_family(family_id), -1, -1)
        match tail:
            case Failure(error=err):
                return _store_unavailable(family_id, "is_latest", err)
            case Success(value=[last]):
                return Success(value=last == token)
            case _:
                return Success(value=False)

    async def family_exists(self, family_id: str) -> Result[bool, TokenFamilyError]:
        """Check whether the family sequence holds at least one token.

        Read-only: unknown or expired families leave no key behind.

        Returns:
            Success(True/False), or Failure(TOKEN_STORE_UNAVAILABLE).
        """
        head = await self._redis.list_range(self._keys.token_family(family_id), 0, 0)
        if isinstance(head, Failure):
            return _store_unavailable(family_id, "family_exists", head.error)
        return Success(value=bool(head.value))

    async def is_revoked(self, family_id: str) -> Result[bool, TokenFamilyError]:
        """Check whether the family is currently revoked.

        Returns:
            Success(True/False), or Failure(TOKEN_STORE_UNAVAILABLE).
        """
        marker = await self._redis.get(self._keys.token_family_revoked(family_id))
        match marker:
            case Failure(error=err):
                return _store_unavailable(family_id, "is_revoked", err)
            case Success(value=str() as value):
                return Success(value=value.lower() == REVOKED_MARKER)
            case _:
                return Success(value=False)

    async def revoke_family(
        self, family_id: str, ttl_seconds: int
    ) -> Result[TokenFamilyRevocation, TokenFamilyError]:
        """Revoke the whole family.

        Writes the revocation marker with a bounded TTL, deletes the latest
        pointer so no further refresh succeeds, and re-applies the TTL to the
        sequence so the family is eventually collected.

        Args:
            family_id: Family to revoke.
            ttl_seconds: Revocation lifetime (<= 0 uses the 7 day default).

        Returns:
            Success(TokenFamilyRevocation) listing every issued token, or
            Failure(TOKEN_STORE_UNAVAILABLE).
        """
        ttl = ttl_seconds if ttl_seconds > 0 else DEFAULT_REVOCATION_TTL_SECONDS
        family_key = self._keys.token_family(family_id)

        tokens_result = await self._redis.list_range(family_key)
        if isinstance(tokens_result, Failure):
            return _store_unavailable(family_id, "revoke_family", tokens_result.error)
        tokens = [t for t in tokens_result.value if t.strip()]

        marked = await self._redis.set(
            self._keys.token_family_revoked(family_id), REVOKED_MARKER, ttl=ttl
        )
        if isinstance(marked, Failure):
            self._logger.error(
                "token_family_revoke_failed",
                family_id=family_id,
                cause=marked.error.message,
            )
            return _store_unavailable(family_id, "revoke_family", marked.error)

        # Marker first: a failure below still leaves the family rejected
        for outcome in (
            await self._redis.delete(self._keys.token_family_latest(family_id)),
            await self._redis.expire(family_key, ttl),
        ):
            if isinstance(outcome, Failure):
                self._logger.error(
                    "token_family_revoke_failed",
                    family_id=family_id,
                    cause=outcome.error.message,
                )
                return _store_unavailable(family_id, "revoke_family", outcome.error)

        self._logger.info(
            "token_family_revoked",
            family_id=family_id,
            revoked_count=len(tokens),
        )
        return Success(
            value=TokenFamilyRevocation(family_id=family_id, revoked_tokens=tokens)
        )
