"""Redis-backed migration telemetry.

Authentication outcomes are counted per issuer type and outcome, and recent
latencies are kept in a bounded list, so every instance contributes to the
same figures.

Key Patterns:
    - {prefix}:migration:auth:{issuer}:{success|failure} -> counter
    - {prefix}:migration:auth_latency_ms -> newest-first list (bounded)

Reads are best-effort: a Redis failure is logged and reported as empty
telemetry. Telemetry never gates authentication.
"""

import math

from src.core.result import Failure
from src.domain.enums import TokenIssuerType
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.infrastructure.cache.cache_keys import CacheKeys
from src.infrastructure.cache.redis_adapter import RedisAdapter

LATENCY_WINDOW = 1000


def percentile(values: list[float], fraction: float) -> float:
    """Nearest-rank percentile (0.0 for no values)."""
    if not values:
        return 0.0
    ordered = sorted(values)
    rank = max(1, math.ceil(fraction * len(ordered)))
    return ordered[rank - 1]


class RedisMigrationTelemetry:
    """Implements MigrationTelemetryProtocol on Redis."""

    def __init__(
        self,
        redis_adapter: RedisAdapter,
        keys: CacheKeys,
        logger: LoggerProtocol,
        *,
        latency_window: int = LATENCY_WINDOW,
    ) -> None:
        self._redis = redis_adapter
        self._keys = keys
        self._logger = logger
        self._latency_window = latency_window

    async def record_authentication(
        self,
        *,
        issuer: TokenIssuerType,
        success: bool,
        latency_ms: float,
    ) -> None:
        counted = await self._redis.increment(self._keys.auth_outcome(issuer, success))
        pushed = await self._redis.push_bounded(
            self._keys.auth_latencies(), f"{latency_ms:.3f}", self._latency_window
        )
        for outcome in (counted, pushed):
            if isinstance(outcome, Failure):
                self._logger.warning(
                    "telemetry_record_failed", reason=outcome.error.message
                )

    async def _count(self, issuer: TokenIssuerType, success: bool) -> int:
        result = await self._redis.get(self._keys.auth_outcome(issuer, success))
        if isinstance(result, Failure):
            self._logger.warning("telemetry_read_failed", reason=result.error.message)
            return 0
        try:
            return int(result.value or 0)
        except ValueError:
            return 0

    async def auth_latency_p95_ms(self) -> float:
        result = await self._redis.list_range(self._keys.auth_latencies())
        if isinstance(result, Failure):
            self._logger.warning("telemetry_read_failed", reason=result.error.message)
            return 0.0
        latencies: list[float] = []
        for raw in result.value:
            try:
                latencies.append(float(raw))
            except ValueError:
                continue
        return round(percentile(latencies, 0.95), 3)

    async def auth_success_rate(self) -> float:
        successes = 0
        failures = 0
        for issuer in TokenIssuerType:
            successes += await self._count(issuer, True)
            failures += await self._count(issuer, False)
        total = successes + failures
        if total == 0:
            return 100.0
        return round(successes * 100.0 / total, 2)

    async def issuer_counts(self) -> dict[TokenIssuerType, int]:
        counts: dict[TokenIssuerType, int] = {}
        for issuer in TokenIssuerType:
            counts[issuer] = await self._count(issuer, True) + await self._count(
                issuer, False
            )
        return counts
