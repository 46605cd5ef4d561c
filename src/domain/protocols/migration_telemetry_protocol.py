"""Migration telemetry protocol.

Authentication outcomes recorded during the migration window, read back for
baselines and dashboards.
"""

from typing import Protocol

from src.domain.enums import TokenIssuerType


class MigrationTelemetryProtocol(Protocol):
    """Authentication telemetry source."""

    async def record_authentication(
        self,
        *,
        issuer: TokenIssuerType,
        success: bool,
        latency_ms: float,
    ) -> None:
        """Record one authentication outcome."""
        ...

    async def auth_latency_p95_ms(self) -> float:
        """95th percentile authentication latency over the retained window."""
        ...

    async def auth_success_rate(self) -> float:
        """Authentication success rate in percent (100.0 when nothing recorded)."""
        ...

    async def issuer_counts(self) -> dict[TokenIssuerType, int]:
        """Authentications per issuer type."""
        ...
