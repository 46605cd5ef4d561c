"""Migration telemetry adapters."""

from src.infrastructure.telemetry.redis_telemetry import RedisMigrationTelemetry

__all__ = ["RedisMigrationTelemetry"]
