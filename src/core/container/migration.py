"""Migration orchestrator factories.

Wires the orchestrator to the SQL user directory and schema inspector, the
Redis telemetry and, when configured, the HTTP provisioning client.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import settings
from src.core.container.infrastructure import (
    get_cache,
    get_cache_keys,
    get_database,
    get_logger,
)

if TYPE_CHECKING:
    from src.application.services.migration_orchestrator import MigrationOrchestrator
    from src.domain.protocols.migration_telemetry_protocol import (
        MigrationTelemetryProtocol,
    )
    from src.domain.protocols.user_provisioning_protocol import (
        UserProvisioningProtocol,
    )


@lru_cache()
def get_migration_telemetry() -> "MigrationTelemetryProtocol":
    from src.infrastructure.telemetry.redis_telemetry import RedisMigrationTelemetry

    return RedisMigrationTelemetry(
        redis_adapter=get_cache(),
        keys=get_cache_keys(),
        logger=get_logger(),
    )


@lru_cache()
def get_user_provisioner() -> "UserProvisioningProtocol | None":
    """Get provisioning client, or None when no API base URL is configured.

    Without a provisioner every migration run is a dry run.
    """
    if not settings.provisioning_api_base_url:
        return None

    from src.infrastructure.provisioning.http_provisioning_client import (
        HttpProvisioningClient,
    )

    return HttpProvisioningClient(
        base_url=settings.provisioning_api_base_url,
        logger=get_logger(),
        timeout=settings.provisioning_api_timeout_seconds,
    )


@lru_cache()
def get_migration_orchestrator() -> "MigrationOrchestrator":
    """Get migration orchestrator singleton (app-scoped)."""
    from src.application.services.migration_orchestrator import MigrationOrchestrator
    from src.infrastructure.persistence.schema_inspector import SqlSchemaInspector
    from src.infrastructure.persistence.user_directory import SqlUserDirectory

    database = get_database()
    return MigrationOrchestrator(
        directory=SqlUserDirectory(database.get_session),
        schema_inspector=SqlSchemaInspector(database.get_session),
        telemetry=get_migration_telemetry(),
        logger=get_logger(),
        provisioner=get_user_provisioner(),
        default_batch_size=settings.migration_default_batch_size,
        min_sample_size=settings.migration_min_sample_size,
    )
