"""Domain protocols (ports).

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from src.domain.protocols import TokenFamilyTrackerProtocol, LoggerProtocol
"""

from src.domain.protocols.connection_pool_protocol import ConnectionPoolProtocol
from src.domain.protocols.credential_store_protocol import CredentialStoreProtocol
from src.domain.protocols.event_bus_protocol import EventBusProtocol, EventHandler
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.migration_telemetry_protocol import (
    MigrationTelemetryProtocol,
)
from src.domain.protocols.schema_inspector_protocol import SchemaInspectorProtocol
from src.domain.protocols.token_family_protocol import TokenFamilyTrackerProtocol
from src.domain.protocols.user_directory_protocol import UserDirectoryProtocol
from src.domain.protocols.user_provisioning_protocol import (
    UserProvisioningProtocol,
)

__all__ = [
    "ConnectionPoolProtocol",
    "CredentialStoreProtocol",
    "EventBusProtocol",
    "EventHandler",
    "LoggerProtocol",
    "MigrationTelemetryProtocol",
    "SchemaInspectorProtocol",
    "TokenFamilyTrackerProtocol",
    "UserDirectoryProtocol",
    "UserProvisioningProtocol",
]
