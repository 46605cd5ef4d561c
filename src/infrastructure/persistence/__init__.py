"""Database persistence infrastructure.

This module provides:
- Credential-aware connection and session management (Database)
- Pool draining after credential rotation (ConnectionPoolDrainer)
- Read-only adapters for the migration (SqlUserDirectory, SqlSchemaInspector)
"""

from src.infrastructure.persistence.connection_pool_drainer import (
    ConnectionPoolDrainer,
)
from src.infrastructure.persistence.database import (
    Database,
    DatabaseCredentialsUnavailableError,
)
from src.infrastructure.persistence.schema_inspector import SqlSchemaInspector
from src.infrastructure.persistence.user_directory import SqlUserDirectory

__all__ = [
    "ConnectionPoolDrainer",
    "Database",
    "DatabaseCredentialsUnavailableError",
    "SqlSchemaInspector",
    "SqlUserDirectory",
]
