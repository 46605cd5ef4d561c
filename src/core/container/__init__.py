"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from src.core.container import get_cache, get_token_family_tracker, ...

The container is organized into modules by concern:
- infrastructure: Logging, cache, credential store, database, pool drainer
- events: Event bus and logging event handler
- security: Token family tracking, issuer classification, refresh handlers
- migration: Migration orchestrator and its collaborators
"""

from src.core.config import get_settings

# Event bus
from src.core.container.events import get_event_bus, get_logging_event_handler

# Infrastructure services
from src.core.container.infrastructure import (
    get_cache,
    get_cache_keys,
    get_connection_pool_drainer,
    get_credential_store,
    get_database,
    get_db_session,
    get_logger,
)

# Migration
from src.core.container.migration import (
    get_migration_orchestrator,
    get_migration_telemetry,
    get_user_provisioner,
)

# Token families and issuer classification
from src.core.container.security import (
    get_issue_refresh_token_handler,
    get_issuer_classifier,
    get_refresh_token_service,
    get_revoke_token_family_handler,
    get_rotate_refresh_token_handler,
    get_token_family_tracker,
)

__all__ = [
    "get_settings",
    # Infrastructure
    "get_cache",
    "get_cache_keys",
    "get_connection_pool_drainer",
    "get_credential_store",
    "get_database",
    "get_db_session",
    "get_logger",
    # Events
    "get_event_bus",
    "get_logging_event_handler",
    # Security
    "get_issue_refresh_token_handler",
    "get_issuer_classifier",
    "get_refresh_token_service",
    "get_revoke_token_family_handler",
    "get_rotate_refresh_token_handler",
    "get_token_family_tracker",
    # Migration
    "get_migration_orchestrator",
    "get_migration_telemetry",
    "get_user_provisioner",
]
