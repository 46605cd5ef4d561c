"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console adapter)
- Cache (Redis)
- Database credential store (secret file + watcher)
- Database (SQLAlchemy, credential-aware)
- Connection pool drainer
"""

from collections.abc import AsyncGenerator
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.container.events import get_event_bus
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.infrastructure.cache.cache_keys import CacheKeys
    from src.infrastructure.cache.redis_adapter import RedisAdapter
    from src.infrastructure.persistence.connection_pool_drainer import (
        ConnectionPoolDrainer,
    )
    from src.infrastructure.secrets.file_credential_store import FileCredentialStore


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    ).bind(app=settings.app_name, environment=settings.environment.value)


@lru_cache()
def get_cache() -> "RedisAdapter":
    """Get Redis adapter singleton (app-scoped).

    Connection pool is shared across the entire application.

    Usage:
        cache = get_cache()
        await cache.set("key", "value")
    """
    from redis.asyncio import ConnectionPool, Redis

    from src.infrastructure.cache.redis_adapter import RedisAdapter

    pool = ConnectionPool.from_url(
        settings.redis_url,
        max_connections=50,
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
        socket_keepalive=True,
    )
    return RedisAdapter(redis_client=Redis(connection_pool=pool))


@lru_cache()
def get_cache_keys() -> "CacheKeys":
    """Get cache key builder singleton (configured prefix)."""
    from src.infrastructure.cache.cache_keys import CacheKeys

    return CacheKeys(prefix=settings.cache_key_prefix)


@lru_cache()
def get_credential_store() -> "FileCredentialStore":
    """Get database credential store singleton (app-scoped).

    Started and stopped by the application lifespan.
    """
    from src.infrastructure.secrets.file_credential_store import FileCredentialStore

    return FileCredentialStore(
        path=Path(settings.database_credentials_path),
        event_bus=get_event_bus(),
        logger=get_logger(),
        debounce_ms=settings.credential_reload_debounce_ms,
        watch_mode=settings.credential_watch_mode,
        poll_interval_seconds=settings.credential_poll_interval_seconds,
    )


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    The engine is built from the credential store's current credential.
    Use get_db_session() for per-request sessions.
    """
    return Database(
        get_credential_store(),
        driver=settings.database_driver,
        host=settings.database_host,
        port=settings.database_port,
        name=settings.database_name,
        logger=get_logger(),
        echo=settings.db_echo,
    )


@lru_cache()
def get_connection_pool_drainer() -> "ConnectionPoolDrainer":
    """Get connection pool drainer singleton (app-scoped).

    Subscribed to rotation notifications by the application lifespan.
    """
    from src.infrastructure.persistence.connection_pool_drainer import (
        ConnectionPoolDrainer,
    )

    return ConnectionPoolDrainer(
        pool=get_database(),
        credential_store=get_credential_store(),
        event_bus=get_event_bus(),
        logger=get_logger(),
        rotation_grace_seconds=settings.rotation_drain_grace_seconds,
        manual_grace_seconds=settings.manual_drain_grace_seconds,
    )


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Commits on success, rolls back on exception.

    Usage:
        session: AsyncSession = Depends(get_db_session)
    """
    async with get_database().get_session() as session:
        yield session
