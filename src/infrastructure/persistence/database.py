"""Database connection and session management.

Provides SQLAlchemy async engine and session handling for a database whose
credentials rotate. The engine is built lazily from the credential store's
current snapshot and rebuilt after the pool is invalidated.

Following hexagonal architecture:
- This is an infrastructure concern
- Provides database sessions to the user directory and schema inspector
- Implements ConnectionPoolProtocol (invalidate_pool) for the drainer
"""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.core.result import Failure
from src.domain.entities.database_credential import DatabaseCredential
from src.domain.protocols.credential_store_protocol import CredentialStoreProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol


class DatabaseCredentialsUnavailableError(RuntimeError):
    """No credential has been delivered yet, so no connection can be opened."""


class Database:
    """Credential-aware database connection and session management.

    Handles:
    - Connection pooling (one engine per credential)
    - Session lifecycle
    - Transaction management
    - Pool invalidation after credential rotation

    Usage:
        db = Database(credential_store, driver="postgresql+asyncpg",
                      host="db", port=5432, name="identity", logger=logger)
        async with db.get_session() as session:
            # Automatically commits on success, rolls back on error
            ...
        await db.invalidate_pool()  # after rotation
    """

    def __init__(
        self,
        credential_store: CredentialStoreProtocol,
        *,
        driver: str,
        host: str | None,
        port: int | None,
        name: str,
        logger: LoggerProtocol,
        echo: bool = False,
        pool_size: int = 20,
        max_overflow: int = 0,
    ) -> None:
        """Initialize database with connection parameters.

        Args:
            credential_store: Source of the current username and password.
            driver: SQLAlchemy driver name (e.g., postgresql+asyncpg).
            host: Database host.
            port: Database port.
            name: Database name.
            logger: Structured logger.
            echo: If True, log all SQL statements (useful for debugging).
            pool_size: Number of connections to maintain in pool.
            max_overflow: Maximum overflow connections above pool_size.
        """
        self._credentials = credential_store
        self._driver = driver
        self._host = host
        self._port = port
        self._name = name
        self._logger = logger
        self._echo = echo
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._engine: AsyncEngine | None = None
        self._engine_username: str | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._engine_lock = asyncio.Lock()

    @property
    def engine_username(self) -> str | None:
        """Username the live engine was built with (None when no engine)."""
        return self._engine_username

    def build_url(self, credential: DatabaseCredential) -> URL:
        """Connection URL for a credential (password never rendered in logs)."""
        return URL.create(
            drivername=self._driver,
            username=credential.username,
            password=credential.password,
            host=self._host,
            port=self._port,
            database=self._name,
        )

    def _create_engine(self, credential: DatabaseCredential) -> AsyncEngine:
        connect_args: dict[str, Any] = (
            {
                "server_settings": {"jit": "off"},
                "command_timeout": 60,
                "timeout": 30,
            }
            if "postgresql" in self._driver
            else {}
        )
        return create_async_engine(
            self.build_url(credential),
            echo=self._echo,
            pool_pre_ping=True,  # Verify connections before use
            pool_size=self._pool_size,
            max_overflow=self._max_overflow,
            connect_args=connect_args,
        )

    async def get_engine(self) -> AsyncEngine:
        """Engine for the current credential, built on first use.

        Raises:
            DatabaseCredentialsUnavailableError: No credential delivered yet.
        """
        current = self._credentials.current
        if (
            self._engine is not None
            and current is not None
            and current.username != self._engine_username
        ):
            # Rotation observed before the drainer ran
            await self.invalidate_pool()

        engine = self._engine
        if engine is not None:
            return engine

        async with self._engine_lock:
            if self._engine is None:
                result = await self._credentials.get_current()
                if isinstance(result, Failure):
                    raise DatabaseCredentialsUnavailableError(result.error.message)
                credential = result.value
                self._engine = self._create_engine(credential)
                self._engine_username = credential.username
                self._session_factory = async_sessionmaker(
                    self._engine,
                    class_=AsyncSession,
                    expire_on_commit=False,
                )
                self._logger.info(
                    "database_engine_created",
                    username=credential.username,
                    host=self._host,
                    database=self._name,
                )
            return self._engine

    async def invalidate_pool(self) -> None:
        """Drop the engine and its pool.

        Idle pooled connections are closed now. Connections checked out by
        in-flight sessions finish normally and are discarded on release. The
        next session builds a new engine with the current credential.
        """
        async with self._engine_lock:
            engine, username = self._engine, self._engine_username
            self._engine = None
            self._engine_username = None
            self._session_factory = None
        if engine is None:
            return
        await engine.dispose()
        self._logger.info("database_pool_invalidated", username=username)

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a transactional database session.

        - Creates a new session on the current engine
        - Commits on successful exit
        - Rolls back on exception
        - Always closes the session

        Yields:
            AsyncSession: Database session for operations
        """
        await self.get_engine()
        factory = self._session_factory
        if factory is None:
            # Pool invalidated between engine creation and session checkout
            await self.get_engine()
            factory = self._session_factory
        assert factory is not None
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def close(self) -> None:
        """Close all database connections (application shutdown)."""
        await self.invalidate_pool()

    async def check_connection(self) -> bool:
        """Check if database connection is working.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            async with self.get_session() as session:
                await session.execute(text("SELECT 1"))
                return True
        except (SQLAlchemyError, OSError, DatabaseCredentialsUnavailableError) as e:
            self._logger.warning(
                "database_connection_check_failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False
