"""Integration tests for the credential-aware Database.

Engine creation is redirected to a file-backed SQLite database (SQLite URLs
cannot carry a username), while the credential store drives when the engine
is built and rebuilt.
"""

from unittest.mock import Mock

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.entities.database_credential import DatabaseCredential
from src.domain.errors import CredentialError
from src.infrastructure.persistence.database import (
    Database,
    DatabaseCredentialsUnavailableError,
)


class FakeCredentialStore:
    def __init__(self, credential: DatabaseCredential | None):
        self.credential = credential

    @property
    def current(self) -> DatabaseCredential | None:
        return self.credential

    async def get_current(self):
        if self.credential is None:
            return Failure(
                error=CredentialError(
                    code=ErrorCode.CREDENTIALS_UNAVAILABLE,
                    message="Database credentials are not available",
                )
            )
        return Success(value=self.credential)


@pytest.fixture
def database_factory(tmp_path, mock_logger):
    created: list[str] = []
    url = f"sqlite+aiosqlite:///{tmp_path / 'identity.db'}"

    def factory(store: FakeCredentialStore) -> Database:
        database = Database(
            store,
            driver="postgresql+asyncpg",
            host="db.internal",
            port=5432,
            name="identity",
            logger=mock_logger,
        )

        def create_engine(credential: DatabaseCredential):
            created.append(credential.username)
            return create_async_engine(url)

        database._create_engine = Mock(side_effect=create_engine)
        return database

    factory.created = created
    return factory


def _credential(username: str) -> DatabaseCredential:
    return DatabaseCredential(username=username, password="p")


@pytest.mark.integration
class TestDatabase:
    def test_build_url_hides_password(self, mock_logger):
        database = Database(
            FakeCredentialStore(None),
            driver="postgresql+asyncpg",
            host="db.internal",
            port=5432,
            name="identity",
            logger=mock_logger,
        )

        url = database.build_url(
            DatabaseCredential(username="v-identity-a", password="hunter2")
        )

        assert url.username == "v-identity-a"
        assert url.password == "hunter2"
        assert "hunter2" not in str(url)

    async def test_check_connection(self, database_factory):
        database = database_factory(FakeCredentialStore(_credential("v-identity-a")))

        assert await database.check_connection() is True
        assert database.engine_username == "v-identity-a"
        await database.close()

    async def test_check_connection_without_credentials(
        self, database_factory, mock_logger
    ):
        database = database_factory(FakeCredentialStore(None))

        assert await database.check_connection() is False
        mock_logger.warning.assert_called_once()

    async def test_session_raises_without_credentials(self, database_factory):
        database = database_factory(FakeCredentialStore(None))

        with pytest.raises(DatabaseCredentialsUnavailableError):
            async with database.get_session():
                pass

    async def test_engine_reused_until_invalidated(self, database_factory):
        database = database_factory(FakeCredentialStore(_credential("v-identity-a")))

        first = await database.get_engine()
        assert await database.get_engine() is first

        await database.invalidate_pool()
        assert database.engine_username is None

        rebuilt = await database.get_engine()
        assert rebuilt is not first
        assert database_factory.created == ["v-identity-a", "v-identity-a"]
        await database.close()

    async def test_engine_rebuilt_after_rotation(self, database_factory):
        store = FakeCredentialStore(_credential("v-identity-a"))
        database = database_factory(store)
        await database.get_engine()

        store.credential = _credential("v-identity-b")
        async with database.get_session() as session:
            await session.execute(text("SELECT 1"))

        assert database.engine_username == "v-identity-b"
        assert database_factory.created == ["v-identity-a", "v-identity-b"]
        await database.close()

    async def test_session_rolls_back_on_error(self, database_factory):
        database = database_factory(FakeCredentialStore(_credential("v-identity-a")))
        async with database.get_session() as session:
            await session.execute(text("CREATE TABLE t (v INTEGER)"))

        with pytest.raises(RuntimeError):
            async with database.get_session() as session:
                await session.execute(text("INSERT INTO t (v) VALUES (1)"))
                raise RuntimeError("abort")

        async with database.get_session() as session:
            count = (await session.execute(text("SELECT COUNT(*) FROM t"))).scalar_one()
        assert count == 0
        await database.close()
