"""Integration tests for the SQL user directory and schema inspector.

Runs against a file-backed SQLite database through aiosqlite, so real SQL is
compiled and executed without a database server.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.infrastructure.persistence.schema_inspector import SqlSchemaInspector
from src.infrastructure.persistence.user_directory import SqlUserDirectory


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'identity.db'}")
    async with engine.begin() as conn:
        await conn.execute(text("CREATE TABLE users (id VARCHAR(36) PRIMARY KEY, email TEXT)"))
        await conn.execute(text("CREATE TABLE roles (id INTEGER PRIMARY KEY)"))
        await conn.execute(text("CREATE TABLE user_roles (user_id TEXT, role_id INTEGER)"))
        for i in (3, 1, 4, 5, 9, 2, 6, 8, 7, 0):
            await conn.execute(
                text("INSERT INTO users (id, email) VALUES (:id, :email)"),
                {"id": f"user-{i:02d}", "email": f"user{i}@example.com"},
            )
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine):
    maker = async_sessionmaker(sqlite_engine, class_=AsyncSession, expire_on_commit=False)

    @asynccontextmanager
    async def get_session() -> AsyncGenerator[AsyncSession, None]:
        async with maker() as session:
            yield session

    return get_session


@pytest.mark.integration
class TestSqlUserDirectory:
    async def test_pages_in_id_order(self, session_factory):
        directory = SqlUserDirectory(session_factory)

        first = await directory.list_user_ids(skip=0, take=4)
        second = await directory.list_user_ids(skip=4, take=4)
        last = await directory.list_user_ids(skip=8, take=4)

        assert first == ["user-00", "user-01", "user-02", "user-03"]
        assert second == ["user-04", "user-05", "user-06", "user-07"]
        assert last == ["user-08", "user-09"]

    async def test_page_past_end_is_empty(self, session_factory):
        directory = SqlUserDirectory(session_factory)

        assert await directory.list_user_ids(skip=10, take=5) == []

    async def test_count_users(self, session_factory):
        assert await SqlUserDirectory(session_factory).count_users() == 10

    async def test_missing_table_raises(self, session_factory):
        directory = SqlUserDirectory(session_factory, table_name="accounts")

        with pytest.raises(OperationalError):
            await directory.count_users()


@pytest.mark.integration
class TestSqlSchemaInspector:
    async def test_lists_tables(self, session_factory):
        names = await SqlSchemaInspector(session_factory).table_names()

        assert names == {"users", "roles", "user_roles"}
