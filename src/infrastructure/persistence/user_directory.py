"""SQL user directory.

Pages the user population in stable primary-key order for the migration
orchestrator. Read-only: user CRUD lives in the identity service proper.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from sqlalchemy import column, func, select, table
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.constants import USER_TABLE_NAME

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class SqlUserDirectory:
    """Implements UserDirectoryProtocol over the ``users`` table.

    Note: SQLAlchemy errors propagate; the orchestrator treats them as an
    enumeration failure for the whole run.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        *,
        table_name: str = USER_TABLE_NAME,
        id_column: str = "id",
    ) -> None:
        """Initialize directory.

        Args:
            session_factory: Context manager factory yielding sessions
                (``Database.get_session``).
            table_name: Users table name.
            id_column: Primary key column used for ordering.
        """
        self._session_factory = session_factory
        self._id = column(id_column)
        self._table = table(table_name, self._id)

    async def list_user_ids(self, *, skip: int, take: int) -> list[str]:
        """Return up to take user ids after skip, ordered by id."""
        stmt = (
            select(self._id)
            .select_from(self._table)
            .order_by(self._id)
            .offset(max(0, skip))
            .limit(max(0, take))
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [str(user_id) for user_id in result.scalars().all()]

    async def count_users(self) -> int:
        stmt = select(func.count()).select_from(self._table)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return int(result.scalar_one())
