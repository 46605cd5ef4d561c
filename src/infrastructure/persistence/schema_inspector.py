"""SQL schema inspector.

Lists the tables present in the live identity database through SQLAlchemy's
runtime inspection API.
"""

from sqlalchemy import inspect
from sqlalchemy.engine import Connection

from src.infrastructure.persistence.user_directory import SessionFactory


def _table_names(sync_connection: Connection) -> list[str]:
    return inspect(sync_connection).get_table_names()


class SqlSchemaInspector:
    """Implements SchemaInspectorProtocol.

    Errors (connection refused, missing privileges) propagate to the caller.
    """

    def __init__(
        self, session_factory: SessionFactory, *, schema: str | None = None
    ) -> None:
        """Initialize inspector.

        Args:
            session_factory: Context manager factory yielding sessions.
            schema: Schema to inspect (None = default search path).
        """
        self._session_factory = session_factory
        self._schema = schema

    async def table_names(self) -> set[str]:
        async with self._session_factory() as session:
            connection = await session.connection()
            if self._schema is None:
                names = await connection.run_sync(_table_names)
            else:
                schema = self._schema
                names = await connection.run_sync(
                    lambda sync_conn: inspect(sync_conn).get_table_names(schema=schema)
                )
        return set(names)
