"""Schema inspector protocol (live store structure)."""

from typing import Protocol


class SchemaInspectorProtocol(Protocol):
    """Lists the structures present in the live identity store."""

    async def table_names(self) -> set[str]:
        """Return the table names of the live store. May raise."""
        ...
