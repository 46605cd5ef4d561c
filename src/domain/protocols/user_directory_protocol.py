"""User directory protocol (user population enumeration)."""

from typing import Protocol


class UserDirectoryProtocol(Protocol):
    """Stable-order paged listing of the user population.

    Implementations raise on enumeration failure; the orchestrator treats
    that as fatal for the run.
    """

    async def list_user_ids(self, *, skip: int, take: int) -> list[str]:
        """Return up to take user ids after skipping skip, in stable order."""
        ...

    async def count_users(self) -> int:
        """Return the size of the user population."""
        ...
