"""Credential store protocol.

Holds the single current database credential for the process.
"""

from typing import Protocol

from src.core.result import Result
from src.domain.entities.database_credential import DatabaseCredential
from src.domain.enums import CredentialStoreState
from src.domain.errors import CredentialError


class CredentialStoreProtocol(Protocol):
    """Hot-swappable database credential holder."""

    @property
    def state(self) -> CredentialStoreState:
        """Current lifecycle state."""
        ...

    @property
    def current(self) -> DatabaseCredential | None:
        """Lock-free snapshot of the current credential (None before first load)."""
        ...

    async def get_current(self) -> Result[DatabaseCredential, CredentialError]:
        """Current credential, loading it first if never loaded.

        Fails with CREDENTIALS_UNAVAILABLE while the secret is not delivered.
        """
        ...

    def enter_drain_grace(self) -> None:
        """Mark that pooled connections are draining after a rotation."""
        ...

    def complete_drain(self) -> None:
        """Mark that the drain grace window ended."""
        ...
