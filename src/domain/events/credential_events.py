"""Database credential rotation events.

Events:
    - DatabaseCredentialsRotated: a reload resolved a new database role.
      Subscribers (the connection pool drainer) react by clearing pooled
      connections built with the previous credential.
    - DatabaseConnectionsDrained: the drain grace window elapsed.
"""

from dataclasses import dataclass

from src.domain.entities.database_credential import DatabaseCredential
from src.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True, slots=True)
class DatabaseCredentialsRotated(DomainEvent):
    """A reload replaced the credential with one for a different username.

    Attributes:
        credential: The new credential (complete snapshot).
        previous_username: Username of the superseded credential.
    """

    credential: DatabaseCredential
    previous_username: str


@dataclass(frozen=True, kw_only=True, slots=True)
class DatabaseConnectionsDrained(DomainEvent):
    """Grace window after a pool invalidation ended.

    Attributes:
        username: Username whose connections were drained.
        grace_seconds: Length of the grace window.
        manual: True for operator-triggered drains.
    """

    username: str
    grace_seconds: float
    manual: bool = False
