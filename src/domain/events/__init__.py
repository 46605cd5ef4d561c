"""Domain events package."""

from src.domain.events.base_event import DomainEvent
from src.domain.events.credential_events import (
    DatabaseConnectionsDrained,
    DatabaseCredentialsRotated,
)
from src.domain.events.token_family_events import (
    RefreshTokenReuseDetected,
    TokenFamilyRevoked,
)

__all__ = [
    "DatabaseConnectionsDrained",
    "DatabaseCredentialsRotated",
    "DomainEvent",
    "RefreshTokenReuseDetected",
    "TokenFamilyRevoked",
]
