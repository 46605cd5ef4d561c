"""Base domain event class.

Domain events record things that happened (past tense: DatabaseCredentialsRotated,
RefreshTokenReuseDetected). They are published on the event bus after the
state change they describe has taken effect.

Usage:
    >>> @dataclass(frozen=True, kw_only=True, slots=True)
    >>> class TokenFamilyRevoked(DomainEvent):
    ...     family_id: str
    ...     revoked_count: int
    >>>
    >>> event = TokenFamilyRevoked(family_id="abc", revoked_count=3)
    >>> event.event_id  # Auto-generated UUID
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, kw_only=True, slots=True)
class DomainEvent:
    """Base class for all domain events.

    All domain events MUST:
        1. Inherit from this base class
        2. Use past tense naming
        3. Be frozen dataclasses with kw_only=True

    Attributes:
        event_id: Unique identifier for this event instance (auto-generated).
        occurred_at: When the event occurred (UTC, auto-generated).
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
