"""Errors produced by adapters around Redis and the mounted secret file.

Adapters translate driver exceptions (redis.RedisError, OSError,
json.JSONDecodeError) into these values and return them inside a Failure.
The domain ErrorCode decides the HTTP mapping; the InfrastructureErrorCode
only says which adapter step broke.
"""

from dataclasses import dataclass
from typing import Any

from src.core.errors import DomainError
from src.infrastructure.enums import InfrastructureErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class InfrastructureError(DomainError):
    """Adapter failure with the adapter's own code attached.

    Attributes:
        infrastructure_code: Which adapter step failed.
        details: Key, operation and the driver's message, when known.
    """

    infrastructure_code: InfrastructureErrorCode | None = None
    details: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CacheError(InfrastructureError):
    """Redis command or connection failure."""


@dataclass(frozen=True, slots=True, kw_only=True)
class SecretSourceError(InfrastructureError):
    """Credential document missing, unreadable or malformed.

    Attributes:
        path: Location of the document that failed.
    """

    path: str
