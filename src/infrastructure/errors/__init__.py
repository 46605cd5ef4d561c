"""Infrastructure errors package.

Usage:
    from src.infrastructure.errors import CacheError, SecretSourceError
"""

from src.infrastructure.errors.infrastructure_error import (
    CacheError,
    InfrastructureError,
    SecretSourceError,
)

__all__ = [
    "InfrastructureError",
    "CacheError",
    "SecretSourceError",
]
