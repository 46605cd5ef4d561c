"""Core errors package.

Usage:
    from src.core.errors import AuthenticationError, DomainError, ValidationError
"""

from src.core.errors.common_errors import AuthenticationError, ValidationError
from src.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "AuthenticationError",
]
