"""Core shared kernel.

Result types, base errors and error codes used by every layer. The core
package has no dependencies on other application layers.
"""

from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, DomainError, ValidationError
from src.core.result import Failure, Result, Success

__all__ = [
    "AuthenticationError",
    "DomainError",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
    "ValidationError",
]
