"""Generic error classes shared by all layers.

Error Types:
- ValidationError: Input validation failures
- AuthenticationError: Authentication failures (bad or replayed token)
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure.

    The message is safe to show to clients: it never hints whether a token
    was replayed or simply unknown.
    """

    pass
