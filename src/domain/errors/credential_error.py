"""Database credential error types."""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class CredentialError(DomainError):
    """Credential store failure.

    CREDENTIALS_UNAVAILABLE is retryable: the secret-delivery agent has not
    written the file yet.

    Attributes:
        path: Secret file path.
    """

    path: str | None = None
