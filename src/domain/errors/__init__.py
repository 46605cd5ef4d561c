"""Domain errors package.

Usage:
    from src.domain.errors import CredentialError, MigrationError, TokenFamilyError
"""

from src.domain.errors.credential_error import CredentialError
from src.domain.errors.migration_error import MigrationError
from src.domain.errors.token_family_error import TokenFamilyError

__all__ = [
    "CredentialError",
    "MigrationError",
    "TokenFamilyError",
]
