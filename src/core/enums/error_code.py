"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Authentication errors (AUTHENTICATION_*, TOKEN_*)
- Token family errors (TOKEN_FAMILY_*, TOKEN_STORE_*)
- Credential errors (CREDENTIALS_*)
- Migration errors (USER_*)
- Infrastructure errors (CACHE_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_INPUT = "invalid_input"

    # Authentication errors
    AUTHENTICATION_FAILED = "authentication_failed"
    TOKEN_INVALID = "token_invalid"

    # Token family errors
    TOKEN_FAMILY_REVOKED = "token_family_revoked"
    TOKEN_STORE_UNAVAILABLE = "token_store_unavailable"

    # Credential errors
    CREDENTIALS_UNAVAILABLE = "credentials_unavailable"
    CREDENTIALS_INVALID = "credentials_invalid"

    # Migration errors
    USER_ENUMERATION_FAILED = "user_enumeration_failed"

    # Infrastructure errors
    CACHE_UNAVAILABLE = "cache_unavailable"
