"""Centralized constants for internal implementation details.

Environment-specific values belong in `src/core/config.py`; this module only
holds fixed sizes and names.
"""

TOKEN_BYTES: int = 32
"""Random bytes in the secret part of a refresh token (256 bits)."""

REFRESH_TOKEN_SEPARATOR: str = "."
"""Separates the family id from the secret part of a refresh token."""

BEARER_PREFIX: str = "Bearer "
"""Authorization header scheme prefix (with trailing space)."""

EXTERNAL_IDP_CLAIMS: tuple[str, ...] = ("realm_access", "resource_access", "azp")
"""Claims only the external identity provider puts in its tokens."""

REQUIRED_IDENTITY_TABLES: tuple[str, ...] = (
    "users",
    "roles",
    "user_roles",
    "permissions",
    "role_permissions",
)
"""Tables that must exist before a migration run."""

USER_TABLE_NAME: str = "users"
"""Table paged by the user directory."""
