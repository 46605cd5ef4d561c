"""Token issuer classification.

Which trust domain issued a bearer token. UNKNOWN is a valid outcome that
means "treat as untrusted", not an error.
"""

from enum import Enum


class TokenIssuerType(str, Enum):
    """Trust domain of a bearer token."""

    UNKNOWN = "unknown"
    LEGACY = "legacy"
    EXTERNAL = "external"
