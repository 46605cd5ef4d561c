"""Cache key construction utilities.

Centralized key construction so every instance agrees on the shared-state
layout. All keys follow the pattern: {prefix}:{resource}:{id}

Usage:
    from src.core.container import get_settings
    from src.infrastructure.cache.cache_keys import CacheKeys

    settings = get_settings()
    keys = CacheKeys(prefix=settings.cache_key_prefix)

    family_key = keys.token_family(family_id)
"""

from dataclasses import dataclass

from src.domain.enums import TokenIssuerType


@dataclass
class CacheKeys:
    """Centralized cache key construction utilities.

    Attributes:
        prefix: Cache key prefix (typically "trustshift").

    Example:
        keys = CacheKeys(prefix="trustshift")
        key = keys.token_family("0192...")  # "trustshift:token_family:0192..."
    """

    prefix: str

    def token_family(self, family_id: str) -> str:
        """Append-only list of every refresh token issued in a family.

        Pattern: {prefix}:token_family:{family_id}
        """
        return f"{self.prefix}:token_family:{family_id}"

    def token_family_latest(self, family_id: str) -> str:
        """Most recently registered token of a family.

        Pattern: {prefix}:token_family_latest:{family_id}
        """
        return f"{self.prefix}:token_family_latest:{family_id}"

    def token_family_revoked(self, family_id: str) -> str:
        """Revocation marker of a family.

        Pattern: {prefix}:token_family_revoked:{family_id}
        """
        return f"{self.prefix}:token_family_revoked:{family_id}"

    def auth_outcome(self, issuer: TokenIssuerType, success: bool) -> str:
        """Authentication counter per issuer and outcome.

        Pattern: {prefix}:migration:auth:{issuer}:{success|failure}
        """
        outcome = "success" if success else "failure"
        return f"{self.prefix}:migration:auth:{issuer.value}:{outcome}"

    def auth_latencies(self) -> str:
        """Bounded list of recent authentication latencies (milliseconds).

        Pattern: {prefix}:migration:auth_latency_ms
        """
        return f"{self.prefix}:migration:auth_latency_ms"

    def namespace_from_key(self, key: str) -> str:
        """Extract the resource namespace from a key.

        Example:
            keys.namespace_from_key("trustshift:token_family:abc")  # "token_family"
        """
        parts = key.split(":")
        if len(parts) >= 2:
            return parts[1]
        return "unknown"
