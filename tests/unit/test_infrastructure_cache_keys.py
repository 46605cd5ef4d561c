"""Unit tests for CacheKeys."""

import pytest

from src.domain.enums import TokenIssuerType
from src.infrastructure.cache.cache_keys import CacheKeys


@pytest.mark.unit
class TestCacheKeys:
    def test_token_family_keys(self):
        keys = CacheKeys(prefix="trustshift")

        assert keys.token_family("abc") == "trustshift:token_family:abc"
        assert keys.token_family_latest("abc") == "trustshift:token_family_latest:abc"
        assert keys.token_family_revoked("abc") == "trustshift:token_family_revoked:abc"

    def test_telemetry_keys(self):
        keys = CacheKeys(prefix="trustshift")

        assert (
            keys.auth_outcome(TokenIssuerType.EXTERNAL, True)
            == f"trustshift:migration:auth:{TokenIssuerType.EXTERNAL.value}:success"
        )
        assert keys.auth_outcome(TokenIssuerType.LEGACY, False).endswith(":failure")
        assert keys.auth_latencies() == "trustshift:migration:auth_latency_ms"

    def test_prefix_isolates_deployments(self):
        assert CacheKeys(prefix="a").token_family("x") != CacheKeys(
            prefix="b"
        ).token_family("x")

    @pytest.mark.parametrize(
        ("key", "namespace"),
        [
            ("trustshift:token_family:abc", "token_family"),
            ("trustshift:migration:auth_latency_ms", "migration"),
            ("bare", "unknown"),
        ],
    )
    def test_namespace_from_key(self, key, namespace):
        assert CacheKeys(prefix="trustshift").namespace_from_key(key) == namespace
