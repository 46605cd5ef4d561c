"""Unit tests for Settings (pydantic-settings)."""

import pytest
from pydantic import ValidationError

from src.core.config import Settings


@pytest.mark.unit
class TestExternalIssuer:
    def test_composed_from_base_url_and_realm(self):
        settings = Settings(
            external_idp_base_url="https://idp.example.com/",
            external_idp_realm="identity",
        )

        assert settings.external_issuer == "https://idp.example.com/realms/identity"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"external_idp_base_url": None, "external_idp_realm": "identity"},
            {"external_idp_base_url": "https://idp.example.com", "external_idp_realm": None},
        ],
    )
    def test_none_when_incomplete(self, overrides):
        assert Settings(**overrides).external_issuer is None


@pytest.mark.unit
class TestTokenFamilyTtl:
    def test_retention_days_win(self):
        settings = Settings(token_family_retention_days=2, refresh_token_expire_days=30)

        assert settings.token_family_ttl_seconds == 2 * 86400

    def test_falls_back_to_refresh_token_lifetime(self):
        settings = Settings(token_family_retention_days=0, refresh_token_expire_days=30)

        assert settings.token_family_ttl_seconds == 30 * 86400

    def test_falls_back_to_seven_days(self):
        settings = Settings(token_family_retention_days=0, refresh_token_expire_days=0)

        assert settings.token_family_ttl_seconds == 7 * 86400


@pytest.mark.unit
class TestValidators:
    def test_watch_mode_normalized(self):
        assert Settings(credential_watch_mode=" POLL ").credential_watch_mode == "poll"

    def test_watch_mode_rejected(self):
        with pytest.raises(ValidationError):
            Settings(credential_watch_mode="inotify")

    def test_trailing_slash_removed(self):
        settings = Settings(provisioning_api_base_url="https://prov.example.com/api/")

        assert settings.provisioning_api_base_url == "https://prov.example.com/api"

    @pytest.mark.parametrize("field", ["migration_min_sample_size", "migration_default_batch_size"])
    def test_non_positive_migration_sizes_rejected(self, field):
        with pytest.raises(ValidationError):
            Settings(**{field: 0})

    def test_min_sample_size_below_floor_rejected(self):
        with pytest.raises(ValidationError):
            Settings(migration_min_sample_size=2)

        assert Settings(migration_min_sample_size=10).migration_min_sample_size == 10

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("CACHE_KEY_PREFIX", "staging")
        monkeypatch.setenv("ADMIN_API_KEY", "k")

        settings = Settings()

        assert settings.cache_key_prefix == "staging"
        assert settings.admin_api_key == "k"
