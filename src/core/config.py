"""
Configuration management using Pydantic Settings.

Type-safe, validated configuration loaded from environment variables.
The secret-delivery agent writes database credentials to a file; only the
path to that file lives here, never the credential itself.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables (case-insensitive)
- Type validation via Pydantic

Usage:
    from src.core.config import settings

    prefix = settings.cache_key_prefix
    issuer = settings.external_issuer
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.enums import Environment


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. Default values (only for non-sensitive config)
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Application metadata
    app_name: str = Field(default="Trustshift", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    api_base_url: str = Field(
        default="http://localhost:8000",
        description="Public base URL (used in problem detail type URIs)",
    )
    api_v1_prefix: str = Field(default="/api/v1", description="API v1 route prefix")
    admin_api_key: str | None = Field(
        default=None,
        description="Shared key required in X-Admin-Key for admin endpoints. "
        "Admin endpoints answer 503 while unset.",
    )

    # Cache configuration (Redis)
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL (e.g., redis://host:port/db)",
    )
    cache_key_prefix: str = Field(
        default="trustshift",
        description="Namespace prefix for every shared-store key",
    )

    # Refresh token families
    refresh_token_expire_days: int = Field(
        default=30,
        description="Refresh token lifetime in days",
    )
    token_family_retention_days: int = Field(
        default=0,
        description="How long family records (and revocation markers) live. "
        "0 falls back to refresh_token_expire_days.",
    )

    # Database (credentials come from the secret file)
    database_driver: str = Field(
        default="postgresql+asyncpg",
        description="SQLAlchemy async driver name",
    )
    database_host: str = Field(default="localhost", description="Database host")
    database_port: int | None = Field(default=5432, description="Database port")
    database_name: str = Field(default="identity", description="Database name")
    db_echo: bool = Field(default=False, description="Log all SQL statements")
    database_credentials_path: str = Field(
        default="/vault/secrets/database-credentials.json",
        description="JSON file rewritten by the secret-delivery agent "
        "(env: DATABASE_CREDENTIALS_PATH)",
    )
    credential_reload_debounce_ms: int = Field(
        default=250,
        description="Quiet window that coalesces rapid secret-file writes",
    )
    credential_watch_mode: str = Field(
        default="native",
        description="How the secret file is watched: 'native' or 'poll'",
    )
    credential_poll_interval_seconds: float = Field(
        default=1.0,
        description="Modification-time polling interval (poll mode)",
    )
    rotation_drain_grace_seconds: float = Field(
        default=30.0,
        description="Grace window after a rotation clears the connection pool",
    )
    manual_drain_grace_seconds: float = Field(
        default=10.0,
        description="Grace window for operator-triggered drains",
    )

    # Token issuers
    external_idp_base_url: str | None = Field(
        default=None,
        description="External identity provider base URL (e.g., https://idp.example)",
    )
    external_idp_realm: str | None = Field(
        default=None,
        description="External identity provider realm",
    )
    legacy_jwt_issuer: str = Field(
        default="trustshift-identity",
        description="Issuer claim of tokens minted by the legacy token authority",
    )

    # Migration
    migration_default_batch_size: int = Field(
        default=100,
        description="Batch size used when the caller supplies a non-positive value",
    )
    migration_min_sample_size: int = Field(
        default=10,
        description="Floor for sampled provisioning verification",
    )
    provisioning_api_base_url: str | None = Field(
        default=None,
        description="Base URL of the per-user provisioning service. "
        "Unset means provisioning is unavailable (runs are forced to dry run).",
    )
    provisioning_api_timeout_seconds: float = Field(
        default=10.0,
        description="HTTP timeout for provisioning calls",
    )

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "api_base_url", "external_idp_base_url", "provisioning_api_base_url"
    )
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """
        Remove trailing slashes from URLs.

        Args:
            v: URL string or None.

        Returns:
            str | None: URL without trailing slash.
        """
        return v.rstrip("/") if v else v

    @field_validator("credential_watch_mode")
    @classmethod
    def validate_watch_mode(cls, v: str) -> str:
        """
        Validate the secret-file watch mode.

        Raises:
            ValueError: If mode is not 'native' or 'poll'.
        """
        mode = v.strip().lower()
        if mode not in {"native", "poll"}:
            raise ValueError("credential_watch_mode must be 'native' or 'poll'")
        return mode

    @field_validator("migration_default_batch_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Reject a non-positive batch size."""
        if v < 1:
            raise ValueError("migration_default_batch_size must be positive")
        return v

    @field_validator("migration_min_sample_size")
    @classmethod
    def validate_min_sample_size(cls, v: int) -> int:
        """Sampled verification never checks fewer than 10 users."""
        if v < 10:
            raise ValueError("migration_min_sample_size must be at least 10")
        return v

    @property
    def external_issuer(self) -> str | None:
        """
        Canonical issuer URL of the external identity provider.

        Returns:
            str | None: ``{base_url}/realms/{realm}``, or None when either part
            is not configured.
        """
        if not self.external_idp_base_url or not self.external_idp_realm:
            return None
        return f"{self.external_idp_base_url}/realms/{self.external_idp_realm}"

    @property
    def token_family_ttl_seconds(self) -> int:
        """
        TTL applied to token families and their revocation markers.

        Falls back from retention days to refresh token lifetime to 7 days.
        """
        days = self.token_family_retention_days
        if days <= 0:
            days = self.refresh_token_expire_days
        if days <= 0:
            days = 7
        return days * 24 * 60 * 60

    @property
    def is_development(self) -> bool:
        """True if environment is DEVELOPMENT."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """True if environment is TESTING."""
        return self.environment == Environment.TESTING

    @property
    def is_production(self) -> bool:
        """True if environment is PRODUCTION."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()


settings = get_settings()
