"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. The database URL is either given directly
(DATABASE_URL) or assembled from the DB_USER / DB_PASSWORD / DB_HOST /
DB_PORT / DB_NAME parts; it is resolved and validated at load time.
"""

from functools import lru_cache
from typing import Literal
from urllib.parse import quote

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jobboard.domain.enums import UpdateMissingPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "jobboard"
    app_version: str = "1.0.0"
    debug: bool = False

    # HTTP
    request_id_header: str = "X-Request-ID"
    max_request_body_bytes: int = Field(default=1_048_576, ge=1)

    # Database: DATABASE_URL wins; otherwise built from the DB_* parts.
    database_url: str = ""
    db_user: str = ""
    db_password: SecretStr = SecretStr("")
    db_host: str = ""
    db_port: str = "5432"
    db_name: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Identity provider webhook (Svix-style signing secret, usually "whsec_...").
    identity_webhook_secret: SecretStr | None = None
    webhook_tolerance_seconds: int = 300

    # Identity synchronization
    sync_update_missing_policy: UpdateMissingPolicy = UpdateMissingPolicy.UPSERT
    sync_step_max_attempts: int = Field(default=3, ge=1)
    sync_step_backoff_seconds: float = Field(default=0.2, ge=0)

    # Redis tag store / tagged read cache
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    cache_default_profile: str = "default"
    # Profile name -> TTL (seconds) for entries cached under tags last invalidated with it.
    cache_profile_ttls: dict[str, int] = Field(
        default_factory=lambda: {"default": 300, "max": 86400}
    )

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: Literal["console", "otlp"] = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def resolve_database_url(self) -> "Settings":
        """Assemble DATABASE_URL from DB_* parts when it is not set directly.

        An empty URL is allowed (the SQL engine is then never created and
        write paths raise SqlNotConfiguredException); partial DB_* parts are not.
        """
        if self.database_url:
            return self
        parts = {
            "DB_USER": self.db_user,
            "DB_PASSWORD": self.db_password.get_secret_value(),
            "DB_HOST": self.db_host,
            "DB_NAME": self.db_name,
        }
        provided = [name for name, value in parts.items() if value]
        if not provided:
            return self
        missing = [name for name, value in parts.items() if not value]
        if missing:
            raise ValueError(
                f"Incomplete database settings: {', '.join(missing)} must be set "
                "when DATABASE_URL is not provided."
            )
        self.database_url = (
            f"postgresql+asyncpg://{quote(self.db_user, safe='')}:"
            f"{quote(parts['DB_PASSWORD'], safe='')}@{self.db_host}:{self.db_port}/{self.db_name}"
        )
        return self

    @model_validator(mode="after")
    def validate_cache_profiles(self) -> "Settings":
        """The default cache profile must have a configured TTL."""
        if self.cache_default_profile not in self.cache_profile_ttls:
            raise ValueError(
                f"cache_default_profile {self.cache_default_profile!r} has no entry in "
                "cache_profile_ttls"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    In tests, call get_settings.cache_clear() before overriding env vars so
    the next get_settings() uses the new values.
    """
    return Settings()
