"""Application configuration using pydantic-settings."""
from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Only acceptable against a local database (see validate_session_secret)
DEV_SESSION_SECRET = "dev-insecure-session-secret"

LOCAL_HOSTS = {"localhost", "127.0.0.1", "0.0.0.0", "::1", ""}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str
    db_pool_size: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, validation_alias="DB_MAX_OVERFLOW")

    # Sessions - HS256 signed tokens carried in a cookie or a Bearer header
    session_secret: str = Field(default=DEV_SESSION_SECRET, validation_alias="SESSION_SECRET")
    session_cookie_name: str = Field(
        default="session_token",
        validation_alias="SESSION_COOKIE_NAME",
    )
    session_max_age_seconds: int = Field(
        default=30 * 24 * 60 * 60,
        ge=60,
        validation_alias="SESSION_MAX_AGE_SECONDS",
    )
    session_cookie_secure: bool = Field(default=False, validation_alias="SESSION_COOKIE_SECURE")

    # bcrypt cost factor for stored password hashes
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, validation_alias="BCRYPT_ROUNDS")

    # Base URL used by the Python client hooks
    api_url: str = Field(default="http://localhost:8000", validation_alias="API_URL")

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        validation_alias="CORS_ORIGINS",
    )

    @model_validator(mode="after")
    def validate_session_secret(self) -> "Settings":
        """
        Prevent the built-in development secret from being used with a remote database.

        Anyone who knows the development secret can forge a session for any email,
        so it is only tolerated while the database lives on this machine.
        """
        if self.session_secret != DEV_SESSION_SECRET:
            return self

        try:
            hostname = urlparse(self.database_url).hostname or ""
        except ValueError:
            hostname = "unparseable"

        if hostname.lower() not in LOCAL_HOSTS:
            raise ValueError(
                f"SESSION_SECRET must be set when using a non-local database. "
                f"Database host '{hostname}' appears to be a production database.",
            )

        return self

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
