"""Configuration management for ThinkInk.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded once at
application startup and is immutable during runtime; rotating the signing
secret requires a restart.
"""

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me-in-production-use-openssl-rand-hex-32"


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables (``THINKINK_`` prefix)
    and .env files. All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="THINKINK_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application Settings
    app_name: str = "ThinkInk"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./data/thinkink.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # Security Settings
    secret_key: str = Field(
        default=DEFAULT_SECRET_KEY,
        description="Secret key for session token signing",
    )
    cookie_name: str = "token"
    cookie_secure: bool | None = Field(
        default=None,
        description="Mark the session cookie Secure (defaults to on in production)",
    )
    cookie_samesite: Literal["lax", "strict", "none"] = "lax"

    # CORS Settings
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default=["https://think-ink.vercel.app", "http://localhost:5173"]
    )

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Media Store Settings
    media_provider: Literal["local", "s3"] = "local"
    media_folder: str = "posts"
    media_local_path: str = "./data/uploads"
    media_public_base_url: str = "http://localhost:8000/uploads"
    upload_tmp_dir: str | None = None
    max_upload_size: int = 10 * 1024 * 1024  # 10MB in bytes
    allowed_mime_types: Annotated[list[str], NoDecode] = Field(
        default=[
            "image/jpeg",
            "image/png",
            "image/gif",
            "image/webp",
            "image/avif",
        ]
    )

    # S3 Media Settings
    s3_bucket: str | None = None
    s3_region: str = "us-east-1"
    s3_access_key_id: str | None = None
    s3_secret_access_key: str | None = None
    s3_endpoint_url: str | None = None
    s3_public_base_url: str | None = Field(
        default=None,
        description="Public URL prefix for stored objects (CDN or bucket URL)",
    )

    @field_validator("cors_origins", "allowed_mime_types", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: str | list[str]) -> list[str]:
        """Parse comma-separated strings into lists."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("media_folder")
    @classmethod
    def strip_media_folder(cls, v: str) -> str:
        return v.strip("/")

    @model_validator(mode="after")
    def validate_production_secret(self) -> "Settings":
        """Refuse to sign tokens with the default secret in production."""
        if self.environment == "production" and self.secret_key == DEFAULT_SECRET_KEY:
            raise ValueError(
                "THINKINK_SECRET_KEY must be set to a unique value in production"
            )
        return self

    @model_validator(mode="after")
    def validate_s3_settings(self) -> "Settings":
        if self.media_provider == "s3" and not self.s3_bucket:
            raise ValueError("THINKINK_S3_BUCKET is required when media_provider is 's3'")
        return self

    @model_validator(mode="after")
    def validate_sqlite_workers(self) -> "Settings":
        """Validate that SQLite is not used with multiple workers."""
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers, but SQLite requires workers=1. "
                "Either use --workers 1 or switch to PostgreSQL."
            )
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def session_cookie_secure(self) -> bool:
        if self.cookie_secure is None:
            return self.is_production
        return self.cookie_secure


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded once per process and shared by every request.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
