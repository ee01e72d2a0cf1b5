"""Configuration management for DocLite.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded at application
startup and is immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables prefixed with ``DOCLITE_``
    and from an optional .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DOCLITE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "DocLite"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = ""

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8080
    workers: int = 1

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./doclite_data/doclite.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # SQLite Pragmas
    db_sqlite_journal_mode: str = "WAL"
    db_sqlite_synchronous: str = "NORMAL"
    db_sqlite_busy_timeout: int = 5000  # milliseconds
    db_sqlite_foreign_keys: bool = True

    # CORS Settings
    cors_origins: list[str] = Field(default=["*"])
    cors_allow_credentials: bool = False
    cors_allow_methods: list[str] = Field(default=["*"])
    cors_allow_headers: list[str] = Field(default=["*"])

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Pagination Settings
    default_page_limit: int = Field(default=10, ge=1)
    max_page_limit: int = Field(default=100, ge=1)

    # Collection names
    strict_collection_names: bool = Field(
        default=True,
        description="Reject collection names outside [A-Za-z_][A-Za-z0-9_]* instead of trusting them",
    )

    @field_validator("cors_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: str | list[str]) -> list[str]:
        """Parse comma-separated strings into lists."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @model_validator(mode="after")
    def validate_page_limits(self) -> "Settings":
        """Validate that the default page size does not exceed the ceiling."""
        if self.default_page_limit > self.max_page_limit:
            raise ValueError(
                f"default_page_limit ({self.default_page_limit}) cannot exceed "
                f"max_page_limit ({self.max_page_limit})"
            )
        return self

    @model_validator(mode="after")
    def validate_sqlite_workers(self) -> "Settings":
        """Validate that SQLite is not used with multiple workers."""
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers, but SQLite requires workers=1."
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
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"

    @property
    def is_memory_database(self) -> bool:
        """Check if the configured database lives in memory only."""
        return ":memory:" in self.database_url or self.database_url.endswith("://")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
