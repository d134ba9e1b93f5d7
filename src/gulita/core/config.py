"""Configuration management for Gulita.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded once at process
start and is read-only afterwards.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings.

    Every field can be overridden with a ``GULITA_`` prefixed environment
    variable, e.g. ``GULITA_JWT_SECRET``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GULITA_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "Gulita"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 3000
    workers: int = 1

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./data/gulita.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # Token Settings
    jwt_secret: str | None = Field(
        default=None,
        description="Secret used to sign access tokens. Must be set before issuing tokens.",
    )
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "gulita"
    jwt_audience: str = "urn:audience:test"
    access_token_expire_minutes: int = 15
    access_token_max_age_seconds: int = 4 * 60 * 60
    token_leeway_seconds: int = 15
    refresh_token_expire_days: int = 7
    refresh_token_bytes: int = Field(default=64, ge=16)

    # Password Hashing (argon2 cost factor)
    password_hash_time_cost: int = Field(default=3, ge=1)
    password_hash_memory_cost: int = Field(default=65536, ge=8)  # KiB
    password_hash_parallelism: int = Field(default=4, ge=1)

    # CORS Settings
    cors_origins: list[str] = Field(default=["*"])
    cors_allow_credentials: bool = False
    cors_allow_methods: list[str] = Field(default=["*"])
    cors_allow_headers: list[str] = Field(default=["*"])

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Diabetes Prediction Service
    prediction_url: str | None = Field(
        default=None,
        description="Inference endpoint used when a check is submitted without a result",
    )
    prediction_timeout_seconds: float = 10.0

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

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
    def access_token_expire_seconds(self) -> int:
        """Access token lifetime in seconds."""
        return self.access_token_expire_minutes * 60


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
