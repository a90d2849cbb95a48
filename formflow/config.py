# =============================================================================
# formflow/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from formflow.config import get_settings
#   print(get_settings().PORT)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in the working directory (if exists)
#
# Settings are only the environment-driven part of the bootstrap defaults.
# formflow/defaults.py merges them with the path/feature defaults.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Server, session and redis settings loaded from environment variables.

    Every value has a development-friendly default, so a bare checkout
    boots without any environment at all.
    """

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------

    PROTOCOL: Literal["http", "https"] = Field(
        default="http",
        description="Protocol the service is advertised on"
    )

    HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the HTTP server to"
    )

    PORT: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port for the HTTP server"
    )

    NODE_ENV: str = Field(
        default="development",
        description="Current environment (development, test, production, ...)"
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root logging level used by the CLI entry point"
    )

    # -------------------------------------------------------------------------
    # Redis
    # -------------------------------------------------------------------------

    REDIS_HOST: str = Field(
        default="127.0.0.1",
        description="Redis host checked by the readiness endpoint"
    )

    REDIS_PORT: int = Field(
        default=6379,
        ge=1,
        le=65535,
        description="Redis port"
    )

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    SESSION_TTL: int = Field(
        default=1800,
        ge=1,
        description="Session lifetime in seconds"
    )

    SESSION_SECRET: str = Field(
        default="changethis",
        description="Secret used to sign the session cookie"
    )

    SESSION_NAME: str = Field(
        default="hod.sid",
        description="Name of the session cookie"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Empty env vars fall back to the defaults above
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def redis_url(self) -> str:
        """Build a redis:// URL from REDIS_HOST and REDIS_PORT."""
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/0"

    @property
    def is_test(self) -> bool:
        return self.NODE_ENV == "test"

    @property
    def is_production(self) -> bool:
        return self.NODE_ENV == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Call get_settings.cache_clear() after changing the environment
    (tests do this) to force a re-read.

    Returns:
        Settings: The application settings instance
    """
    return Settings()
