# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

Settings are loaded from environment variables (and an optional ``.env``
file) with defaults suitable for local development.

The Settings class aggregates all subsettings. A cached instance is
provided via get_settings() for dependency injection.

Example:
    >>> from swarsetu.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> settings.handwriting.default_canvas_width
    300
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HandwritingSettings(BaseSettings):
    """Handwriting analysis configuration.

    Attributes:
        config_dir: Directory holding thresholds.yaml / recommendations.yaml
            overrides. Packaged defaults are used when unset.
        validate_input: Validate capture data before running the engine.
        default_canvas_width: Canvas width used when a session reports none.
        default_canvas_height: Canvas height used when a session reports none.
        default_grade: Grade assumed when a grade label carries no digits.
        default_language: Language used for prompts and recommendations.
    """

    model_config = SettingsConfigDict(
        env_prefix="HANDWRITING_",
        extra="ignore",
    )

    config_dir: str | None = None
    validate_input: bool = True
    default_canvas_width: int = 300
    default_canvas_height: int = 300
    default_grade: int = 3
    default_language: str = "en"


class CORSSettings(BaseSettings):
    """CORS configuration for API.

    Attributes:
        origins: Comma-separated list of allowed origins.
        allow_credentials: Whether to allow credentials.
        allow_methods: Allowed HTTP methods.
        allow_headers: Allowed HTTP headers.
    """

    model_config = SettingsConfigDict(
        env_prefix="CORS_",
        extra="ignore",
    )

    origins: str = "http://localhost:3000,http://localhost:5173"
    allow_credentials: bool = True
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into a list."""
        return [origin.strip() for origin in self.origins.split(",") if origin.strip()]


class APISettings(BaseSettings):
    """API server configuration.

    Attributes:
        host: Host to bind to.
        port: Port to listen on.
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 34000


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        handwriting: Handwriting analysis settings.
        cors: CORS settings.
        api: API server settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    handwriting: HandwritingSettings = Field(default_factory=HandwritingSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    api: APISettings = Field(default_factory=APISettings)

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing or after changing environment variables.
    """
    get_settings.cache_clear()
