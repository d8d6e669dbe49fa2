"""
MediaGuard Configuration Management Module

This module loads and validates the service settings using Pydantic Settings:
- Application settings (name, environment, debug mode, logging)
- HTTP server binding and CORS origins
- Defaults for the advanced size check when a request omits them
- Batch validation limits

The category registry (extensions, MIME types, size limits, tiers) is fixed
in code and is deliberately not part of the configuration.

All settings support environment variable overrides and .env file loading.
"""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from mediaguard.models.media import SizeValidationOptions


class Settings(BaseSettings):
    """
    Configuration settings for the MediaGuard service.

    Configuration Categories:
    - Application: name, environment, debug mode, log level and format
    - Server: uvicorn bind address and CORS origins
    - Validation: request defaults for size options and the batch limit

    Example usage:
        ```python
        from mediaguard.config import Settings

        settings = Settings(log_level="DEBUG")
        print(settings.log_level)  # "debug"
        ```
    """

    # =========================================================================
    # Application Settings
    # =========================================================================

    app_name: str = Field(
        default="MediaGuard",
        description="Application name displayed in API documentation and logs",
    )

    app_env: str = Field(
        default="development",
        description="Application environment (development, staging, production, testing)",
    )

    debug: bool = Field(default=False, description="Enable debug mode and verbose logging")

    log_level: str = Field(
        default="info", description="Logging level (debug, info, warning, error, critical)"
    )

    json_logs: bool = Field(
        default=True,
        description="Emit JSON log lines; disable for human-readable development logs",
    )

    # =========================================================================
    # Server Settings
    # =========================================================================

    host: str = Field(default="0.0.0.0", description="Host address for the API server to bind to")

    port: int = Field(default=8000, description="Port number for the API server", ge=1, le=65535)

    cors_origins: Annotated[list[str], NoDecode] = Field(
        default=["http://localhost:3000"],
        description="List of allowed CORS origins for frontend access",
    )

    # =========================================================================
    # Validation Settings
    # =========================================================================

    recommend_optimization: bool = Field(
        default=False,
        description="Attach optimization suggestions to every non-excellent size tier",
    )

    allow_compression: bool = Field(
        default=True,
        description="Flag oversized images as eligible for automatic compression",
    )

    max_batch_size: int = Field(
        default=50,
        description="Maximum number of files accepted by one batch validation request",
        ge=1,
        le=500,
    )

    # =========================================================================
    # Model Configuration
    # =========================================================================

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level is a valid logging level."""
        valid_levels = {"debug", "info", "warning", "error", "critical"}
        normalized = v.lower()
        if normalized not in valid_levels:
            raise ValueError(
                f"Invalid log_level '{v}'. Must be one of: {', '.join(sorted(valid_levels))}"
            )
        return normalized

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate that app_env is a valid environment name."""
        valid_envs = {"development", "staging", "production", "testing"}
        normalized = v.lower()
        if normalized not in valid_envs:
            raise ValueError(
                f"Invalid app_env '{v}'. Must be one of: {', '.join(sorted(valid_envs))}"
            )
        return normalized

    @field_validator("cors_origins", mode="before")
    @classmethod
    def validate_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string if provided as string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    def size_options(
        self,
        recommend_optimization: bool | None = None,
        allow_compression: bool | None = None,
    ) -> SizeValidationOptions:
        """
        Build size options, falling back to the configured defaults.

        Args:
            recommend_optimization: Per-request override, or None for the default
            allow_compression: Per-request override, or None for the default
        """
        return SizeValidationOptions(
            recommend_optimization=(
                self.recommend_optimization
                if recommend_optimization is None
                else recommend_optimization
            ),
            allow_compression=(
                self.allow_compression if allow_compression is None else allow_compression
            ),
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get the global Settings instance.

    The @lru_cache decorator ensures that the Settings object is created only
    once on first call; tests call ``get_settings.cache_clear()`` after
    changing the environment.

    Returns:
        Settings: The global configuration instance.
    """
    return Settings()
