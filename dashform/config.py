"""
Dashform Configuration

Uses pydantic-settings for environment variable loading with validation.
All configuration is centralized here for easy management.
"""

from functools import lru_cache
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Provider settings loaded from environment variables.

    Environment variables can be set directly or via .env file.
    API and application keys should always come from the environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="DASHFORM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Logging
    # ==========================================================================
    log_level: str = Field(
        default="INFO",
        description="Level for the dashform logger"
    )

    # ==========================================================================
    # Dashboard API
    # ==========================================================================
    api_url: str = Field(
        default="https://api.datadoghq.com",
        description="Base URL of the dashboard API"
    )

    api_key: str = Field(
        default="",
        description="API key sent as DD-API-KEY"
    )

    app_key: str = Field(
        default="",
        description="Application key sent as DD-APPLICATION-KEY"
    )

    timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout in seconds for a single API call"
    )

    max_retries: int = Field(
        default=0,
        ge=0,
        description="Connection retries performed by the HTTP transport"
    )

    # ==========================================================================
    # Configuration decoding
    # ==========================================================================
    lenient_numeric_parsing: bool = Field(
        default=False,
        description=(
            "Drop unparseable numeric strings (layout members, compute interval, "
            "process query limit) instead of rejecting the configuration"
        )
    )

    @computed_field
    @property
    def has_credentials(self) -> bool:
        """Whether both API and application keys are configured."""
        return bool(self.api_key and self.app_key)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
