"""Configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Toolkit settings loaded from ``AIO_``-prefixed environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Adobe I/O Events
    io_events_base_url: str = Field(
        default="https://api.adobe.io",
        description="Adobe I/O Events API base URL",
    )
    consumer_id: str = Field(
        default="",
        description="Adobe I/O consumer organization ID",
    )
    project_id: str = Field(
        default="",
        description="Adobe I/O project ID",
    )
    workspace_id: str = Field(
        default="",
        description="Adobe I/O workspace ID",
    )
    api_key: str = Field(
        default="",
        description="Adobe I/O client ID (sent as x-api-key)",
    )
    access_token: str = Field(
        default="",
        description="Adobe IMS access token",
    )

    # Onboarding
    project_name: str = Field(
        default="",
        description="Project name used to build per-project provider labels",
    )

    # HTTP
    http_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for Adobe I/O API requests",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=True,
        description="Enable JSON structured logging",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
