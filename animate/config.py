"""
Configuration for the AniMate core.

Settings are read from environment variables prefixed with ``ANIMATE_``
(or a local ``.env`` file) and validated by pydantic-settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application settings shared by the API client and the entry point."""

    model_config = SettingsConfigDict(
        env_prefix="ANIMATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jikan_api_base_url: str = Field(
        default="https://api.jikan.moe/v4",
        min_length=8,
        description="Base URL of the Jikan REST API",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Per-request HTTP timeout in seconds",
    )
    log_level: str = Field(default="INFO", description="Loguru level for the console sink")


config = Config()
