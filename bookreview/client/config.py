"""
Client Configuration

Environment variables (prefix BOOKREVIEW_):

    BOOKREVIEW_API_URL=http://localhost:8001/api
    BOOKREVIEW_TIMEOUT=10
    BOOKREVIEW_STORAGE_DIR=~/.bookreview
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Settings for the terminal client."""

    api_url: str = Field(
        default="http://localhost:8001/api",
        description="Base URL of the API, including the API prefix"
    )
    timeout: float = Field(
        default=10.0,
        gt=0,
        description="Request timeout in seconds"
    )
    storage_dir: Path = Field(
        default=Path.home() / ".bookreview",
        description="Directory holding the persisted session and preferences"
    )

    model_config = SettingsConfigDict(
        env_prefix="BOOKREVIEW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_client_settings() -> ClientSettings:
    """Get cached client settings."""
    return ClientSettings()
