"""Central configuration loaded from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

STEAM_TIME_URL = "https://api.steampowered.com/ITwoFactorService/QueryTime/v0001"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STEAMAUTH_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Time sync
    sync_url: str = STEAM_TIME_URL
    sync_timeout: float = Field(default=10.0, gt=0)

    # Logging
    log_level: str = "WARNING"


settings = Settings()
