"""Service configuration using pydantic-settings."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Submission service configuration."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    # Song catalog JSON (empty uses the packaged catalog)
    WS_CATALOG_PATH: Optional[Path] = None

    # Network
    WS_HOST: str = "0.0.0.0"
    WS_PORT: int = 8000


settings = Settings()
