"""Configuration management for wedding-songs.

Settings for the song catalog, asset cache, output directory, the choir's
submission service and audio preview.
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import tomllib
import tomli_w

from wedding_songs.app.logging_config import get_logger

logger = get_logger(__name__)

APP_DIR_NAME = "wedding-songs"


def get_app_config_dir() -> Path:
    """Get the platform-specific config directory for wedding-songs.

    Returns:
        Path to the config directory
    """
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / APP_DIR_NAME
        return Path.home() / "AppData" / "Roaming" / APP_DIR_NAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_app_config_path() -> Path:
    """Get the path to the config.toml file.

    Returns:
        Path to config.toml
    """
    return get_app_config_dir() / "config.toml"


@dataclass
class AppConfig:
    """Configuration for wedding-songs.

    Attributes:
        catalog_path: Song catalog JSON file (None uses the packaged catalog)
        cache_dir: Local directory for downloaded audio previews and logs
        output_dir: Directory for downloaded lyrics sheets
        submission_url: Base URL of the choir submission service (empty = local)
        request_timeout: HTTP timeout in seconds
        preview_buffer_ms: Audio buffer size for playback in milliseconds
        preview_volume: Playback volume (0.0 to 1.0)
    """

    catalog_path: Optional[Path] = None
    cache_dir: Path = field(default_factory=lambda: get_app_config_dir() / "cache")
    output_dir: Path = field(default_factory=lambda: Path.home() / "WeddingSongs")

    submission_url: str = ""
    request_timeout: int = 30

    preview_buffer_ms: int = 500
    preview_volume: float = 0.8

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "AppConfig":
        """Load configuration from TOML file.

        Args:
            path: Path to config file (defaults to standard location)

        Returns:
            AppConfig instance with loaded values

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        if path is None:
            path = get_app_config_path()

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        config = cls()

        paths = data.get("paths", {})
        if paths.get("catalog_path"):
            config.catalog_path = Path(paths["catalog_path"])
        if "cache_dir" in paths:
            config.cache_dir = Path(paths["cache_dir"])
        if "output_dir" in paths:
            config.output_dir = Path(paths["output_dir"])

        submission = data.get("submission", {})
        config.submission_url = submission.get("url", config.submission_url)
        config.request_timeout = submission.get("timeout", config.request_timeout)

        preview = data.get("preview", {})
        config.preview_buffer_ms = preview.get("buffer_ms", config.preview_buffer_ms)
        config.preview_volume = preview.get("volume", config.preview_volume)

        return config

    def save(self, path: Optional[Path] = None) -> None:
        """Save configuration to TOML file.

        Args:
            path: Path to save config (defaults to standard location)
        """
        if path is None:
            path = get_app_config_path()

        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "paths": {
                "catalog_path": str(self.catalog_path) if self.catalog_path else "",
                "cache_dir": str(self.cache_dir),
                "output_dir": str(self.output_dir),
            },
            "submission": {
                "url": self.submission_url,
                "timeout": self.request_timeout,
            },
            "preview": {
                "buffer_ms": self.preview_buffer_ms,
                "volume": self.preview_volume,
            },
        }

        with open(path, "wb") as f:
            tomli_w.dump(data, f)

    def ensure_directories(self) -> None:
        """Ensure all configured directories exist."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @property
    def log_dir(self) -> Path:
        """Get the session log directory."""
        return self.cache_dir / "logs"

    @property
    def uses_remote_submission(self) -> bool:
        """Check if submissions go to an HTTP service."""
        return bool(self.submission_url.strip())


def ensure_app_config_exists() -> AppConfig:
    """Ensure config file exists, creating default if needed.

    Returns:
        AppConfig instance
    """
    config_path = get_app_config_path()

    if config_path.exists():
        try:
            return AppConfig.load(config_path)
        except (tomllib.TOMLDecodeError, OSError) as e:
            logger.warning(f"Config at {config_path} is unreadable, recreating: {e}")

    config = AppConfig()
    config.save(config_path)
    return config
