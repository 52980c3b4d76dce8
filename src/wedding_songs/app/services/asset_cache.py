"""Asset cache service for wedding-songs.

Downloads song audio previews once and keeps them on local disk so that
listening to a song again does not hit the network.
"""

import hashlib
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

import requests

from wedding_songs.app.logging_config import get_logger

logger = get_logger(__name__)

HASH_PREFIX_LENGTH = 12


def url_hash_prefix(url: str) -> str:
    """Get the cache key for a URL (first 12 hex chars of its SHA-256)."""
    return hashlib.sha256(url.encode("utf-8")).hexdigest()[:HASH_PREFIX_LENGTH]


@dataclass
class CacheEntry:
    """Information about a cached file.

    Attributes:
        local_path: Path to the cached file
        url: Original URL
        size_bytes: File size in bytes
        downloaded_at: When the file was cached
    """

    local_path: Path
    url: str
    size_bytes: int
    downloaded_at: datetime


class AssetCache:
    """Local cache for audio previews.

    Attributes:
        cache_dir: Base directory for cached files
        timeout: HTTP timeout in seconds
    """

    def __init__(self, cache_dir: Path, timeout: int = 30):
        """Initialize the asset cache.

        Args:
            cache_dir: Base directory for cached files
            timeout: HTTP timeout in seconds
        """
        self.cache_dir = cache_dir
        self.timeout = timeout
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def get_audio_path(self, url: str) -> Path:
        """Get the local cache path for an audio URL.

        Args:
            url: Audio URL

        Returns:
            Local cache path
        """
        filename = Path(unquote(urlparse(url).path)).name or "audio"
        return self.cache_dir / url_hash_prefix(url) / "audio" / filename

    def is_cached(self, url: str) -> bool:
        """Check if an audio URL is already cached."""
        return self.get_audio_path(url).exists()

    def download_audio(self, url: str, force: bool = False) -> Optional[Path]:
        """Download an audio file into the cache.

        Args:
            url: Audio URL
            force: Re-download even if cached

        Returns:
            Local path, or None if the download failed
        """
        if not url:
            return None

        local_path = self.get_audio_path(url)
        if local_path.exists() and not force:
            logger.debug(f"Audio cache hit: {local_path}")
            return local_path

        local_path.parent.mkdir(parents=True, exist_ok=True)
        partial = local_path.with_name(local_path.name + ".part")

        try:
            with requests.get(url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                with open(partial, "wb") as f:
                    for chunk in response.iter_content(chunk_size=64 * 1024):
                        f.write(chunk)
        except (requests.exceptions.RequestException, OSError) as e:
            logger.error(f"Failed to download audio {url}: {e}")
            partial.unlink(missing_ok=True)
            return None

        partial.replace(local_path)
        logger.info(f"Audio cached: {local_path} ({local_path.stat().st_size} bytes)")
        return local_path

    def get_entry(self, url: str) -> Optional[CacheEntry]:
        """Get cache information for a URL, or None if not cached."""
        local_path = self.get_audio_path(url)
        if not local_path.exists():
            return None
        stat = local_path.stat()
        return CacheEntry(
            local_path=local_path,
            url=url,
            size_bytes=stat.st_size,
            downloaded_at=datetime.fromtimestamp(stat.st_mtime),
        )

    def get_cache_size(self) -> int:
        """Get total size of cached files in bytes."""
        return sum(p.stat().st_size for p in self.cache_dir.rglob("*") if p.is_file())
