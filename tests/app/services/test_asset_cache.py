"""Tests for AssetCache.

Tests local caching of audio previews. Downloads are mocked.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from wedding_songs.app.services.asset_cache import AssetCache, url_hash_prefix

URL = "https://example.com/audio/Ave%20Maria.ogg"


@pytest.fixture
def asset_cache(tmp_path):
    """AssetCache with temporary directory."""
    return AssetCache(cache_dir=tmp_path / "cache", timeout=5)


def _streaming_response(chunks):
    response = MagicMock()
    response.__enter__.return_value = response
    response.iter_content.return_value = chunks
    return response


class TestPathGeneration:
    """Tests for cache path generation."""

    def test_audio_path_uses_hash_prefix_and_filename(self, asset_cache):
        """Paths are keyed by URL hash and keep the file name."""
        path = asset_cache.get_audio_path(URL)

        assert path.parent.parent.name == url_hash_prefix(URL)
        assert len(url_hash_prefix(URL)) == 12
        assert path.name == "Ave Maria.ogg"

    def test_different_urls_get_different_paths(self, asset_cache):
        """Same file name on different hosts does not collide."""
        other = "https://mirror.example/audio/Ave%20Maria.ogg"

        assert asset_cache.get_audio_path(URL) != asset_cache.get_audio_path(other)


class TestDownload:
    """Tests for download_audio."""

    def test_download_writes_file(self, asset_cache):
        """Downloaded bytes land in the cache."""
        with patch("wedding_songs.app.services.asset_cache.requests.get") as mock_get:
            mock_get.return_value = _streaming_response([b"abc", b"def"])

            path = asset_cache.download_audio(URL)

        assert path.read_bytes() == b"abcdef"
        assert asset_cache.is_cached(URL)
        assert asset_cache.get_entry(URL).size_bytes == 6
        mock_get.assert_called_once_with(URL, stream=True, timeout=5)

    def test_cached_file_is_reused(self, asset_cache):
        """A cache hit makes no request."""
        path = asset_cache.get_audio_path(URL)
        path.parent.mkdir(parents=True)
        path.write_bytes(b"cached")

        with patch("wedding_songs.app.services.asset_cache.requests.get") as mock_get:
            assert asset_cache.download_audio(URL) == path

        mock_get.assert_not_called()

    def test_failed_download_returns_none(self, asset_cache):
        """Network errors leave no partial file."""
        with patch(
            "wedding_songs.app.services.asset_cache.requests.get",
            side_effect=requests.exceptions.ConnectionError("offline"),
        ):
            assert asset_cache.download_audio(URL) is None

        assert not asset_cache.is_cached(URL)
        assert asset_cache.get_cache_size() == 0

    def test_empty_url_returns_none(self, asset_cache):
        """Songs without audio have nothing to download."""
        assert asset_cache.download_audio("") is None
