"""Shared fixtures for app tests."""

import pytest

from wedding_songs.app.config import AppConfig


@pytest.fixture
def tmp_cache_dir(tmp_path):
    """Temporary cache directory."""
    cache = tmp_path / "cache"
    cache.mkdir()
    return cache


@pytest.fixture
def tmp_output_dir(tmp_path):
    """Temporary output directory."""
    output = tmp_path / "output"
    output.mkdir()
    return output


@pytest.fixture
def app_config(tmp_cache_dir, tmp_output_dir):
    """AppConfig pointing at temporary directories with local submissions."""
    return AppConfig(cache_dir=tmp_cache_dir, output_dir=tmp_output_dir)
