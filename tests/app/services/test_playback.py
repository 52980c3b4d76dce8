"""Tests for PlaybackService and AudioPreview.

Note: These tests mock miniaudio to avoid requiring actual audio hardware.
"""

from unittest.mock import MagicMock, Mock, patch

import numpy as np
import pytest

from wedding_songs.app.services.playback import AudioPreview, PlaybackService, PlaybackState


@pytest.fixture
def mock_miniaudio():
    """Mock miniaudio module."""
    with patch("wedding_songs.app.services.playback.miniaudio") as mock:
        mock_device = MagicMock()
        mock.PlaybackDevice = Mock(return_value=mock_device)

        mock_source = MagicMock()
        mock_source.samples = [0] * 16
        mock_source.sample_rate = 44100
        mock_source.nchannels = 2
        mock.decode_file = Mock(return_value=mock_source)

        mock.SampleFormat = Mock()
        mock.SampleFormat.SIGNED16 = "S16"
        mock.MiniaudioError = type("MiniaudioError", (Exception,), {})

        yield mock


@pytest.fixture
def playback_service(mock_miniaudio):
    """PlaybackService instance with mocked miniaudio."""
    return PlaybackService(buffer_ms=500, volume=0.8)


@pytest.fixture
def audio_file(tmp_path):
    """Placeholder audio file (decoding is mocked)."""
    path = tmp_path / "song.ogg"
    path.write_bytes(b"fake")
    return path


class TestPlaybackService:
    """Tests for play/stop state tracking."""

    def test_initial_state_is_stopped(self, playback_service):
        """Verify initial PlaybackState."""
        assert playback_service.state == PlaybackState.STOPPED
        assert playback_service.is_playing is False

    def test_play_starts_device(self, playback_service, audio_file, mock_miniaudio):
        """Playing opens the device and reports PLAYING."""
        assert playback_service.play(audio_file) is True

        assert playback_service.is_playing
        assert playback_service.current_file == audio_file
        mock_miniaudio.PlaybackDevice.return_value.start.assert_called_once()

    def test_stop_closes_device(self, playback_service, audio_file, mock_miniaudio):
        """Stopping closes the device and resets state."""
        callback = Mock()
        playback_service.set_state_callback(callback)
        playback_service.play(audio_file)

        playback_service.stop()

        device = mock_miniaudio.PlaybackDevice.return_value
        device.stop.assert_called_once()
        device.close.assert_called_once()
        assert playback_service.state == PlaybackState.STOPPED
        assert playback_service.current_file is None
        assert [c.args[0] for c in callback.call_args_list] == [PlaybackState.PLAYING, PlaybackState.STOPPED]

    def test_missing_file(self, playback_service, tmp_path):
        """Missing files do not start playback."""
        assert playback_service.play(tmp_path / "missing.ogg") is False
        assert playback_service.state == PlaybackState.STOPPED

    def test_decode_error(self, playback_service, audio_file, mock_miniaudio):
        """Undecodable files report failure."""
        mock_miniaudio.decode_file.side_effect = mock_miniaudio.MiniaudioError("bad file")

        assert playback_service.play(audio_file) is False
        assert playback_service.state == PlaybackState.STOPPED

    def test_volume_is_clamped(self, playback_service):
        """Volume stays within 0.0 and 1.0."""
        playback_service.set_volume(3.0)
        assert playback_service.volume == 1.0
        playback_service.set_volume(-1)
        assert playback_service.volume == 0.0

    def test_stream_generator_yields_frames(self, playback_service):
        """The generator pads the last chunk to the requested frame count."""
        playback_service.set_volume(1.0)
        gen = playback_service._stream_generator(list(range(6)), 2)
        next(gen)

        chunk = gen.send(4)

        assert chunk.shape == (4, 2)
        assert chunk.dtype == np.int16
        assert chunk.flatten().tolist() == [0, 1, 2, 3, 4, 5, 0, 0]


class TestAudioPreview:
    """Tests for the scoped preview resource."""

    def test_acquire_plays_cached_audio(self, catalog, audio_file):
        """Acquire downloads and plays the song."""
        cache = Mock()
        cache.download_audio.return_value = audio_file
        playback = Mock()
        playback.play.return_value = True
        preview = AudioPreview(cache, playback)
        song = catalog.get_song_by_id(1)

        assert preview.acquire(song) is True

        cache.download_audio.assert_called_once_with(song.audio_url)
        playback.play.assert_called_once_with(audio_file)
        assert preview.active

    def test_release_stops_playback(self, catalog, audio_file):
        """Release stops only what this preview started."""
        cache = Mock()
        cache.download_audio.return_value = audio_file
        playback = Mock()
        playback.play.return_value = True
        preview = AudioPreview(cache, playback)

        preview.release()
        playback.stop.assert_not_called()

        preview.acquire(catalog.get_song_by_id(1))
        preview.release()

        playback.stop.assert_called_once()
        assert not preview.active

    def test_context_manager_releases(self, catalog, audio_file):
        """Leaving the with-block releases the player."""
        cache = Mock()
        cache.download_audio.return_value = audio_file
        playback = Mock()
        playback.play.return_value = True

        with AudioPreview(cache, playback) as preview:
            preview.acquire(catalog.get_song_by_id(1))

        playback.stop.assert_called_once()

    def test_unavailable_audio(self, catalog):
        """No download means no playback."""
        cache = Mock()
        cache.download_audio.return_value = None
        playback = Mock()
        preview = AudioPreview(cache, playback)

        assert preview.acquire(catalog.get_song_by_id(1)) is False
        playback.play.assert_not_called()
        assert not preview.active
