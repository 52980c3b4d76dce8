"""Audio playback service for wedding-songs.

Provides audio preview playback using miniaudio, and AudioPreview, which
ties playback of one song to the lifetime of the widget showing it.
"""

import threading
from enum import Enum, auto
from pathlib import Path
from typing import Callable, Generator, Optional

import miniaudio
import numpy as np

from wedding_songs.app.logging_config import get_logger
from wedding_songs.app.services.asset_cache import AssetCache
from wedding_songs.core.catalog import Song

logger = get_logger(__name__)


class PlaybackState(Enum):
    """Current playback state."""

    STOPPED = auto()
    PLAYING = auto()


class PlaybackService:
    """Audio playback service using miniaudio.

    Attributes:
        buffer_ms: Audio buffer size in milliseconds
        volume: Playback volume (0.0 to 1.0)
    """

    def __init__(self, buffer_ms: int = 500, volume: float = 0.8):
        """Initialize the playback service.

        Args:
            buffer_ms: Audio buffer size in milliseconds
            volume: Initial playback volume
        """
        self.buffer_ms = buffer_ms
        self.volume = max(0.0, min(1.0, volume))

        self._current_file: Optional[Path] = None
        self._state = PlaybackState.STOPPED
        self._device: Optional[miniaudio.PlaybackDevice] = None
        self._generator: Optional[Generator] = None

        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._on_state_changed: Optional[Callable[[PlaybackState], None]] = None

    def set_state_callback(self, callback: Optional[Callable[[PlaybackState], None]]) -> None:
        """Set the callback invoked on state changes."""
        self._on_state_changed = callback

    @property
    def state(self) -> PlaybackState:
        """Get current playback state."""
        with self._lock:
            return self._state

    @property
    def is_playing(self) -> bool:
        """Check if currently playing."""
        return self.state == PlaybackState.PLAYING

    @property
    def current_file(self) -> Optional[Path]:
        """Get currently loaded file."""
        with self._lock:
            return self._current_file

    def _set_state(self, new_state: PlaybackState) -> None:
        with self._lock:
            old_state = self._state
            self._state = new_state

        if old_state != new_state and self._on_state_changed:
            self._on_state_changed(new_state)

    def _stream_generator(self, samples, nchannels: int):
        """Generator yielding audio chunks as requested by miniaudio.

        miniaudio sends the number of frames it needs; each yield returns an
        int16 array of shape (num_frames, nchannels).
        """
        position = 0
        num_frames = yield np.zeros((0, nchannels), dtype=np.int16)

        while not self._stop_event.is_set() and position < len(samples):
            if not num_frames or num_frames <= 0:
                break

            needed = num_frames * nchannels
            chunk = np.array(samples[position:position + needed], dtype=np.int16)
            if len(chunk) < needed:
                chunk = np.concatenate([chunk, np.zeros(needed - len(chunk), dtype=np.int16)])
            if self.volume != 1.0:
                chunk = (chunk * self.volume).astype(np.int16)

            position += needed
            num_frames = yield chunk.reshape((num_frames, nchannels))

        if not self._stop_event.is_set():
            logger.debug("Playback finished")
            self._set_state(PlaybackState.STOPPED)

    def play(self, file_path: Path) -> bool:
        """Start playing an audio file from the beginning.

        Args:
            file_path: Path to audio file

        Returns:
            True if playback started
        """
        self.stop()

        if not file_path.exists():
            logger.error(f"Audio file not found: {file_path}")
            return False

        try:
            source = miniaudio.decode_file(
                str(file_path),
                output_format=miniaudio.SampleFormat.SIGNED16,
                nchannels=2,
                sample_rate=44100,
            )

            self._stop_event.clear()
            self._generator = self._stream_generator(source.samples, source.nchannels)
            next(self._generator)

            self._device = miniaudio.PlaybackDevice(
                output_format=miniaudio.SampleFormat.SIGNED16,
                nchannels=source.nchannels,
                sample_rate=source.sample_rate,
                buffersize_msec=self.buffer_ms,
            )
            with self._lock:
                self._current_file = file_path

            self._set_state(PlaybackState.PLAYING)
            self._device.start(self._generator)
            logger.debug(f"Playback started: {file_path}")
            return True

        except miniaudio.MiniaudioError as e:
            logger.error(f"Playback error for {file_path}: {e}")
            self.stop()
            return False

    def stop(self) -> None:
        """Stop playback and release the audio device."""
        self._stop_event.set()

        if self._generator:
            self._generator.close()
            self._generator = None

        if self._device:
            self._device.stop()
            self._device.close()
            self._device = None

        with self._lock:
            self._current_file = None

        self._set_state(PlaybackState.STOPPED)

    def set_volume(self, volume: float) -> None:
        """Set playback volume.

        Args:
            volume: Volume level (0.0 to 1.0)
        """
        self.volume = max(0.0, min(1.0, volume))


class AudioPreview:
    """Audio preview bound to a visible UI element.

    Call acquire() when the element is shown and release() when it goes
    away, or use it as a context manager.

    Attributes:
        cache: Asset cache used to fetch the audio
        playback: Playback service that plays it
    """

    def __init__(self, cache: AssetCache, playback: PlaybackService):
        self.cache = cache
        self.playback = playback
        self.song: Optional[Song] = None

    @property
    def active(self) -> bool:
        """Check if this preview currently holds the player."""
        return self.song is not None

    def acquire(self, song: Song) -> bool:
        """Fetch and start playing a song's preview.

        Args:
            song: Song to preview

        Returns:
            True if playback started
        """
        self.release()

        audio_path = self.cache.download_audio(song.audio_url)
        if audio_path is None:
            logger.warning(f"No audio available for '{song.title}'")
            return False

        if not self.playback.play(audio_path):
            return False

        self.song = song
        logger.info(f"Previewing '{song.title}'")
        return True

    def release(self) -> None:
        """Stop the preview if this instance started it."""
        if self.song is None:
            return
        logger.debug(f"Releasing preview of '{self.song.title}'")
        self.song = None
        self.playback.stop()

    def __enter__(self) -> "AudioPreview":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
