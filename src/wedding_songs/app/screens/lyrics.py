"""Lyrics dialog.

Shows a song's description and lyrics and plays its audio preview while
the dialog is open.
"""

from textual import work
from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from wedding_songs.app.logging_config import get_logger
from wedding_songs.app.services.playback import AudioPreview
from wedding_songs.core.catalog import Song

logger = get_logger(__name__)


class LyricsScreen(ModalScreen[None]):
    """Dialog showing lyrics with an audio preview."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("space", "toggle_preview", "Play/Stop"),
    ]

    def __init__(self, song: Song, preview: AudioPreview):
        """Initialize the dialog.

        Args:
            song: Song to show
            preview: Audio preview, acquired on mount and released on unmount
        """
        super().__init__()
        self.song = song
        self.preview = preview
        self._closed = False

    def compose(self) -> ComposeResult:
        """Compose the dialog layout."""
        with Vertical(id="dialog"):
            yield Label(f"[bold]{self.song.title}[/bold]", id="dialog_title")
            yield Label(self.song.description, id="description")
            yield Label(f"Suitable for: {self.song.moment_labels}", id="moments")
            with VerticalScroll(id="lyrics_scroll"):
                yield Static(self.song.lyrics, id="lyrics")
            yield Label("", id="preview_status")
            yield Button("Close", id="btn_close")

    def on_mount(self) -> None:
        """Start the audio preview."""
        self.start_preview()

    def on_unmount(self) -> None:
        """Stop the audio preview."""
        self._closed = True
        self.preview.release()

    @work(thread=True, exclusive=True)
    def start_preview(self) -> None:
        """Download and play the preview off the UI thread."""
        self.app.call_from_thread(self._set_status, "Loading preview...")
        started = self.preview.acquire(self.song)

        # The dialog may have closed while the audio was downloading
        if self._closed:
            self.preview.release()
            return

        self.app.call_from_thread(
            self._set_status, "Playing preview" if started else "Preview unavailable"
        )

    def _set_status(self, text: str) -> None:
        if not self._closed:
            self.query_one("#preview_status", Label).update(text)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "btn_close":
            self.action_close()

    def action_toggle_preview(self) -> None:
        """Stop or restart the preview."""
        if self.preview.active:
            self.preview.release()
            self._set_status("Preview stopped")
        else:
            self.start_preview()

    def action_close(self) -> None:
        """Close the dialog."""
        self.dismiss(None)
