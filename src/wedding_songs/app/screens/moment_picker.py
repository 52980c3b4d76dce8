"""Moment picker dialog.

Lists the ceremony moments a song is suitable for and assigns the song to
the chosen one.
"""

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label

from wedding_songs.core.catalog import Song
from wedding_songs.core.selection import SelectionEngine, SelectionEvent


class MomentPickerScreen(ModalScreen[SelectionEvent]):
    """Dialog for choosing which moment a song is used for.

    Dismisses with the engine's SelectionEvent, or None when cancelled.
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, song: Song, engine: SelectionEngine):
        super().__init__()
        self.song = song
        self.engine = engine

    def _button_label(self, moment) -> str:
        current = self.engine.song_for(moment)
        if current == self.song.id:
            return f"{moment.label} (selected, press to remove)"
        if current is not None:
            other = self.engine.catalog.get_song_by_id(current)
            return f"{moment.label} (currently: {other.title if other else current})"
        return moment.label

    def compose(self) -> ComposeResult:
        """Compose the dialog layout."""
        with Vertical(id="dialog"):
            yield Label(f"[bold]{self.song.title}[/bold]", id="dialog_title")
            yield Label("Choose the ceremony moment for this song:")
            for moment in self.song.suitable_moments:
                yield Button(self._button_label(moment), id=f"moment_{moment.value}")
            yield Button("Cancel", id="btn_cancel", variant="error")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        button_id = event.button.id or ""
        if button_id == "btn_cancel":
            self.dismiss(None)
        elif button_id.startswith("moment_"):
            moment = button_id.removeprefix("moment_")
            self.dismiss(self.engine.select_song_for_moment(self.song.id, moment))

    def action_cancel(self) -> None:
        """Close without choosing."""
        self.dismiss(None)
