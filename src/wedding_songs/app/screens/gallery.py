"""Gallery screen.

Lists the song catalog, filtered by ceremony moment and search text, and
lets the couple pick a song for a moment or read its lyrics.
"""

from typing import Optional

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Header, Input, Label, Select

from wedding_songs.app.state import AppScreen, AppState
from wedding_songs.core.catalog import Song
from wedding_songs.core.moments import CEREMONY_ORDER, CeremonyMoment
from wedding_songs.core.selection import SelectionEngine, SelectionEvent

ALL_SONGS = "all"


def song_status(engine: SelectionEngine, song: Song) -> str:
    """Get the gallery status text for a song."""
    moment = engine.moment_for(song.id)
    return f"Selected for {moment.label}" if moment else ""


class GalleryScreen(Screen):
    """Screen for browsing songs and choosing them for ceremony moments."""

    BINDINGS = [
        ("s", "select_for_moment", "Select"),
        ("l", "view_lyrics", "Lyrics"),
        ("v", "view_selections", "My Selections"),
        ("f", "focus_search", "Search"),
        ("r", "app.reset", "Reset"),
        ("q", "app.quit", "Quit"),
    ]

    def __init__(self, state: AppState, engine: SelectionEngine):
        """Initialize the screen.

        Args:
            state: Application state
            engine: Selection engine
        """
        super().__init__()
        self.state = state
        self.engine = engine
        self.songs: list[Song] = []

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield Header()

        with Vertical():
            yield Label("[bold]Song Gallery[/bold]", id="title")

            with Horizontal(id="filter_row"):
                yield Select(
                    [("All Songs", ALL_SONGS)] + [(m.label, m.value) for m in CEREMONY_ORDER],
                    value=self.state.moment_filter.value if self.state.moment_filter else ALL_SONGS,
                    allow_blank=False,
                    id="moment_filter",
                )
                yield Input(value=self.state.search_query, placeholder="Search songs...", id="search_input")

            table = DataTable(id="song_table")
            table.add_columns("Title", "Moments", "Status")
            table.cursor_type = "row"
            yield table

            yield Label("", id="empty_message", classes="hidden")
            yield Label("", id="progress_summary")

            with Horizontal(id="buttons"):
                yield Button("Select for Moment", id="btn_select", variant="primary")
                yield Button("Lyrics", id="btn_lyrics")
                yield Button("My Selections", id="btn_selections")

        yield Footer()

    def on_mount(self) -> None:
        """Handle mount event."""
        self.engine.add_listener(self._on_selection_changed)
        self.state.add_listener("moment_filter", self._on_filter_changed)
        self._load_songs()
        self.query_one("#song_table", DataTable).focus()

    def on_unmount(self) -> None:
        """Handle unmount event."""
        self.engine.remove_listener(self._on_selection_changed)
        self.state.remove_listener("moment_filter", self._on_filter_changed)

    def _on_selection_changed(self, event: SelectionEvent) -> None:
        if event.changed:
            self._load_songs()

    def _on_filter_changed(self, moment: Optional[CeremonyMoment]) -> None:
        select = self.query_one("#moment_filter", Select)
        value = moment.value if moment else ALL_SONGS
        if select.value != value:
            select.value = value
        self._load_songs()

    def _load_songs(self) -> None:
        """Load and display songs matching the current filter."""
        self.songs = self.engine.catalog.search(self.state.search_query, self.state.moment_filter)

        table = self.query_one("#song_table", DataTable)
        table.clear()
        for song in self.songs:
            table.add_row(
                song.title,
                song.moment_labels,
                song_status(self.engine, song),
                key=str(song.id),
            )

        empty = self.query_one("#empty_message", Label)
        if self.songs:
            empty.add_class("hidden")
        else:
            empty.update("No songs match your search.")
            empty.remove_class("hidden")

        self.query_one("#progress_summary", Label).update(self.engine.get_completion().summary)

    def on_select_changed(self, event: Select.Changed) -> None:
        """Handle moment filter changes."""
        if event.select.id != "moment_filter":
            return
        moment = None if event.value == ALL_SONGS else CeremonyMoment.parse(event.value)
        if moment != self.state.moment_filter:
            self.state.set_moment_filter(moment)

    def on_input_changed(self, event: Input.Changed) -> None:
        """Handle search input changes."""
        if event.input.id == "search_input":
            self.state.set_search_query(event.value)
            self._load_songs()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        button_id = event.button.id

        if button_id == "btn_select":
            self.action_select_for_moment()
        elif button_id == "btn_lyrics":
            self.action_view_lyrics()
        elif button_id == "btn_selections":
            self.action_view_selections()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Handle row selection."""
        self.state.select_song(int(event.row_key.value))
        self.action_select_for_moment()

    def _get_selected_song(self) -> Optional[Song]:
        """Get the currently highlighted song based on cursor position."""
        table = self.query_one("#song_table", DataTable)
        rows = list(table.rows.keys())
        if table.cursor_row is not None and table.cursor_row < len(rows):
            return self.engine.catalog.get_song_by_id(int(rows[table.cursor_row].value))
        return None

    def action_select_for_moment(self) -> None:
        """Open the moment picker for the highlighted song."""
        song = self._get_selected_song()
        if not song:
            self.notify("No song selected", severity="warning")
            return

        from wedding_songs.app.screens.moment_picker import MomentPickerScreen

        self.state.select_song(song.id)
        self.app.push_screen(MomentPickerScreen(song, self.engine), self._on_moment_picked)

    def _on_moment_picked(self, event: Optional[SelectionEvent]) -> None:
        if event is None:
            return
        self.notify(event.message, severity="warning" if event.rejected else "information")

    def action_view_lyrics(self) -> None:
        """Show the lyrics of the highlighted song."""
        song = self._get_selected_song()
        if not song:
            self.notify("No song selected", severity="warning")
            return

        from wedding_songs.app.screens.lyrics import LyricsScreen

        self.app.push_screen(LyricsScreen(song, self.app.create_preview()))

    def action_view_selections(self) -> None:
        """Open the selections overview."""
        self.app.navigate_to(AppScreen.SELECTIONS)

    def action_focus_search(self) -> None:
        """Focus the search input."""
        self.query_one("#search_input", Input).focus()
