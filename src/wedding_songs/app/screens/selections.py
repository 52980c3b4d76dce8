"""Selections screen.

Shows the nine ceremony moments in order with the song chosen for each,
the completion progress, and the finalize actions.
"""

from typing import Callable, Optional

from textual import work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Header, Label, ProgressBar

from wedding_songs.app.logging_config import get_logger
from wedding_songs.app.services.finalize import FinalizeAction, FinalizeResult, FinalizeService
from wedding_songs.app.state import AppState
from wedding_songs.core.errors import SubmissionRejectedError, WeddingSongsError
from wedding_songs.core.moments import CEREMONY_ORDER, CeremonyMoment
from wedding_songs.core.selection import SelectionEngine, SelectionEvent
from wedding_songs.core.submission import ContactDetails

logger = get_logger(__name__)

EMPTY_SLOT = "Click to select"


def describe_result(result: FinalizeResult) -> str:
    """Get the notification text for a finished finalize action."""
    if result.cancelled:
        return "Cancelled. Your selections are unchanged."
    if result.action == FinalizeAction.DOWNLOAD:
        return f"Lyrics sheet saved to {result.value}"
    if result.action == FinalizeAction.SHARE:
        return "Share link opened in your browser."
    return f"Your selections were sent to the choir (submission #{result.value})."


class SelectionsScreen(Screen):
    """Screen for reviewing and finalizing the ceremony selection."""

    BINDINGS = [
        ("x", "remove", "Remove"),
        ("d", "download", "Download"),
        ("w", "share", "Share"),
        ("s", "submit", "Submit"),
        ("r", "app.reset", "Reset"),
        ("escape", "back", "Back"),
    ]

    def __init__(
        self,
        state: AppState,
        engine: SelectionEngine,
        finalize: FinalizeService,
        on_moment_chosen: Optional[Callable[[CeremonyMoment], None]] = None,
    ):
        """Initialize the screen.

        Args:
            state: Application state
            engine: Selection engine
            finalize: Finalize service for download, share and submit
            on_moment_chosen: Called with a moment when the couple opens it
        """
        super().__init__()
        self.state = state
        self.engine = engine
        self.finalize = finalize
        self.on_moment_chosen = on_moment_chosen

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield Header()

        with Vertical():
            yield Label("[bold]My Ceremony Selections[/bold]", id="title")

            with Horizontal(id="progress_row"):
                yield ProgressBar(total=len(CEREMONY_ORDER), show_eta=False, id="progress")
                yield Label("", id="progress_summary")

            table = DataTable(id="selection_table")
            table.add_columns("#", "Moment", "Song")
            table.cursor_type = "row"
            yield table

            with Horizontal(id="buttons"):
                yield Button("Remove", id="btn_remove")
                yield Button("Download Lyrics", id="btn_download", variant="primary")
                yield Button("Share", id="btn_share")
                yield Button("Send to Choir", id="btn_submit", variant="success")
                yield Button("Back", id="btn_back")

        yield Footer()

    def on_mount(self) -> None:
        """Handle mount event."""
        self.engine.add_listener(self._on_selection_changed)
        self._refresh()

    def on_unmount(self) -> None:
        """Handle unmount event."""
        self.engine.remove_listener(self._on_selection_changed)

    def _on_selection_changed(self, event: SelectionEvent) -> None:
        if event.changed:
            self._refresh()

    def _refresh(self) -> None:
        """Redraw the moment list and progress."""
        table = self.query_one("#selection_table", DataTable)
        cursor = table.cursor_row
        table.clear()

        for moment in CEREMONY_ORDER:
            song_id = self.engine.song_for(moment)
            song = self.engine.catalog.get_song_by_id(song_id) if song_id is not None else None
            table.add_row(
                str(moment.position),
                moment.label,
                song.title if song else EMPTY_SLOT,
                key=moment.value,
            )
        if cursor is not None:
            table.move_cursor(row=cursor)

        completion = self.engine.get_completion()
        self.query_one("#progress", ProgressBar).update(progress=completion.selected)
        self.query_one("#progress_summary", Label).update(completion.summary)

    def _get_highlighted_moment(self) -> Optional[CeremonyMoment]:
        table = self.query_one("#selection_table", DataTable)
        if table.cursor_row is None or table.cursor_row >= len(CEREMONY_ORDER):
            return None
        return CEREMONY_ORDER[table.cursor_row]

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Open the gallery for the chosen moment."""
        moment = CeremonyMoment.parse(event.row_key.value)
        if self.on_moment_chosen:
            self.on_moment_chosen(moment)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        button_id = event.button.id

        if button_id == "btn_remove":
            self.action_remove()
        elif button_id == "btn_download":
            self.action_download()
        elif button_id == "btn_share":
            self.action_share()
        elif button_id == "btn_submit":
            self.action_submit()
        elif button_id == "btn_back":
            self.action_back()

    def action_remove(self) -> None:
        """Remove the song from the highlighted moment."""
        moment = self._get_highlighted_moment()
        if moment is None:
            return
        event = self.engine.remove_song_from_moment(moment)
        self.notify(event.message)

    def action_download(self) -> None:
        """Download the lyrics sheet."""
        self.run_finalize(FinalizeAction.DOWNLOAD)

    def action_share(self) -> None:
        """Share the selection on WhatsApp."""
        self.run_finalize(FinalizeAction.SHARE)

    def action_submit(self) -> None:
        """Collect contact details and send the selection to the choir."""
        self.run_finalize(FinalizeAction.SUBMIT)

    def action_back(self) -> None:
        """Return to the gallery."""
        self.app.navigate_back()

    @work(exclusive=True, group="finalize")
    async def run_finalize(self, action: FinalizeAction) -> None:
        """Run a finalize action, reporting the outcome as a notification."""
        contact: Optional[ContactDetails] = None
        if action == FinalizeAction.SUBMIT and not self.engine.is_empty:
            from wedding_songs.app.screens.contact_form import ContactFormScreen

            contact = await self.app.push_screen_wait(ContactFormScreen(self.state.contact_details))
            if contact is None:
                return
            self.state.set_contact_details(contact)

        self.state.set_busy(True)
        try:
            result = await self.finalize.finalize(action, contact=contact)
        except SubmissionRejectedError as e:
            logger.warning(f"{action.value} rejected: {e.errors}")
            self.notify(f"{e}: {len(e.errors)} problem(s) reported by the choir service", severity="error")
            return
        except WeddingSongsError as e:
            logger.warning(f"{action.value} failed: {e}")
            self.notify(str(e), severity="error")
            return
        finally:
            self.state.set_busy(False)

        self.notify(describe_result(result), severity="warning" if result.cancelled else "information")
