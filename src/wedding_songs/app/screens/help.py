"""Help dialog explaining how to plan the ceremony music."""

from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from wedding_songs.core.moments import CEREMONY_ORDER

STEPS = [
    "Browse the gallery, filter by ceremony moment or search by title.",
    "Press 'l' to read the lyrics and listen to a preview.",
    "Press 's' to choose the moment a song is used for. Choosing it again removes it.",
    "Open 'My Selections' to review the ceremony in order.",
    "Download the lyrics sheet, share it on WhatsApp, or send it to the choir.",
]


class HelpScreen(ModalScreen[None]):
    """Dialog listing the planning steps and the ceremony moments."""

    BINDINGS = [("escape", "close", "Close")]

    def compose(self) -> ComposeResult:
        """Compose the dialog layout."""
        with Vertical(id="dialog"):
            yield Label("[bold]How it works[/bold]", id="dialog_title")
            with VerticalScroll(id="help_scroll"):
                for number, step in enumerate(STEPS, 1):
                    yield Static(f"{number}. {step}")
                yield Label("[bold]Ceremony moments[/bold]")
                for moment in CEREMONY_ORDER:
                    yield Static(f"[bold]{moment.label}[/bold]: {moment.description}")
            yield Button("Close", id="btn_close")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        self.dismiss(None)

    def action_close(self) -> None:
        """Close the dialog."""
        self.dismiss(None)
