"""Contact form dialog.

Collects the couple's contact details before a submission to the choir.
"""

from typing import Optional

from pydantic import ValidationError
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label

from wedding_songs.core.submission import ContactDetails

FIELDS = [
    ("coupleNames", "Couple names", "e.g. Anna & Marco"),
    ("weddingDate", "Wedding date", "YYYY-MM-DD"),
    ("email", "Email", "name@example.com"),
    ("phone", "Phone (WhatsApp)", "+39 ..."),
    ("notes", "Notes for the choir", "Optional"),
]


def format_errors(error: ValidationError) -> str:
    """Turn a validation error into one line per field."""
    labels = {key: label for key, label, _ in FIELDS}
    lines = []
    for item in error.errors(include_url=False):
        key = str(item["loc"][0]) if item["loc"] else ""
        lines.append(f"{labels.get(key, key)}: {item['msg']}")
    return "\n".join(lines)


class ContactFormScreen(ModalScreen[ContactDetails]):
    """Dialog for the couple's contact details.

    Dismisses with validated ContactDetails, or None when cancelled.
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, initial: Optional[ContactDetails] = None):
        super().__init__()
        self.initial = initial

    def _initial_value(self, key: str) -> str:
        if self.initial is None:
            return ""
        value = self.initial.model_dump(mode="json", by_alias=True).get(key)
        return "" if value is None else str(value)

    def compose(self) -> ComposeResult:
        """Compose the dialog layout."""
        with Vertical(id="dialog"):
            yield Label("[bold]Send to the Choir[/bold]", id="dialog_title")
            for key, label, placeholder in FIELDS:
                yield Label(label)
                yield Input(value=self._initial_value(key), placeholder=placeholder, id=f"input_{key}")
            yield Label("", id="form_errors")
            with Horizontal(id="buttons"):
                yield Button("Submit", id="btn_submit", variant="primary")
                yield Button("Cancel", id="btn_cancel")

    def collect(self) -> dict[str, Optional[str]]:
        """Read the form values keyed by payload field name."""
        data: dict[str, Optional[str]] = {}
        for key, _, _ in FIELDS:
            data[key] = self.query_one(f"#input_{key}", Input).value
        if not (data["notes"] or "").strip():
            data["notes"] = None
        return data

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "btn_cancel":
            self.dismiss(None)
        elif event.button.id == "btn_submit":
            self.action_submit()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Submit the form when Enter is pressed."""
        self.action_submit()

    def action_submit(self) -> None:
        """Validate the form and close with the contact details."""
        try:
            contact = ContactDetails.model_validate(self.collect())
        except ValidationError as e:
            self.query_one("#form_errors", Label).update(format_errors(e))
            return
        self.dismiss(contact)

    def action_cancel(self) -> None:
        """Close without submitting."""
        self.dismiss(None)
