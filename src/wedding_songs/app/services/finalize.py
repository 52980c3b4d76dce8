"""Finalize service for wedding-songs.

Runs the three finalizing actions (download, share, submit) through one
ConfirmationGate. The selection is snapshotted and projected synchronously
when the action starts, so changes made while a submission is in flight
cannot alter the payload that was sent. Finalizing never modifies the
selection, which keeps it available for a retry after a failure.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from wedding_songs.app.logging_config import get_logger
from wedding_songs.app.services.lyrics_sheet import LyricsSheetWriter
from wedding_songs.app.services.share import ShareService
from wedding_songs.app.services.sink import SubmissionSink
from wedding_songs.core.errors import EmptySubmissionError, MissingContactDetailsError
from wedding_songs.core.gate import ConfirmationGate, GateDecision
from wedding_songs.core.selection import SelectionEngine
from wedding_songs.core.submission import ContactDetails, build_submission, project_selection

logger = get_logger(__name__)


class FinalizeAction(str, Enum):
    """Finalizing actions offered to the couple."""

    DOWNLOAD = "download"
    SHARE = "share"
    SUBMIT = "submit"


@dataclass(frozen=True)
class FinalizeResult:
    """Outcome of a finalize request.

    Attributes:
        action: Action that was requested
        decision: Gate decision (proceeded, confirmed or cancelled)
        value: Output path, share URL or submission id; None when cancelled
    """

    action: FinalizeAction
    decision: GateDecision
    value: Any = None

    @property
    def cancelled(self) -> bool:
        """Check if the user declined."""
        return self.decision == GateDecision.CANCELLED


class FinalizeService:
    """Gatekeeper and dispatcher for finalize actions."""

    def __init__(
        self,
        engine: SelectionEngine,
        gate: ConfirmationGate,
        sink: SubmissionSink,
        lyrics_sheet: LyricsSheetWriter,
        share: ShareService,
    ):
        """Initialize the service.

        Args:
            engine: Selection engine holding the couple's choices
            gate: Confirmation gate shared by all actions
            sink: Submission destination
            lyrics_sheet: Writer for the download action
            share: Share service for the share action
        """
        self.engine = engine
        self.gate = gate
        self.sink = sink
        self.lyrics_sheet = lyrics_sheet
        self.share = share

    async def finalize(
        self,
        action: Union[FinalizeAction, str],
        contact: Optional[ContactDetails] = None,
        gated: bool = True,
    ) -> FinalizeResult:
        """Run a finalize action, confirming first if the selection is incomplete.

        Args:
            action: download, share or submit
            contact: Contact details (required for submit)
            gated: Whether to ask before acting on an incomplete selection

        Returns:
            FinalizeResult

        Raises:
            EmptySubmissionError: If nothing is selected
            MissingContactDetailsError: If submit is requested without contact details
            StaleSelectionError: If a selected song left the catalog
            SubmissionSinkError: If delivering the submission fails
            SubmissionRejectedError: If the service rejects the payload
        """
        action = FinalizeAction(action)

        if self.engine.is_empty:
            raise EmptySubmissionError()
        if action == FinalizeAction.SUBMIT and contact is None:
            raise MissingContactDetailsError()

        logger.info(f"Finalize requested: {action.value}")
        result = await self.gate.guard(
            lambda: self._run(action, contact),
            self.engine.get_completion(),
            gated=gated,
        )
        return FinalizeResult(action=action, decision=result.decision, value=result.value)

    async def _run(self, action: FinalizeAction, contact: Optional[ContactDetails]) -> Any:
        selection = self.engine.snapshot()
        catalog = self.engine.catalog

        if action == FinalizeAction.SUBMIT:
            submission = build_submission(contact, selection, catalog)
            return await self.sink.submit(submission)

        entries = project_selection(selection, catalog)
        if action == FinalizeAction.DOWNLOAD:
            return self.lyrics_sheet.write(entries)
        return self.share.share(entries)

    async def download(self, gated: bool = True) -> FinalizeResult:
        """Write the lyrics sheet."""
        return await self.finalize(FinalizeAction.DOWNLOAD, gated=gated)

    async def share_selection(self, gated: bool = True) -> FinalizeResult:
        """Open the share link."""
        return await self.finalize(FinalizeAction.SHARE, gated=gated)

    async def submit(self, contact: ContactDetails, gated: bool = True) -> FinalizeResult:
        """Send the selection to the choir."""
        return await self.finalize(FinalizeAction.SUBMIT, contact=contact, gated=gated)
