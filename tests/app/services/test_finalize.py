"""Tests for FinalizeService."""

from unittest.mock import AsyncMock, MagicMock, Mock

import pytest

from wedding_songs.app.services.finalize import FinalizeAction, FinalizeService
from wedding_songs.app.services.lyrics_sheet import LyricsSheetWriter
from wedding_songs.app.services.share import ShareService
from wedding_songs.app.services.sink import LocalSubmissionSink
from wedding_songs.core.errors import (
    EmptySubmissionError,
    MissingContactDetailsError,
    SubmissionSinkError,
)
from wedding_songs.core.gate import ConfirmationGate, GateDecision
from wedding_songs.core.moments import CeremonyMoment
from wedding_songs.server.storage import MemoryStorage


@pytest.fixture
def confirm():
    """Confirmer answering yes."""
    return Mock(return_value=True)


@pytest.fixture
def opener():
    """URL opener standing in for the web browser."""
    return Mock()


@pytest.fixture
def storage(catalog):
    """In-memory submission storage."""
    return MemoryStorage(catalog)


@pytest.fixture
def service(engine, confirm, opener, storage, tmp_output_dir):
    """FinalizeService over the default engine."""
    return FinalizeService(
        engine=engine,
        gate=ConfirmationGate(confirm),
        sink=LocalSubmissionSink(storage),
        lyrics_sheet=LyricsSheetWriter(tmp_output_dir),
        share=ShareService(opener),
    )


class TestDownload:
    """Tests for the download action."""

    @pytest.mark.asyncio
    async def test_incomplete_download_asks_once_and_writes(self, service, engine, confirm, tmp_output_dir):
        """An incomplete selection prompts exactly once before writing."""
        engine.select_song_for_moment(1, "ingresso")

        result = await service.download()

        confirm.assert_called_once()
        assert result.decision == GateDecision.CONFIRMED
        assert result.value.exists()
        assert result.value.parent == tmp_output_dir

    @pytest.mark.asyncio
    async def test_declined_download_writes_nothing(self, service, engine, confirm, tmp_output_dir):
        """Declining leaves no artifact behind."""
        confirm.return_value = False
        engine.select_song_for_moment(1, "ingresso")

        result = await service.download()

        confirm.assert_called_once()
        assert result.cancelled
        assert list(tmp_output_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_complete_download_does_not_ask(self, service, full_engine, confirm):
        """A complete selection skips the prompt."""
        result = await service.download()

        confirm.assert_not_called()
        assert result.decision == GateDecision.PROCEEDED

    @pytest.mark.asyncio
    async def test_empty_selection_raises_before_prompt(self, service, confirm):
        """Nothing selected fails without asking."""
        with pytest.raises(EmptySubmissionError):
            await service.download()

        confirm.assert_not_called()


class TestShare:
    """Tests for the share action."""

    @pytest.mark.asyncio
    async def test_share_opens_url(self, service, full_engine, opener):
        """The share URL is opened and returned."""
        result = await service.share_selection()

        opener.assert_called_once_with(result.value)
        assert result.value.startswith("https://wa.me/?text=")


class TestSubmit:
    """Tests for the submit action."""

    @pytest.mark.asyncio
    async def test_submit_stores_submission(self, service, engine, contact, storage):
        """A confirmed submit reaches the sink and returns its id."""
        engine.select_song_for_moment(10, "fine")
        engine.select_song_for_moment(1, "ingresso")

        result = await service.submit(contact)

        assert result.action == FinalizeAction.SUBMIT
        assert result.value == 1
        songs = storage.get_submission_songs(1)
        assert [s.moment for s in songs] == [CeremonyMoment.ENTRANCE, CeremonyMoment.END]

    @pytest.mark.asyncio
    async def test_submit_without_contact_raises(self, service, full_engine, confirm):
        """Contact details are required."""
        with pytest.raises(MissingContactDetailsError):
            await service.finalize("submit")

        confirm.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_submit_keeps_selection(self, engine, contact, confirm, tmp_output_dir, full_selection):
        """A sink failure propagates and leaves the selection for a retry."""
        for moment, song_id in full_selection.items():
            engine.select_song_for_moment(song_id, moment)
        sink = MagicMock()
        sink.submit = AsyncMock(side_effect=SubmissionSinkError("offline"))
        service = FinalizeService(
            engine=engine,
            gate=ConfirmationGate(confirm),
            sink=sink,
            lyrics_sheet=LyricsSheetWriter(tmp_output_dir),
            share=ShareService(Mock()),
        )

        with pytest.raises(SubmissionSinkError):
            await service.submit(contact)

        assert engine.snapshot() == full_selection

    @pytest.mark.asyncio
    async def test_payload_built_before_await(self, engine, contact, confirm, tmp_output_dir):
        """Changes made while the submission is in flight do not alter it."""
        engine.select_song_for_moment(1, "ingresso")
        sent = []

        async def submit(submission):
            engine.select_song_for_moment(10, "fine")
            sent.append(submission)
            return 7

        sink = MagicMock()
        sink.submit = submit
        service = FinalizeService(
            engine=engine,
            gate=ConfirmationGate(confirm),
            sink=sink,
            lyrics_sheet=LyricsSheetWriter(tmp_output_dir),
            share=ShareService(Mock()),
        )

        result = await service.submit(contact)

        assert result.value == 7
        assert [s.song_id for s in sent[0].song_selections] == [1]
