"""Tests for submission sinks.

Note: HTTP calls are mocked; no network access is needed.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from wedding_songs.app.services.sink import (
    HttpSubmissionSink,
    LocalSubmissionSink,
    create_sink,
)
from wedding_songs.core.errors import SubmissionRejectedError, SubmissionSinkError
from wedding_songs.core.moments import CeremonyMoment
from wedding_songs.core.submission import build_submission
from wedding_songs.server.storage import MemoryStorage


@pytest.fixture
def submission(contact, catalog):
    """Submission with two songs."""
    return build_submission(
        contact,
        {CeremonyMoment.ENTRANCE: 1, CeremonyMoment.END: 10},
        catalog,
    )


def _response(status_code, json_data=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data if json_data is not None else {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} Error")
    return response


class TestHttpSubmissionSink:
    """Tests for HttpSubmissionSink."""

    @pytest.mark.asyncio
    async def test_successful_submit(self, submission):
        """A 201 response yields the submission id."""
        sink = HttpSubmissionSink("http://choir.example/", timeout=5)
        with patch("wedding_songs.app.services.sink.requests.post") as mock_post:
            mock_post.return_value = _response(201, {"message": "Submission successful", "submissionId": 12})

            submission_id = await sink.submit(submission)

        assert submission_id == 12
        args, kwargs = mock_post.call_args
        assert args[0] == "http://choir.example/api/submit-selections"
        assert kwargs["json"]["songSelections"][0]["moment"] == "ingresso"
        assert kwargs["timeout"] == 5

    @pytest.mark.asyncio
    async def test_validation_errors_raise_rejected(self, submission):
        """A 400 response carries the service's error list."""
        errors = [{"loc": ["email"], "msg": "bad email"}]
        sink = HttpSubmissionSink("http://choir.example")
        with patch("wedding_songs.app.services.sink.requests.post") as mock_post:
            mock_post.return_value = _response(400, {"message": "Validation error", "errors": errors})

            with pytest.raises(SubmissionRejectedError) as exc_info:
                await sink.submit(submission)

        assert exc_info.value.errors == errors

    @pytest.mark.asyncio
    async def test_server_error_raises_sink_error(self, submission):
        """Other HTTP failures are retryable sink errors."""
        sink = HttpSubmissionSink("http://choir.example")
        with patch("wedding_songs.app.services.sink.requests.post") as mock_post:
            mock_post.return_value = _response(500)

            with pytest.raises(SubmissionSinkError) as exc_info:
                await sink.submit(submission)

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_connection_error(self, submission):
        """An unreachable service raises SubmissionSinkError."""
        sink = HttpSubmissionSink("http://choir.example")
        with patch(
            "wedding_songs.app.services.sink.requests.post",
            side_effect=requests.exceptions.ConnectionError("refused"),
        ):
            with pytest.raises(SubmissionSinkError, match="Cannot connect"):
                await sink.submit(submission)

    @pytest.mark.asyncio
    async def test_timeout(self, submission):
        """A timeout raises SubmissionSinkError."""
        sink = HttpSubmissionSink("http://choir.example", timeout=1)
        with patch(
            "wedding_songs.app.services.sink.requests.post",
            side_effect=requests.exceptions.Timeout("slow"),
        ):
            with pytest.raises(SubmissionSinkError, match="timed out"):
                await sink.submit(submission)

    @pytest.mark.asyncio
    async def test_missing_submission_id(self, submission):
        """A success without an id is treated as a failure."""
        sink = HttpSubmissionSink("http://choir.example")
        with patch("wedding_songs.app.services.sink.requests.post") as mock_post:
            mock_post.return_value = _response(201, {"message": "ok"})

            with pytest.raises(SubmissionSinkError, match="submissionId"):
                await sink.submit(submission)


class TestLocalSubmissionSink:
    """Tests for LocalSubmissionSink."""

    @pytest.mark.asyncio
    async def test_stores_in_memory(self, submission, catalog):
        """Submissions get incrementing ids."""
        storage = MemoryStorage(catalog)
        sink = LocalSubmissionSink(storage)

        assert await sink.submit(submission) == 1
        assert await sink.submit(submission) == 2
        assert storage.submission_count == 2


class TestCreateSink:
    """Tests for create_sink."""

    def test_url_selects_http(self, catalog):
        """A URL selects the HTTP sink."""
        assert isinstance(create_sink("http://choir.example", None), HttpSubmissionSink)

    def test_empty_url_selects_local(self, catalog):
        """No URL selects local storage."""
        assert isinstance(create_sink("", MemoryStorage(catalog)), LocalSubmissionSink)

    def test_empty_url_without_storage_fails(self):
        """Local mode needs a storage."""
        with pytest.raises(ValueError):
            create_sink("", None)
