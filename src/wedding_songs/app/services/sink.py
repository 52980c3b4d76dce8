"""Submission sinks for wedding-songs.

A sink delivers a finished Submission to the choir and returns the id the
receiving side assigned to it. HttpSubmissionSink talks to the submission
service over HTTP; LocalSubmissionSink stores into an in-process
MemoryStorage when no service is configured.
"""

import asyncio
from typing import Any, Optional, Protocol

import requests

from wedding_songs.app.logging_config import get_logger
from wedding_songs.core.errors import SubmissionRejectedError, SubmissionSinkError
from wedding_songs.core.submission import Submission
from wedding_songs.server.storage import MemoryStorage

logger = get_logger(__name__)

SUBMIT_PATH = "/api/submit-selections"


class SubmissionSink(Protocol):
    """Destination for finished submissions."""

    async def submit(self, submission: Submission) -> int:
        """Deliver a submission and return its id."""
        ...


class HttpSubmissionSink:
    """HTTP client for the choir submission service.

    Attributes:
        base_url: Base URL of the submission service
        timeout: Request timeout in seconds
    """

    def __init__(self, base_url: str, timeout: int = 30):
        """Initialize the sink.

        Args:
            base_url: Base URL of the submission service
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def submit(self, submission: Submission) -> int:
        """Send a submission without blocking the event loop.

        Args:
            submission: Submission to send

        Returns:
            Submission id assigned by the service

        Raises:
            SubmissionRejectedError: If the service reports validation errors
            SubmissionSinkError: If the service is unreachable or fails
        """
        return await asyncio.to_thread(self._post, submission.to_payload())

    def _post(self, payload: dict[str, Any]) -> int:
        """POST the payload and parse the response.

        Args:
            payload: JSON payload

        Returns:
            Submission id
        """
        url = f"{self.base_url}{SUBMIT_PATH}"
        logger.info(f"Submitting {len(payload.get('songSelections', []))} selection(s) to {url}")

        try:
            response = requests.post(url, json=payload, timeout=self.timeout)
        except requests.exceptions.ConnectionError as e:
            raise SubmissionSinkError(f"Cannot connect to submission service at {self.base_url}: {e}")
        except requests.exceptions.Timeout as e:
            raise SubmissionSinkError(f"Submission timed out after {self.timeout}s: {e}")
        except requests.exceptions.RequestException as e:
            raise SubmissionSinkError(f"Submission failed: {e}")

        if response.status_code == 400:
            errors = self._json_or_empty(response).get("errors", [])
            logger.warning(f"Submission rejected: {errors}")
            raise SubmissionRejectedError(errors)

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise SubmissionSinkError(
                f"Submission failed (HTTP {response.status_code}): {e}",
                status_code=response.status_code,
            )

        data = self._json_or_empty(response)
        submission_id = data.get("submissionId")
        if submission_id is None:
            raise SubmissionSinkError(
                "Submission service response is missing submissionId",
                status_code=response.status_code,
            )

        logger.info(f"Submission accepted: id={submission_id}")
        return int(submission_id)

    @staticmethod
    def _json_or_empty(response: requests.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}


class LocalSubmissionSink:
    """Stores submissions in an in-process MemoryStorage.

    Attributes:
        storage: Storage receiving the submissions
    """

    def __init__(self, storage: MemoryStorage):
        self.storage = storage

    async def submit(self, submission: Submission) -> int:
        """Store a submission.

        Args:
            submission: Submission to store

        Returns:
            Stored submission id
        """
        record = self.storage.create_submission(submission)
        logger.info(f"Submission stored locally: id={record.id}")
        return record.id


def create_sink(submission_url: str, storage: Optional[MemoryStorage], timeout: int = 30) -> SubmissionSink:
    """Pick the sink for a configuration.

    Args:
        submission_url: Service base URL (empty for local storage)
        storage: Storage used by the local sink
        timeout: HTTP timeout in seconds

    Returns:
        HttpSubmissionSink if a URL is set, otherwise LocalSubmissionSink

    Raises:
        ValueError: If neither a URL nor a storage is available
    """
    if submission_url.strip():
        return HttpSubmissionSink(submission_url, timeout=timeout)
    if storage is None:
        raise ValueError("A storage is required when no submission URL is configured")
    return LocalSubmissionSink(storage)
