"""Submission endpoints."""

import json
import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from wedding_songs.core.submission import Submission

from . import songs

logger = logging.getLogger(__name__)
router = APIRouter()


def _validation_error(errors: list[dict[str, Any]]) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": "Validation error", "errors": errors})


def _unknown_songs(submission: Submission) -> list[dict[str, Any]]:
    """Find selections whose song is missing from the catalog."""
    errors = []
    for index, selection in enumerate(submission.song_selections):
        if songs.storage.get_song_by_id(selection.song_id) is None:
            errors.append(
                {
                    "type": "unknown_song",
                    "loc": ["songSelections", index, "songId"],
                    "msg": f"Unknown song id {selection.song_id}",
                }
            )
    return errors


@router.post("/submit-selections")
async def submit_selections(request: Request):
    """Store a couple's song selections.

    Args:
        request: Incoming request with the submission payload

    Returns:
        201 with the new submission id, or 400 with validation errors
    """
    if songs.storage is None:
        return JSONResponse(status_code=503, content={"message": "Service not ready"})

    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _validation_error([{"type": "json_invalid", "loc": ["body"], "msg": "Invalid JSON body"}])

    try:
        submission = Submission.model_validate(payload)
    except ValidationError as e:
        logger.info(f"Submission rejected: {e.error_count()} error(s)")
        return _validation_error(e.errors(include_url=False, include_context=False, include_input=False))

    errors = _unknown_songs(submission)
    if errors:
        logger.info(f"Submission rejected: {len(errors)} unknown song(s)")
        return _validation_error(errors)

    record = songs.storage.create_submission(submission)
    logger.info(f"Submission {record.id} stored ({len(submission.song_selections)} song(s))")
    return JSONResponse(
        status_code=201,
        content={"message": "Submission successful", "submissionId": record.id},
    )


@router.get("/submissions/{submission_id}")
async def get_submission(submission_id: int):
    """Get a stored submission with its songs.

    Args:
        submission_id: Submission id

    Returns:
        Submission with songs, or 404
    """
    if songs.storage is None:
        return JSONResponse(status_code=503, content={"message": "Service not ready"})

    record = songs.storage.get_submission(submission_id)
    if record is None:
        return JSONResponse(status_code=404, content={"message": "Submission not found"})

    data = record.to_dict()
    data["songs"] = [s.to_dict() for s in songs.storage.get_submission_songs(submission_id)]
    return data
