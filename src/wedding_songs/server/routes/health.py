"""Health check endpoint."""

import logging

from fastapi import APIRouter

from .. import __version__
from .songs import get_storage

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Service status with catalog and submission counts
    """
    storage = get_storage()
    if storage is None:
        return {"status": "starting", "version": __version__}

    return {
        "status": "healthy",
        "version": __version__,
        "songs": len(storage.catalog),
        "submissions": storage.submission_count,
    }
