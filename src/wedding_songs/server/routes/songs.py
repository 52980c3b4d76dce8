"""Song catalog endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..storage import MemoryStorage

logger = logging.getLogger(__name__)
router = APIRouter()

# Global storage reference - set in main.py
storage: Optional[MemoryStorage] = None


def set_storage(new_storage: Optional[MemoryStorage]) -> None:
    """Set the global storage reference.

    Args:
        new_storage: MemoryStorage instance
    """
    global storage
    storage = new_storage


def get_storage() -> Optional[MemoryStorage]:
    """Get the global storage reference."""
    return storage


def _unavailable() -> JSONResponse:
    return JSONResponse(status_code=503, content={"message": "Service not ready"})


@router.get("/songs")
async def list_songs():
    """List every song in the catalog.

    Returns:
        List of songs with camelCase keys
    """
    if storage is None:
        return _unavailable()
    return [song.to_dict() for song in storage.get_all_songs()]


@router.get("/songs/{song_id}")
async def get_song(song_id: str):
    """Get a single song.

    Args:
        song_id: Song id from the path

    Returns:
        The song, 400 for a non-numeric id, 404 if unknown
    """
    if storage is None:
        return _unavailable()

    try:
        numeric_id = int(song_id)
    except ValueError:
        return JSONResponse(status_code=400, content={"message": "Invalid song ID"})

    song = storage.get_song_by_id(numeric_id)
    if song is None:
        return JSONResponse(status_code=404, content={"message": "Song not found"})
    return song.to_dict()
