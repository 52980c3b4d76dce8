"""Core selection engine for Wedding Songs.

Contains the ceremony moments, the song catalog, the selection engine and
the completion, confirmation and submission rules built on top of it.
"""

from wedding_songs.core.catalog import Song, SongCatalog
from wedding_songs.core.completion import Completion, evaluate_completion
from wedding_songs.core.gate import ConfirmationGate, GateDecision, GateResult
from wedding_songs.core.moments import CEREMONY_ORDER, CeremonyMoment
from wedding_songs.core.selection import SelectionEngine, SelectionEvent, SelectionOutcome
from wedding_songs.core.submission import (
    ContactDetails,
    MomentSelection,
    Submission,
    build_submission,
    project_selection,
)

__all__ = [
    "CEREMONY_ORDER",
    "CeremonyMoment",
    "Completion",
    "ConfirmationGate",
    "ContactDetails",
    "GateDecision",
    "GateResult",
    "MomentSelection",
    "SelectionEngine",
    "SelectionEvent",
    "SelectionOutcome",
    "Song",
    "SongCatalog",
    "Submission",
    "build_submission",
    "evaluate_completion",
    "project_selection",
]
