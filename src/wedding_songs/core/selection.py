"""Selection engine for Wedding Songs.

Holds the mapping of ceremony moments to chosen songs and enforces its
invariants:

- each moment has at most one song
- a song is used for at most one moment
- a song is only assigned to a moment it is suitable for

Every mutation returns a SelectionEvent and notifies listeners with it, so
a UI can show feedback without the engine holding any UI state.
"""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from wedding_songs.app.logging_config import get_logger
from wedding_songs.core.catalog import SongCatalog
from wedding_songs.core.completion import Completion, evaluate_completion
from wedding_songs.core.errors import (
    ConflictError,
    InvalidMomentError,
    UnknownSongError,
    UnsuitableMomentError,
    WeddingSongsError,
)
from wedding_songs.core.gate import Confirmer, ask
from wedding_songs.core.moments import CEREMONY_ORDER, CeremonyMoment

logger = get_logger(__name__)

RESET_PROMPT = "Are you sure you want to reset all your song selections?"


class SelectionOutcome(Enum):
    """Result of a selection mutation."""

    APPLIED = "applied"
    TOGGLED_OFF = "toggled_off"
    REJECTED = "rejected"
    REMOVED = "removed"
    CLEARED = "cleared"
    CANCELLED = "cancelled"
    NO_OP = "no_op"


@dataclass(frozen=True)
class SelectionEvent:
    """Notification emitted by every selection mutation.

    Attributes:
        outcome: What happened
        message: User-facing feedback text
        moment: Moment involved, if any
        song_id: Song involved, if any
        error: Reason for a rejection
    """

    outcome: SelectionOutcome
    message: str
    moment: Optional[CeremonyMoment] = None
    song_id: Optional[int] = None
    error: Optional[WeddingSongsError] = None

    @property
    def rejected(self) -> bool:
        """Check if the change was refused."""
        return self.outcome == SelectionOutcome.REJECTED

    @property
    def changed(self) -> bool:
        """Check if the selection was modified."""
        return self.outcome in (
            SelectionOutcome.APPLIED,
            SelectionOutcome.TOGGLED_OFF,
            SelectionOutcome.REMOVED,
            SelectionOutcome.CLEARED,
        )


class SelectionEngine:
    """Moment to song mapping with its invariants.

    Attributes:
        catalog: Catalog used to validate song ids and suitability
    """

    def __init__(self, catalog: SongCatalog):
        """Initialize an empty selection.

        Args:
            catalog: Song catalog
        """
        self.catalog = catalog
        self._selection: dict[CeremonyMoment, int] = {}
        self._lock = threading.RLock()
        self._listeners: list[Callable[[SelectionEvent], None]] = []

    def add_listener(self, callback: Callable[[SelectionEvent], None]) -> None:
        """Add a listener for selection events.

        Args:
            callback: Function called with each SelectionEvent
        """
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[SelectionEvent], None]) -> None:
        """Remove a selection event listener.

        Args:
            callback: Callback to remove
        """
        self._listeners = [cb for cb in self._listeners if cb != callback]

    def _notify(self, event: SelectionEvent) -> SelectionEvent:
        """Notify listeners of an event and return it."""
        for callback in list(self._listeners):
            try:
                callback(event)
            except Exception:
                logger.exception(f"Selection listener failed for {event.outcome.value}")
        return event

    # Queries

    def snapshot(self) -> dict[CeremonyMoment, int]:
        """Get a copy of the selection in ceremony order."""
        with self._lock:
            return {m: self._selection[m] for m in CEREMONY_ORDER if m in self._selection}

    def __len__(self) -> int:
        with self._lock:
            return len(self._selection)

    @property
    def is_empty(self) -> bool:
        """Check if no moment has a song."""
        return len(self) == 0

    @property
    def selected_song_ids(self) -> set[int]:
        """Get the ids of all chosen songs."""
        with self._lock:
            return set(self._selection.values())

    def song_for(self, moment: Union[CeremonyMoment, str]) -> Optional[int]:
        """Get the song id chosen for a moment.

        Args:
            moment: Ceremony moment

        Returns:
            Song id or None if the moment is empty
        """
        with self._lock:
            return self._selection.get(CeremonyMoment.parse(moment))

    def moment_for(self, song_id: int) -> Optional[CeremonyMoment]:
        """Get the moment a song is chosen for.

        Args:
            song_id: Song id

        Returns:
            Moment or None if the song is not selected
        """
        with self._lock:
            return self._moment_for_locked(song_id)

    def is_song_selected(self, song_id: int) -> bool:
        """Check if a song is chosen for any moment."""
        return self.moment_for(song_id) is not None

    def get_completion(self) -> Completion:
        """Get completion of the current selection."""
        return evaluate_completion(self.snapshot())

    # Mutations

    def select_song_for_moment(
        self, song_id: int, moment: Union[CeremonyMoment, str]
    ) -> SelectionEvent:
        """Choose a song for a moment, or toggle it off if already chosen there.

        Invalid combinations and songs already used elsewhere are rejected
        with an event carrying the error; the selection is left unchanged.

        Args:
            song_id: Catalog song id
            moment: Ceremony moment

        Returns:
            SelectionEvent describing the result
        """
        try:
            moment = CeremonyMoment.parse(moment)
        except ValueError:
            return self._reject(InvalidMomentError(moment), song_id=song_id)

        with self._lock:
            if self._selection.get(moment) == song_id:
                del self._selection[moment]
                event = SelectionEvent(
                    SelectionOutcome.TOGGLED_OFF,
                    f"Song removed from {moment.label}.",
                    moment=moment,
                    song_id=song_id,
                )
            else:
                song = self.catalog.get_song_by_id(song_id)
                if song is None:
                    return self._reject(UnknownSongError(song_id), moment=moment, song_id=song_id)
                if not song.is_suitable_for(moment):
                    return self._reject(
                        UnsuitableMomentError(song_id, song.title, moment),
                        moment=moment,
                        song_id=song_id,
                    )

                existing = self._moment_for_locked(song_id)
                if existing is not None:
                    return self._reject(ConflictError(song_id, existing), moment=moment, song_id=song_id)

                self._selection[moment] = song_id
                event = SelectionEvent(
                    SelectionOutcome.APPLIED,
                    f"'{song.title}' selected for {moment.label}.",
                    moment=moment,
                    song_id=song_id,
                )

        logger.info(f"Selection {event.outcome.value}: song {song_id} @ {moment.value}")
        return self._notify(event)

    def remove_song_from_moment(self, moment: Union[CeremonyMoment, str]) -> SelectionEvent:
        """Remove the song chosen for a moment, if any.

        Args:
            moment: Ceremony moment

        Returns:
            SelectionEvent (REMOVED, or NO_OP if the moment was empty)
        """
        try:
            moment = CeremonyMoment.parse(moment)
        except ValueError:
            return self._reject(InvalidMomentError(moment))

        with self._lock:
            song_id = self._selection.pop(moment, None)

        if song_id is None:
            return self._notify(
                SelectionEvent(SelectionOutcome.NO_OP, f"No song selected for {moment.label}.", moment=moment)
            )

        logger.info(f"Removed song {song_id} from {moment.value}")
        return self._notify(
            SelectionEvent(
                SelectionOutcome.REMOVED,
                f"Song removed from {moment.label}.",
                moment=moment,
                song_id=song_id,
            )
        )

    async def reset_selections(self, confirm: Confirmer) -> SelectionEvent:
        """Clear the whole selection after explicit confirmation.

        An empty selection is reported as a no-op without asking.

        Args:
            confirm: Yes/no confirmer (sync or async)

        Returns:
            SelectionEvent (CLEARED, CANCELLED or NO_OP)
        """
        if self.is_empty:
            return self._notify(
                SelectionEvent(SelectionOutcome.NO_OP, "You don't have any songs selected yet.")
            )

        if not await ask(confirm, RESET_PROMPT):
            return self._notify(
                SelectionEvent(SelectionOutcome.CANCELLED, "Your song selections were kept.")
            )

        with self._lock:
            cleared = len(self._selection)
            self._selection.clear()

        logger.info(f"Selections reset ({cleared} cleared)")
        return self._notify(
            SelectionEvent(SelectionOutcome.CLEARED, "All your song selections have been cleared.")
        )

    def _moment_for_locked(self, song_id: int) -> Optional[CeremonyMoment]:
        for moment, selected_id in self._selection.items():
            if selected_id == song_id:
                return moment
        return None

    def _reject(
        self,
        error: WeddingSongsError,
        moment: Optional[CeremonyMoment] = None,
        song_id: Optional[int] = None,
    ) -> SelectionEvent:
        logger.info(f"Selection rejected: {error}")
        return self._notify(
            SelectionEvent(
                SelectionOutcome.REJECTED,
                str(error),
                moment=moment,
                song_id=song_id,
                error=error,
            )
        )
