"""Completion evaluation for a ceremony selection."""

from dataclasses import dataclass
from typing import Mapping, Sequence

from wedding_songs.core.moments import CEREMONY_ORDER, CeremonyMoment


@dataclass(frozen=True)
class Completion:
    """How much of the ceremony has a song.

    Attributes:
        selected: Number of moments with a song
        total: Number of moments in the ceremony
    """

    selected: int
    total: int

    @property
    def is_complete(self) -> bool:
        """Check if every moment has a song."""
        return self.selected == self.total

    @property
    def remaining(self) -> int:
        """Get the number of moments still without a song."""
        return self.total - self.selected

    @property
    def percent(self) -> int:
        """Get completion as a whole percentage, rounded half up."""
        if self.total <= 0:
            return 0
        return int(100 * self.selected / self.total + 0.5)

    @property
    def summary(self) -> str:
        """Get the progress line shown under the progress bar."""
        done = "All" if self.is_complete else str(self.selected)
        return f"{done}/{self.total} selections made"


def evaluate_completion(
    selection: Mapping[CeremonyMoment, int],
    moments: Sequence[CeremonyMoment] = CEREMONY_ORDER,
) -> Completion:
    """Evaluate a selection against the ordered moment list.

    Args:
        selection: Current moment to song id mapping
        moments: Required moments

    Returns:
        Completion for the selection
    """
    selected = sum(1 for moment in moments if moment in selection)
    return Completion(selected=selected, total=len(moments))
