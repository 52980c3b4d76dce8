"""Ceremony moments for Wedding Songs.

Defines the nine fixed stages of the wedding ceremony that can receive a
song, in the order they happen during the celebration.
"""

from enum import Enum
from typing import Union


class CeremonyMoment(str, Enum):
    """Ceremony stage eligible to receive a song.

    Values are the stable names used in the catalog file and on the wire.
    """

    ENTRANCE = "ingresso"
    BEGINNING = "inizio"
    ALLELUIA = "alleluia"
    OFFERTORY = "offertorio"
    SANCTUS = "santo"
    PEACE = "pace"
    COMMUNION = "comunione"
    THANKSGIVING = "ringraziamento"
    END = "fine"

    @property
    def label(self) -> str:
        """Get the display name (e.g. "Ingresso")."""
        return self.value.capitalize()

    @property
    def description(self) -> str:
        """Get a short explanation of the moment."""
        return _DESCRIPTIONS[self]

    @property
    def position(self) -> int:
        """Get the 1-based position of the moment in the ceremony."""
        return CEREMONY_ORDER.index(self) + 1

    @classmethod
    def parse(cls, value: Union["CeremonyMoment", str]) -> "CeremonyMoment":
        """Convert a moment name into a CeremonyMoment.

        Accepts an existing member, its value ("santo") or its member name
        ("SANCTUS"), case-insensitively.

        Args:
            value: Moment or moment name

        Returns:
            Matching CeremonyMoment

        Raises:
            ValueError: If the name is not a known moment
        """
        if isinstance(value, cls):
            return value
        name = str(value).strip()
        try:
            return cls(name.lower())
        except ValueError:
            pass
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown ceremony moment: {value!r}") from None


_DESCRIPTIONS = {
    CeremonyMoment.ENTRANCE: "Entrance processional",
    CeremonyMoment.BEGINNING: "Beginning of the ceremony",
    CeremonyMoment.ALLELUIA: "Before the Gospel reading",
    CeremonyMoment.OFFERTORY: "Offertory / presentation of gifts",
    CeremonyMoment.SANCTUS: "Sanctus hymn",
    CeremonyMoment.PEACE: "Sign of peace",
    CeremonyMoment.COMMUNION: "Communion",
    CeremonyMoment.THANKSGIVING: "Thanksgiving after communion",
    CeremonyMoment.END: "Recessional at the end",
}

# Enum definition order is the ceremony order
CEREMONY_ORDER: tuple[CeremonyMoment, ...] = tuple(CeremonyMoment)
