"""Submission models and formatter.

Projects the current selection plus the couple's contact details into the
payload sent to the choir's submission service. The payload is always
ordered by the ceremony, never by the order songs were picked.
"""

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, model_validator

from wedding_songs.core.catalog import Song, SongCatalog
from wedding_songs.core.errors import EmptySubmissionError, StaleSelectionError
from wedding_songs.core.moments import CEREMONY_ORDER, CeremonyMoment

EMAIL_PATTERN = r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$"


class WireModel(BaseModel):
    """Immutable model serialized with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, str_strip_whitespace=True)


class MomentSelection(WireModel):
    """One chosen song in a submission."""

    moment: CeremonyMoment
    song_id: int = Field(alias="songId")
    song_title: str = Field(alias="songTitle", min_length=1)


class ContactDetails(WireModel):
    """Contact details of the couple, as entered in the choir form."""

    couple_names: str = Field(alias="coupleNames", min_length=1)
    wedding_date: date = Field(alias="weddingDate")
    email: str = Field(pattern=EMAIL_PATTERN)
    phone: str = Field(min_length=1)
    notes: Optional[str] = None


class Submission(ContactDetails):
    """Write-once submission payload.

    Song selections keep ceremony order and carry each moment and each song
    at most once.
    """

    song_selections: tuple[MomentSelection, ...] = Field(alias="songSelections", min_length=1)

    @model_validator(mode="after")
    def _check_unique_selections(self) -> "Submission":
        moments = [s.moment for s in self.song_selections]
        if len(set(moments)) != len(moments):
            raise ValueError("Each ceremony moment can only have one song")
        song_ids = [s.song_id for s in self.song_selections]
        if len(set(song_ids)) != len(song_ids):
            raise ValueError("Each song can only be used once")
        return self

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON payload expected by the submission service.

        Returns:
            Dictionary with camelCase keys
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def project_selection(
    selection: Mapping[CeremonyMoment, int],
    catalog: SongCatalog,
    moments: Sequence[CeremonyMoment] = CEREMONY_ORDER,
) -> list[tuple[CeremonyMoment, Song]]:
    """Resolve a selection into (moment, song) pairs in ceremony order.

    Args:
        selection: Moment to song id mapping
        catalog: Catalog to resolve song ids against
        moments: Ordered moment list

    Returns:
        List of (moment, song) pairs for the selected moments

    Raises:
        StaleSelectionError: If a selected song is no longer in the catalog
        EmptySubmissionError: If nothing is selected
    """
    entries: list[tuple[CeremonyMoment, Song]] = []
    for moment in moments:
        song_id = selection.get(moment)
        if song_id is None:
            continue
        song = catalog.get_song_by_id(song_id)
        if song is None:
            raise StaleSelectionError(moment, song_id)
        entries.append((moment, song))

    if not entries:
        raise EmptySubmissionError()
    return entries


def build_submission(
    contact: ContactDetails,
    selection: Mapping[CeremonyMoment, int],
    catalog: SongCatalog,
    moments: Sequence[CeremonyMoment] = CEREMONY_ORDER,
) -> Submission:
    """Build the submission payload for the current selection.

    The selection does not have to be complete.

    Args:
        contact: Couple's contact details
        selection: Moment to song id mapping
        catalog: Catalog to resolve song titles
        moments: Ordered moment list

    Returns:
        Frozen Submission

    Raises:
        StaleSelectionError: If a selected song is no longer in the catalog
        EmptySubmissionError: If nothing is selected
    """
    entries = project_selection(selection, catalog, moments)
    return Submission(
        **contact.model_dump(),
        song_selections=tuple(
            MomentSelection(moment=moment, song_id=song.id, song_title=song.title)
            for moment, song in entries
        ),
    )
