"""Shared fixtures for wedding-songs tests."""

import pytest

from wedding_songs.core.catalog import Song, SongCatalog
from wedding_songs.core.moments import CeremonyMoment
from wedding_songs.core.selection import SelectionEngine
from wedding_songs.core.submission import ContactDetails


def make_song(song_id: int, title: str, *moments: CeremonyMoment) -> Song:
    """Build a catalog song with placeholder text."""
    return Song(
        id=song_id,
        title=title,
        description=f"Description of {title}",
        lyrics=f"First line of {title}\nSecond line",
        audio_url=f"https://example.com/audio/{song_id}.ogg",
        suitable_moments=tuple(moments),
    )


@pytest.fixture
def catalog():
    """The packaged default catalog (songs 1-10)."""
    return SongCatalog.load()


@pytest.fixture
def shared_catalog():
    """Small catalog where song 5 suits both inizio and santo."""
    return SongCatalog(
        [
            make_song(1, "Ave Maria", CeremonyMoment.ENTRANCE, CeremonyMoment.BEGINNING),
            make_song(5, "Servo per Amore", CeremonyMoment.BEGINNING, CeremonyMoment.SANCTUS),
            make_song(6, "Santo Gen Verde", CeremonyMoment.SANCTUS),
            make_song(10, "Resta Qui Con Noi", CeremonyMoment.END),
        ]
    )


@pytest.fixture
def engine(catalog):
    """Empty SelectionEngine over the default catalog."""
    return SelectionEngine(catalog)


@pytest.fixture
def full_selection():
    """One valid song per moment from the default catalog."""
    return {
        CeremonyMoment.ENTRANCE: 1,
        CeremonyMoment.BEGINNING: 2,
        CeremonyMoment.ALLELUIA: 4,
        CeremonyMoment.OFFERTORY: 5,
        CeremonyMoment.SANCTUS: 6,
        CeremonyMoment.PEACE: 7,
        CeremonyMoment.COMMUNION: 8,
        CeremonyMoment.THANKSGIVING: 9,
        CeremonyMoment.END: 10,
    }


@pytest.fixture
def full_engine(engine, full_selection):
    """SelectionEngine with every moment filled."""
    for moment, song_id in full_selection.items():
        engine.select_song_for_moment(song_id, moment)
    return engine


@pytest.fixture
def contact():
    """Valid contact details."""
    return ContactDetails(
        couple_names="Anna & Marco",
        wedding_date="2026-06-20",
        email="anna.marco@example.com",
        phone="+39 333 1234567",
    )
