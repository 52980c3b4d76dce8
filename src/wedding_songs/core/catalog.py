"""Song catalog for Wedding Songs.

This module handles loading and querying the read-only song library
from a catalog JSON file. The package ships a default catalog.
"""

import json
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Iterator, Optional, Union

from wedding_songs.core.moments import CEREMONY_ORDER, CeremonyMoment

DEFAULT_CATALOG_RESOURCE = "catalog.json"


@dataclass(frozen=True)
class Song:
    """Song available for the ceremony.

    Attributes:
        id: Numeric song identifier
        title: Song title
        description: Short description shown in the gallery
        lyrics: Full lyrics, lines separated by newlines
        audio_url: URL of the audio preview
        suitable_moments: Ceremony moments this song can be chosen for
    """

    id: int
    title: str
    description: str
    lyrics: str
    audio_url: str
    suitable_moments: tuple[CeremonyMoment, ...]

    def is_suitable_for(self, moment: CeremonyMoment) -> bool:
        """Check whether the song may be chosen for a moment."""
        return moment in self.suitable_moments

    @property
    def moment_labels(self) -> str:
        """Get the suitable moments as a display string."""
        return ", ".join(m.label for m in self.suitable_moments)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Song":
        """Create Song from dictionary.

        Args:
            data: Dictionary containing song data (camelCase keys)

        Returns:
            Song instance

        Raises:
            ValueError: If the song has no suitable moments or an unknown one
        """
        moments = [CeremonyMoment.parse(m) for m in data.get("suitableMoments", [])]
        if not moments:
            raise ValueError(f"Song {data.get('id')!r} has no suitable moments")

        # Keep ceremony order regardless of the order in the file
        ordered = tuple(m for m in CEREMONY_ORDER if m in moments)

        return cls(
            id=int(data["id"]),
            title=data["title"],
            description=data.get("description", ""),
            lyrics=data.get("lyrics", ""),
            audio_url=data.get("audioUrl", ""),
            suitable_moments=ordered,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert Song to dictionary.

        Returns:
            Dictionary representation of song
        """
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "lyrics": self.lyrics,
            "audioUrl": self.audio_url,
            "suitableMoments": [m.value for m in self.suitable_moments],
        }


class SongCatalog:
    """Read-only collection of songs indexed by id.

    Attributes:
        version: Catalog format version
    """

    def __init__(self, songs: list[Song], version: str = "1.0"):
        """Initialize the catalog.

        Args:
            songs: Songs in display order
            version: Catalog format version

        Raises:
            ValueError: If two songs share an id
        """
        self.version = version
        self._songs: dict[int, Song] = {}
        for song in songs:
            if song.id in self._songs:
                raise ValueError(f"Duplicate song id in catalog: {song.id}")
            self._songs[song.id] = song

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "SongCatalog":
        """Load a catalog from a JSON file.

        Args:
            path: Path to the catalog file (packaged default if None)

        Returns:
            SongCatalog instance

        Raises:
            FileNotFoundError: If catalog file doesn't exist
            ValueError: If catalog file contains invalid data
        """
        if path is None:
            text = resources.files("wedding_songs.data").joinpath(DEFAULT_CATALOG_RESOURCE).read_text(
                encoding="utf-8"
            )
        else:
            if not path.exists():
                raise FileNotFoundError(f"Catalog not found: {path}")
            text = path.read_text(encoding="utf-8")

        data = json.loads(text)
        songs = [Song.from_dict(s) for s in data.get("songs", [])]
        return cls(songs, version=data.get("version", "1.0"))

    def save(self, path: Path) -> None:
        """Save the catalog to a JSON file.

        Args:
            path: Destination path
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "version": self.version,
            "songs": [song.to_dict() for song in self._songs.values()],
        }
        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def __len__(self) -> int:
        return len(self._songs)

    def __iter__(self) -> Iterator[Song]:
        return iter(self._songs.values())

    def __contains__(self, song_id: object) -> bool:
        return song_id in self._songs

    def get_all_songs(self) -> list[Song]:
        """Get every song in catalog order."""
        return list(self._songs.values())

    def get_song_by_id(self, song_id: int) -> Optional[Song]:
        """Get a song by ID.

        Args:
            song_id: Song ID to look up

        Returns:
            Song if found, None otherwise
        """
        return self._songs.get(song_id)

    def songs_for_moment(self, moment: Union[CeremonyMoment, str]) -> list[Song]:
        """Find songs suitable for a ceremony moment.

        Args:
            moment: Moment to filter by

        Returns:
            List of matching songs
        """
        moment = CeremonyMoment.parse(moment)
        return [s for s in self._songs.values() if s.is_suitable_for(moment)]

    def search(
        self,
        query: str = "",
        moment: Optional[Union[CeremonyMoment, str]] = None,
    ) -> list[Song]:
        """Filter songs by moment and free text.

        The query matches title or description, case-insensitively.

        Args:
            query: Search text (empty matches everything)
            moment: Optional moment filter

        Returns:
            List of matching songs
        """
        songs = self.songs_for_moment(moment) if moment is not None else self.get_all_songs()
        term = query.strip().lower()
        if not term:
            return songs
        return [
            s for s in songs
            if term in s.title.lower() or term in s.description.lower()
        ]
