"""In-memory storage for the submission service.

Keeps the song catalog and received submissions for the lifetime of the
process. Ids are assigned from incrementing counters starting at 1.
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from wedding_songs.core.catalog import Song, SongCatalog
from wedding_songs.core.moments import CeremonyMoment
from wedding_songs.core.submission import Submission


@dataclass
class SubmissionRecord:
    """Stored submission header.

    Attributes:
        id: Submission id
        couple_names: Names of the couple
        wedding_date: ISO wedding date
        email: Contact email
        phone: Contact phone (WhatsApp)
        notes: Notes for the choir
        created_at: ISO timestamp when received
    """

    id: int
    couple_names: str
    wedding_date: str
    email: str
    phone: str
    notes: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to a camelCase dictionary."""
        return {
            "id": self.id,
            "coupleNames": self.couple_names,
            "weddingDate": self.wedding_date,
            "email": self.email,
            "phone": self.phone,
            "notes": self.notes,
            "createdAt": self.created_at,
        }


@dataclass
class SubmissionSongRecord:
    """One song row of a stored submission."""

    id: int
    submission_id: int
    song_id: int
    moment: CeremonyMoment

    def to_dict(self) -> dict[str, Any]:
        """Convert to a camelCase dictionary."""
        return {
            "id": self.id,
            "submissionId": self.submission_id,
            "songId": self.song_id,
            "moment": self.moment.value,
        }


@dataclass
class MemoryStorage:
    """Thread-safe in-memory store for songs and submissions.

    Attributes:
        catalog: Song catalog served to clients
    """

    catalog: SongCatalog
    _submissions: dict[int, SubmissionRecord] = field(default_factory=dict)
    _submission_songs: dict[int, SubmissionSongRecord] = field(default_factory=dict)
    _next_submission_id: int = 1
    _next_submission_song_id: int = 1
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def get_all_songs(self) -> list[Song]:
        """Get every song in the catalog."""
        return self.catalog.get_all_songs()

    def get_song_by_id(self, song_id: int) -> Optional[Song]:
        """Get a song by id, or None if unknown."""
        return self.catalog.get_song_by_id(song_id)

    def create_submission(self, submission: Submission) -> SubmissionRecord:
        """Store a submission and its song selections.

        Args:
            submission: Validated submission

        Returns:
            Stored submission header
        """
        with self._lock:
            record = SubmissionRecord(
                id=self._next_submission_id,
                couple_names=submission.couple_names,
                wedding_date=submission.wedding_date.isoformat(),
                email=submission.email,
                phone=submission.phone,
                notes=submission.notes or "",
                created_at=datetime.now(timezone.utc).isoformat(),
            )
            self._submissions[record.id] = record
            self._next_submission_id += 1

            for selection in submission.song_selections:
                song_record = SubmissionSongRecord(
                    id=self._next_submission_song_id,
                    submission_id=record.id,
                    song_id=selection.song_id,
                    moment=selection.moment,
                )
                self._submission_songs[song_record.id] = song_record
                self._next_submission_song_id += 1

        return record

    def get_submission(self, submission_id: int) -> Optional[SubmissionRecord]:
        """Get a stored submission header, or None if unknown."""
        with self._lock:
            return self._submissions.get(submission_id)

    def get_submission_songs(self, submission_id: int) -> list[SubmissionSongRecord]:
        """Get the song rows of a submission."""
        with self._lock:
            return [s for s in self._submission_songs.values() if s.submission_id == submission_id]

    @property
    def submission_count(self) -> int:
        """Get the number of stored submissions."""
        with self._lock:
            return len(self._submissions)
