"""Error types for Wedding Songs.

Every error here is recoverable by user action: correct the input,
re-select a song, or retry the submission.
"""

from typing import Any, Optional

from wedding_songs.core.moments import CeremonyMoment


class WeddingSongsError(Exception):
    """Base class for all Wedding Songs errors."""


class SelectionValidationError(WeddingSongsError):
    """A song/moment combination that the catalog does not allow."""


class InvalidMomentError(SelectionValidationError):
    """The requested moment is not one of the ceremony moments."""

    def __init__(self, value: Any):
        super().__init__(f"Unknown ceremony moment: {value!r}")
        self.value = value


class UnknownSongError(SelectionValidationError):
    """The song id does not exist in the catalog."""

    def __init__(self, song_id: int):
        super().__init__(f"Song {song_id} is not in the catalog")
        self.song_id = song_id


class UnsuitableMomentError(SelectionValidationError):
    """The song is not tagged as suitable for the requested moment."""

    def __init__(self, song_id: int, song_title: str, moment: CeremonyMoment):
        super().__init__(f"'{song_title}' is not suitable for {moment.label}")
        self.song_id = song_id
        self.song_title = song_title
        self.moment = moment


class ConflictError(WeddingSongsError):
    """The song is already chosen for another moment.

    Attributes:
        song_id: The song that was requested
        moment: The moment the song is already selected for
    """

    def __init__(self, song_id: int, moment: CeremonyMoment):
        super().__init__(
            f"This song is already selected for {moment.label}. "
            "Each song can only be used once."
        )
        self.song_id = song_id
        self.moment = moment


class StaleSelectionError(WeddingSongsError):
    """A selected song id no longer resolves in the catalog."""

    def __init__(self, moment: CeremonyMoment, song_id: int):
        super().__init__(
            f"Selection out of date: song {song_id} chosen for {moment.label} "
            "is no longer available. Please select it again."
        )
        self.moment = moment
        self.song_id = song_id


class EmptySubmissionError(WeddingSongsError):
    """Nothing has been selected yet."""

    def __init__(self, message: str = "Please select at least one song for your ceremony."):
        super().__init__(message)


class MissingContactDetailsError(WeddingSongsError):
    """Submitting to the choir requires contact details."""

    def __init__(self, message: str = "Contact details are required to submit selections."):
        super().__init__(message)


class SubmissionSinkError(WeddingSongsError):
    """Delivering the submission failed; the selection is kept for a retry."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SubmissionRejectedError(WeddingSongsError):
    """The submission service rejected the payload.

    Attributes:
        errors: Validation error details reported by the service
    """

    def __init__(self, errors: Optional[list[Any]] = None, message: str = "Validation error"):
        super().__init__(message)
        self.errors = list(errors or [])
