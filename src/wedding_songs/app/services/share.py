"""Share service for wedding-songs.

Builds a WhatsApp share link listing the selected songs in ceremony order
and opens it in the browser.
"""

import webbrowser
from typing import Callable, Sequence
from urllib.parse import quote

from wedding_songs.app.logging_config import get_logger
from wedding_songs.core.catalog import Song
from wedding_songs.core.moments import CeremonyMoment

logger = get_logger(__name__)

WHATSAPP_URL = "https://wa.me/?text="
MESSAGE_HEADER = "My Wedding Ceremony Song Selections:"


def build_share_message(entries: Sequence[tuple[CeremonyMoment, Song]]) -> str:
    """Build the share message.

    Args:
        entries: (moment, song) pairs in ceremony order

    Returns:
        Message text, one "Moment: Title" line per song
    """
    lines = [f"{moment.label}: {song.title}" for moment, song in entries]
    return f"{MESSAGE_HEADER}\n\n" + "\n".join(lines)


def build_share_url(message: str) -> str:
    """Build the WhatsApp link for a message."""
    return WHATSAPP_URL + quote(message, safe="")


class ShareService:
    """Opens share links in an external channel.

    Attributes:
        opener: Callable that opens a URL (defaults to webbrowser.open)
    """

    def __init__(self, opener: Callable[[str], object] = webbrowser.open):
        self.opener = opener

    def share(self, entries: Sequence[tuple[CeremonyMoment, Song]]) -> str:
        """Open a WhatsApp share link for the selection.

        Args:
            entries: (moment, song) pairs in ceremony order

        Returns:
            The share URL that was opened
        """
        url = build_share_url(build_share_message(entries))
        logger.info(f"Opening share link for {len(entries)} song(s)")
        self.opener(url)
        return url
