"""Choir submission service for wedding-songs."""

from wedding_songs import __version__

__all__ = ["__version__"]
