"""Application state for wedding-songs.

Manages UI state for the TUI with observable properties. The couple's song
choices live in the SelectionEngine, not here.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional

from wedding_songs.app.logging_config import get_logger
from wedding_songs.core.moments import CeremonyMoment
from wedding_songs.core.submission import ContactDetails

logger = get_logger(__name__)


class AppScreen(Enum):
    """Available screens in the app."""

    GALLERY = auto()
    SELECTIONS = auto()


@dataclass
class AppState:
    """Observable UI state.

    Attributes:
        current_screen: Currently active screen
        previous_screen: Screen to return to (for back navigation)
        moment_filter: Moment the gallery is filtered to (None shows all songs)
        search_query: Current gallery search text
        selected_song_id: Song highlighted in the gallery
        contact_details: Last contact details entered, used to prefill the form
        is_busy: Whether a finalize action is running
    """

    # Navigation
    current_screen: AppScreen = AppScreen.GALLERY
    previous_screen: Optional[AppScreen] = None

    # Gallery
    moment_filter: Optional[CeremonyMoment] = None
    search_query: str = ""
    selected_song_id: Optional[int] = None

    # Finalize
    contact_details: Optional[ContactDetails] = None
    is_busy: bool = False

    _listeners: dict[str, list[Callable]] = field(default_factory=dict)

    def add_listener(self, property_name: str, callback: Callable) -> None:
        """Add a listener for a property change.

        Args:
            property_name: Name of the property to watch
            callback: Function to call when property changes
        """
        self._listeners.setdefault(property_name, []).append(callback)

    def remove_listener(self, property_name: str, callback: Callable) -> None:
        """Remove a property change listener.

        Args:
            property_name: Name of the property
            callback: Callback to remove
        """
        if property_name in self._listeners:
            self._listeners[property_name] = [
                cb for cb in self._listeners[property_name] if cb != callback
            ]

    def _notify(self, property_name: str, value) -> None:
        """Notify listeners of a property change."""
        for callback in list(self._listeners.get(property_name, [])):
            try:
                callback(value)
            except Exception:
                logger.exception(f"State listener for {property_name} failed")

    def navigate_to(self, screen: AppScreen) -> None:
        """Navigate to a screen, saving current for back navigation.

        Args:
            screen: Screen to navigate to
        """
        self.previous_screen = self.current_screen
        self.current_screen = screen
        self._notify("current_screen", screen)

    def navigate_back(self) -> bool:
        """Navigate back to the previous screen.

        Returns:
            True if navigation occurred
        """
        if self.previous_screen:
            self.current_screen = self.previous_screen
            self.previous_screen = None
            self._notify("current_screen", self.current_screen)
            return True
        return False

    def set_moment_filter(self, moment: Optional[CeremonyMoment]) -> None:
        """Filter the gallery to a moment.

        Args:
            moment: Moment to show (None for all songs)
        """
        self.moment_filter = moment
        self._notify("moment_filter", moment)

    def set_search_query(self, query: str) -> None:
        """Update the search query.

        Args:
            query: New search query
        """
        self.search_query = query
        self._notify("search_query", query)

    def select_song(self, song_id: Optional[int]) -> None:
        """Highlight a song in the gallery.

        Args:
            song_id: Song to select (None to clear)
        """
        self.selected_song_id = song_id
        self._notify("selected_song_id", song_id)

    def set_contact_details(self, contact: Optional[ContactDetails]) -> None:
        """Remember the contact details last entered."""
        self.contact_details = contact
        self._notify("contact_details", contact)

    def set_busy(self, busy: bool) -> None:
        """Set busy state.

        Args:
            busy: Whether a finalize action is running
        """
        self.is_busy = busy
        self._notify("is_busy", busy)
