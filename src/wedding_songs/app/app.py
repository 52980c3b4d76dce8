"""Main TUI application for wedding-songs.

Textual-based application for couples to browse the song catalog, pick
one song per ceremony moment, and send the result to the choir.
"""

import webbrowser
from typing import Callable, Optional

from textual import work
from textual.app import App

from wedding_songs.app.config import AppConfig
from wedding_songs.app.logging_config import get_logger
from wedding_songs.app.services.asset_cache import AssetCache
from wedding_songs.app.services.finalize import FinalizeService
from wedding_songs.app.services.lyrics_sheet import LyricsSheetWriter
from wedding_songs.app.services.playback import AudioPreview, PlaybackService
from wedding_songs.app.services.share import ShareService
from wedding_songs.app.services.sink import create_sink
from wedding_songs.app.state import AppScreen, AppState
from wedding_songs.core.catalog import SongCatalog
from wedding_songs.core.gate import ConfirmationGate
from wedding_songs.core.moments import CeremonyMoment
from wedding_songs.core.selection import SelectionEngine
from wedding_songs.server.storage import MemoryStorage

logger = get_logger(__name__)


class WeddingSongsApp(App):
    """Wedding ceremony song planner.

    Provides a Textual TUI for browsing songs, choosing one per ceremony
    moment, and downloading, sharing or submitting the selection.
    """

    CSS_PATH = "screens/app.tcss"
    TITLE = "Wedding Songs"
    SUB_TITLE = "Ceremony Song Planner"

    BINDINGS = [
        ("question_mark", "help", "Help"),
    ]

    def __init__(
        self,
        config: AppConfig,
        catalog: Optional[SongCatalog] = None,
        share_opener: Optional[Callable[[str], object]] = None,
        *args,
        **kwargs,
    ):
        """Initialize the application.

        Args:
            config: Application configuration
            catalog: Song catalog (loaded from config when omitted)
            share_opener: URL opener for share links (defaults to the web browser)
        """
        super().__init__(*args, **kwargs)

        self.config = config
        self.config.ensure_directories()

        self.state = AppState()
        self.catalog = catalog or SongCatalog.load(config.catalog_path)
        self.engine = SelectionEngine(self.catalog)
        self.gate = ConfirmationGate(self.confirm)

        # Local storage receives submissions when no service URL is configured
        self.storage = None if config.uses_remote_submission else MemoryStorage(self.catalog)
        self.sink = create_sink(config.submission_url, self.storage, timeout=config.request_timeout)

        self.finalize = FinalizeService(
            engine=self.engine,
            gate=self.gate,
            sink=self.sink,
            lyrics_sheet=LyricsSheetWriter(config.output_dir),
            share=ShareService(share_opener or webbrowser.open),
        )

        self.asset_cache = AssetCache(config.cache_dir / "audio", timeout=config.request_timeout)
        self.playback = PlaybackService(
            buffer_ms=config.preview_buffer_ms,
            volume=config.preview_volume,
        )

        logger.info(
            f"App initialized: {len(self.catalog)} songs, "
            f"sink={type(self.sink).__name__}, output={config.output_dir}"
        )

    def on_mount(self) -> None:
        """Handle app mount event."""
        logger.info("App mounted, pushing initial screen: GALLERY")
        self.push_screen(self._create_screen(AppScreen.GALLERY))

    def _create_screen(self, screen: AppScreen):
        """Create a fresh screen instance.

        Args:
            screen: Screen enum value

        Returns:
            New screen instance
        """
        logger.debug(f"Creating fresh screen instance: {screen.name}")
        if screen == AppScreen.GALLERY:
            from wedding_songs.app.screens.gallery import GalleryScreen
            return GalleryScreen(self.state, self.engine)
        elif screen == AppScreen.SELECTIONS:
            from wedding_songs.app.screens.selections import SelectionsScreen
            return SelectionsScreen(
                self.state,
                self.engine,
                self.finalize,
                on_moment_chosen=self.show_gallery_for,
            )

    def create_preview(self) -> AudioPreview:
        """Create an audio preview bound to the shared player."""
        return AudioPreview(self.asset_cache, self.playback)

    def navigate_to(self, screen: AppScreen) -> None:
        """Navigate to a screen.

        Args:
            screen: Screen to navigate to
        """
        logger.info(f"Navigate to: {screen.name} (from {self.state.current_screen.name})")
        self.state.navigate_to(screen)
        self.push_screen(self._create_screen(screen))

    def navigate_back(self) -> None:
        """Navigate back to the previous screen."""
        if self.state.navigate_back():
            self.pop_screen()
        else:
            logger.warning("Cannot navigate back - no previous screen")

    def show_gallery_for(self, moment: CeremonyMoment) -> None:
        """Return to the gallery filtered to one moment.

        Args:
            moment: Moment the couple wants to pick a song for
        """
        logger.info(f"Opening gallery for {moment.value}")
        self.state.set_moment_filter(moment)
        if self.state.current_screen != AppScreen.GALLERY:
            self.navigate_back()

    async def confirm(self, message: str) -> bool:
        """Ask a yes/no question in a modal dialog.

        Must be awaited from a worker.

        Args:
            message: Question to show

        Returns:
            True if the user answered yes
        """
        from wedding_songs.app.screens.confirm import ConfirmScreen

        return bool(await self.push_screen_wait(ConfirmScreen(message)))

    @work(exclusive=True, group="reset")
    async def reset_selections(self) -> None:
        """Clear every selection after confirmation."""
        event = await self.engine.reset_selections(self.confirm)
        self.notify(event.message)

    def action_reset(self) -> None:
        """Reset all selections."""
        self.reset_selections()

    def action_help(self) -> None:
        """Show the help dialog."""
        from wedding_songs.app.screens.help import HelpScreen

        self.push_screen(HelpScreen())

    def action_quit(self) -> None:
        """Quit the application with cleanup."""
        self.playback.stop()
        self.exit()
