"""Lyrics sheet export for wedding-songs.

Renders the selected songs with their lyrics, in ceremony order, into a
printable HTML file (plus a plain-text copy) using rich.
"""

import io
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from wedding_songs.app.logging_config import get_logger
from wedding_songs.core.catalog import Song
from wedding_songs.core.moments import CeremonyMoment

logger = get_logger(__name__)

SHEET_TITLE = "Wedding Ceremony Song Selections"
SHEET_BASENAME = "wedding-ceremony-songs"


class LyricsSheetWriter:
    """Writes lyrics sheets into an output directory.

    Attributes:
        output_dir: Directory receiving the sheets
        width: Render width in characters
        write_text: Whether to also write a .txt copy
    """

    def __init__(self, output_dir: Path, width: int = 80, write_text: bool = True):
        self.output_dir = output_dir
        self.width = width
        self.write_text = write_text

    def render(self, entries: Sequence[tuple[CeremonyMoment, Song]], created: Optional[datetime] = None) -> Console:
        """Render the sheet into a recording console.

        Args:
            entries: (moment, song) pairs in ceremony order
            created: Creation time shown under the title (defaults to now)

        Returns:
            Console holding the recorded output
        """
        created = created or datetime.now()
        console = Console(record=True, file=io.StringIO(), width=self.width, color_system=None)

        console.print(Text(SHEET_TITLE, style="bold", justify="center"))
        console.print(Text(f"Created on {created:%Y-%m-%d}", justify="center"))
        console.print()

        for moment, song in entries:
            body = Text()
            body.append(f"Song: {song.title}\n\n", style="bold")
            body.append(song.lyrics.strip(), style="italic")
            console.print(Panel(body, title=f"{moment.position}. {moment.label}", title_align="left"))
            console.print()

        console.print(
            Text(f"Wedding Song Planner - generated on {created:%Y-%m-%d %H:%M}", style="dim", justify="center")
        )
        return console

    def write(self, entries: Sequence[tuple[CeremonyMoment, Song]], created: Optional[datetime] = None) -> Path:
        """Write the sheet to the output directory.

        Args:
            entries: (moment, song) pairs in ceremony order
            created: Creation time (defaults to now)

        Returns:
            Path to the HTML sheet
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        console = self.render(entries, created)

        html_path = self.output_dir / f"{SHEET_BASENAME}.html"
        if self.write_text:
            text_path = self.output_dir / f"{SHEET_BASENAME}.txt"
            text_path.write_text(console.export_text(clear=False), encoding="utf-8")

        console.save_html(str(html_path))
        logger.info(f"Lyrics sheet written: {html_path} ({len(entries)} song(s))")
        return html_path
