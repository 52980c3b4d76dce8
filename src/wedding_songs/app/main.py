"""CLI entry point for wedding-songs.

Provides the `wedding-songs` command for launching the Textual interface,
running the choir submission service, and inspecting the song catalog.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from wedding_songs import __version__
from wedding_songs.app.config import AppConfig, ensure_app_config_exists, get_app_config_path
from wedding_songs.app.logging_config import LOG_FILENAME, setup_logging
from wedding_songs.core.catalog import SongCatalog
from wedding_songs.core.moments import CeremonyMoment

app = typer.Typer(
    name="wedding-songs",
    help="Wedding Songs - ceremony song planner",
    no_args_is_help=False,
)
console = Console()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
    ),
) -> None:
    """Wedding Songs - pick the music for your wedding ceremony."""
    if version:
        console.print(f"wedding-songs version {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def _show_welcome() -> None:
    """Show welcome message for first run."""
    console.print(
        Panel.fit(
            "[bold green]Welcome to Wedding Songs![/bold green]\n\n"
            "Choose one song for each moment of your ceremony.\n"
            "Configuration will be created at: "
            f"[cyan]{get_app_config_path()}[/cyan]",
            title="wedding-songs",
            border_style="green",
        )
    )


def _load_config(config_path: Optional[Path]) -> AppConfig:
    """Load the config file, or create the default one."""
    try:
        if config_path:
            return AppConfig.load(config_path)
        return ensure_app_config_exists()
    except FileNotFoundError as e:
        console.print(f"[red]Config file not found: {e}[/red]")
        raise typer.Exit(1)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error loading config: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def run(
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Launch the TUI application."""
    from wedding_songs.app.app import WeddingSongsApp

    if config_path is None and not get_app_config_path().exists():
        _show_welcome()

    config = _load_config(config_path)

    logger = setup_logging(config.log_dir)
    logger.info(f"Catalog: {config.catalog_path or 'packaged catalog'}")
    logger.info(f"Cache dir: {config.cache_dir}")
    logger.info(f"Submission: {config.submission_url or 'local storage'}")
    console.print(f"[dim]Session log: {config.log_dir / LOG_FILENAME}[/dim]")

    try:
        app_instance = WeddingSongsApp(config)
        logger.info("Launching TUI application")
        app_instance.run()
        logger.info("Application exited normally")
    except KeyboardInterrupt:
        logger.info("Application interrupted by user (Ctrl+C)")
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(0)
    except Exception as e:
        logger.exception(f"Application error: {e}")
        console.print(f"[red]Error running app: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on"),
) -> None:
    """Run the choir submission service."""
    from wedding_songs.server.config import settings
    from wedding_songs.server.main import main as serve_main

    host = host or settings.WS_HOST
    port = port or settings.WS_PORT
    console.print(f"[green]Serving submissions on http://{host}:{port}[/green]")
    serve_main(host=host, port=port)


@app.command()
def songs(
    moment: Optional[str] = typer.Option(
        None,
        "--moment",
        "-m",
        help="Only show songs suitable for this moment (e.g. ingresso)",
    ),
    catalog_path: Optional[Path] = typer.Option(
        None,
        "--catalog",
        help="Catalog JSON file (defaults to the packaged catalog)",
    ),
) -> None:
    """List the songs in the catalog."""
    try:
        filter_moment = CeremonyMoment.parse(moment) if moment else None
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    try:
        catalog = SongCatalog.load(catalog_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Cannot load catalog: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Songs for {filter_moment.label}" if filter_moment else "All Songs")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Title", style="bold", no_wrap=True)
    table.add_column("Moments")
    table.add_column("Description", style="dim")

    found = catalog.search(moment=filter_moment)
    for song in found:
        table.add_row(str(song.id), song.title, song.moment_labels, song.description)

    console.print(table)
    console.print(f"[dim]{len(found)} song(s)[/dim]")


@app.command()
def config(
    show: bool = typer.Option(
        False,
        "--show",
        help="Show current configuration",
    ),
) -> None:
    """Show application configuration."""
    config_path = get_app_config_path()

    if not config_path.exists():
        console.print(f"[yellow]No config file at {config_path}[/yellow]")
        console.print("Run [bold]wedding-songs run[/bold] to create default config.")
        return

    cfg = AppConfig.load(config_path)
    console.print(f"[bold]Config file:[/bold] {config_path}")
    console.print(f"[bold]Catalog:[/bold] {cfg.catalog_path or 'packaged catalog'}")
    console.print(f"[bold]Cache dir:[/bold] {cfg.cache_dir}")
    console.print(f"[bold]Output dir:[/bold] {cfg.output_dir}")
    console.print(f"[bold]Submission URL:[/bold] {cfg.submission_url or '(local storage)'}")
    if show:
        console.print(f"[bold]Request timeout:[/bold] {cfg.request_timeout}s")
        console.print(f"[bold]Preview buffer:[/bold] {cfg.preview_buffer_ms} ms")
        console.print(f"[bold]Preview volume:[/bold] {cfg.preview_volume}")


def cli_entry() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli_entry()
