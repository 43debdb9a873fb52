"""Command-line interface for Playlist Sync."""

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config.settings import Settings
from .core.manager import PlaylistManager
from .utils.logger import setup_logger
from .utils.platform import get_config_dir

app = typer.Typer(help="Remote playlist sync cache")
console = Console()

ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to configuration file"
)


def get_settings(config_path: Optional[Path] = None) -> Settings:
    """Load settings from file or defaults."""
    return Settings.from_file_or_default(config_path)


def get_manager(settings: Settings, level: str = "WARNING") -> PlaylistManager:
    """Build a playlist manager that logs to the console only."""
    logger = setup_logger(log_file=None, level=level, console=True)
    return PlaylistManager.from_settings(settings, logger)


def format_millis(millis: int) -> str:
    if millis <= 0:
        return "Never"
    return datetime.fromtimestamp(millis / 1000).strftime("%Y-%m-%d %H:%M:%S")


def wait_for_sync(manager: PlaylistManager, timeout: float) -> None:
    """Wait for the background job and report whether the cache is fresh."""
    with console.status("Syncing playlist..."):
        finished = manager.wait_for_update(timeout)

    if not manager.needs_update():
        console.print(f"[green]Playlist is up to date (last sync: {format_millis(manager.get_last_update())})[/green]")
    elif finished:
        console.print("[yellow]Sync stopped before the playlist could be refreshed[/yellow]")
    else:
        console.print(f"[yellow]Playlist still stale after {timeout:g}s, giving up[/yellow]")
    manager.shutdown()


@app.command()
def start(config: Optional[Path] = ConfigOption):
    """Start the sync service."""
    console.print("[cyan]Starting Playlist Sync service...[/cyan]")

    # Import here to avoid circular dependency
    from .service import PlaylistSyncService

    try:
        service = PlaylistSyncService(config_path=config)
        service.start()
    except KeyboardInterrupt:
        console.print("\n[yellow]Service stopped by user[/yellow]")
    except Exception as e:
        console.print(f"[red]Service error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def show(
    config: Optional[Path] = ConfigOption,
    limit: int = typer.Option(
        50,
        "--limit",
        "-n",
        help="Maximum number of channels to list (0 for all)"
    )
):
    """Show the cached playlist."""
    settings = get_settings(config)
    manager = get_manager(settings)

    try:
        playlist = manager.load_playlist()

        if playlist.is_empty:
            console.print("[yellow]No cached playlist yet[/yellow]")
            console.print("\nUse the 'sync' command to download it")
            return

        table = Table(title=f"Playlist '{playlist.title}' ({len(playlist)} channels)")
        table.add_column("Group", style="cyan")
        table.add_column("Channel", style="green")
        table.add_column("Sources", justify="right")

        channels = playlist.channels
        if limit > 0:
            channels = channels[:limit]

        for channel in channels:
            table.add_row(
                channel.group_name or "-",
                channel.name,
                str(len(channel.urls))
            )

        console.print(table)

        if len(channels) < len(playlist):
            console.print(f"... {len(playlist) - len(channels)} more")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    finally:
        manager.shutdown()


@app.command(name="get-url")
def get_url(config: Optional[Path] = ConfigOption):
    """Print the current playlist URL."""
    settings = get_settings(config)
    manager = get_manager(settings)
    console.print(manager.get_playlist_url())


@app.command(name="set-url")
def set_url(
    url: str = typer.Argument(..., help="Playlist URL or built-in playlist name"),
    config: Optional[Path] = ConfigOption,
    timeout: float = typer.Option(
        30,
        "--timeout",
        "-t",
        help="Seconds to wait for the first sync"
    )
):
    """Switch to another playlist URL and sync it."""
    settings = get_settings(config)
    manager = get_manager(settings, level="INFO")

    built_in = dict(manager.get_built_in_playlists())
    if url in built_in:
        url = built_in[url]
    elif not url.startswith(('http://', 'https://')):
        console.print(f"[red]Error: '{url}' is neither a URL nor a built-in playlist[/red]")
        raise typer.Exit(1)

    manager.set_playlist_url(url)
    console.print(f"[green]Playlist URL set to {url}[/green]")
    wait_for_sync(manager, timeout)


@app.command()
def builtin(config: Optional[Path] = ConfigOption):
    """List the built-in playlists."""
    settings = get_settings(config)
    manager = get_manager(settings)
    current = manager.get_playlist_url()

    table = Table(title="Built-in Playlists")
    table.add_column("Name", style="cyan")
    table.add_column("URL", style="green")
    table.add_column("Active")

    for name, url in manager.get_built_in_playlists():
        table.add_row(name, url, "*" if url == current else "")

    console.print(table)


@app.command()
def sync(
    config: Optional[Path] = ConfigOption,
    timeout: float = typer.Option(
        60,
        "--timeout",
        "-t",
        help="Seconds to wait for the sync to finish"
    )
):
    """Force an immediate sync."""
    settings = get_settings(config)
    manager = get_manager(settings, level="INFO")

    console.print(f"[cyan]Syncing {manager.get_playlist_url()}...[/cyan]")
    manager.set_last_update(0, request_update=True)
    wait_for_sync(manager, timeout)


@app.command()
def status(config: Optional[Path] = ConfigOption):
    """Show sync status."""
    settings = get_settings(config)
    manager = get_manager(settings)

    console.print("[cyan]Playlist Sync Status[/cyan]\n")

    console.print(f"Config directory: {get_config_dir()}")
    console.print(f"Preferences: {settings.storage.preferences_path}")
    console.print(f"Cache file: {settings.storage.cache_path}")
    console.print(f"Log file: {settings.logging.path}\n")

    console.print("[bold]Sync:[/bold]")
    console.print(f"  URL: {manager.get_playlist_url()}")
    console.print(f"  Last sync: {format_millis(manager.get_last_update())}")
    console.print(f"  Cached: {'yes' if manager.cache.exists() else 'no'}")
    stale = manager.needs_update()
    console.print(f"  Stale: {'[yellow]yes[/yellow]' if stale else '[green]no[/green]'}")


@app.command()
def init_config(
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path for config file"
    )
):
    """Initialize a configuration file with defaults."""
    if output is None:
        output = get_config_dir() / 'config.yaml'

    if output.exists():
        overwrite = typer.confirm(
            f"Config file already exists at {output}. Overwrite?",
            default=False
        )
        if not overwrite:
            console.print("[yellow]Cancelled[/yellow]")
            return

    settings = Settings()
    settings.save(output)

    console.print(f"[green]Configuration file created: {output}[/green]")
    console.print("\nEdit this file to customize your settings")


if __name__ == "__main__":
    app()
