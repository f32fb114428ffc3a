"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from amdl_cli import __version__
from amdl_cli.api.auth import StaticTokenProvider
from amdl_cli.api.client import CatalogClient
from amdl_cli.core.aggregator import CatalogAggregator, parse_or_raise
from amdl_cli.core.planner import DownloadPlanner
from amdl_cli.exceptions import AmdlError, UnsupportedContentError
from amdl_cli.media.manifest import ManifestFetcher
from amdl_cli.models.config import CatalogConfig
from amdl_cli.models.entities import CodecCategory, Track
from amdl_cli.storage.config_manager import ConfigManager

from .formatters import (
    format_error_with_suggestions,
    print_capabilities,
    print_config,
    print_content,
    print_descriptor,
    print_plans,
    print_selection,
    print_track_list,
    print_validation_table,
)

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("amdl_cli")

app = typer.Typer(
    name="amdl-cli",
    help=(
        "Resolve Apple Music links and pick the best audio rendition. Use"
        " 'amdl-cli <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "amdl-cli"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def _load_config(**overrides) -> CatalogConfig:
    cli_options = {key: value for key, value in overrides.items() if value is not None}
    return ConfigManager(CONFIG_FILE).load_config(cli_options)


@asynccontextmanager
async def _session(config: CatalogConfig) -> AsyncIterator[CatalogAggregator]:
    """Builds an aggregator over live HTTP collaborators and closes them afterwards."""
    client = CatalogClient(
        StaticTokenProvider(config.authorization_token),
        language=config.language,
        media_user_token=config.media_user_token,
    )
    fetcher = ManifestFetcher()
    try:
        yield CatalogAggregator(client, config, manifests=fetcher)
    finally:
        await fetcher.close()
        await client.close()


def _run(coro) -> None:
    """Runs a coroutine, mapping application errors to a panel and exit code 1."""
    try:
        asyncio.run(coro)
    except AmdlError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e


async def _song_for(aggregator: CatalogAggregator, url: str) -> Track:
    """Resolves a URL that must point at a single song."""
    content = await aggregator.resolve_content(url)
    if not isinstance(content, Track):
        raise UnsupportedContentError(
            "This command needs a song URL (or an album URL with ?i=<songId>)."
        )
    return content


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """Apple Music catalog resolver CLI"""
    if version:
        console.print(f"[bold]amdl-cli[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("amdl_cli").setLevel(log_level)

    if show_config:
        if not CONFIG_FILE.is_file():
            console.print(
                "[red]✗ Config file not found.[/] Run [cyan]amdl-cli init[/cyan]"
                " first."
            )
            raise typer.Exit(code=1)
        config_manager = ConfigManager(CONFIG_FILE)
        config = config_manager.load_config()
        print_config(CONFIG_FILE, config.model_dump(exclude={"config_path"}))
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    token: str = typer.Argument(..., help="Apple Music authorization (bearer) token."),
    media_user_token: str = typer.Option(
        "", "--media-user-token", help="Subscriber media-user-token."
    ),
    language: str = typer.Option("", "--language", "-l", help="Catalog language."),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite existing configuration without asking."
    ),
):
    """Initialize configuration with an authorization token."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    try:
        ConfigManager(CONFIG_FILE).save_new_config(
            {
                "authorization_token": token,
                "media_user_token": media_user_token,
                "language": language,
            }
        )
    except AmdlError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    console.print(f"\n[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")
    console.print("Try: [cyan]amdl-cli info <URL>[/cyan]")


@app.command()
def parse(url: str = typer.Argument(..., help="Apple Music URL.")):
    """Show how a URL is classified, without contacting the catalog."""
    try:
        print_descriptor(parse_or_raise(url))
    except AmdlError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e


@app.command()
def info(
    url: str = typer.Argument(..., help="Apple Music URL."),
    cover_size: Optional[str] = typer.Option(
        None, "--cover-size", help="Artwork size, e.g. 1200x1200."
    ),
):
    """Show the album, song, playlist or artist behind a URL."""
    config = _load_config(cover_size=cover_size)

    async def _info():
        async with _session(config) as aggregator:
            print_content(await aggregator.resolve_content(url))

    _run(_info())


@app.command()
def tracks(url: str = typer.Argument(..., help="Apple Music URL.")):
    """List the tracks behind a URL (album URLs for artists)."""
    config = _load_config()

    async def _tracks():
        async with _session(config) as aggregator:
            print_track_list(await aggregator.get_track_list(url))

    _run(_tracks())


@app.command()
def media(
    url: str = typer.Argument(..., help="Song URL or album URL with ?i=<songId>."),
    codec: CodecCategory = typer.Option(
        CodecCategory.LOSSLESS, "--codec", "-c", help="Rendition family to select."
    ),
    alac_max: Optional[int] = typer.Option(
        None, "--alac-max", help="Highest acceptable ALAC sample rate (Hz)."
    ),
    atmos_max: Optional[int] = typer.Option(
        None, "--atmos-max", help="Highest acceptable Atmos bitrate (kbps)."
    ),
    aac_type: Optional[str] = typer.Option(
        None, "--aac-type", help="AAC audio-group profile, e.g. aac-lc."
    ),
    info_only: bool = typer.Option(
        False, "--info", help="List available renditions instead of selecting one."
    ),
):
    """Select the best audio rendition of a song."""
    config = _load_config(alac_max=alac_max, atmos_max=atmos_max, aac_type=aac_type)

    async def _media():
        async with _session(config) as aggregator:
            track = await _song_for(aggregator, url)
            if info_only:
                print_capabilities(track, await aggregator.get_media_info(track))
            else:
                selection = await aggregator.get_media(
                    track, config.preferences(codec)
                )
                print_selection(track, selection)

    _run(_media())


@app.command()
def plan(
    url: str = typer.Argument(..., help="Apple Music URL."),
    codec: CodecCategory = typer.Option(
        CodecCategory.LOSSLESS, "--codec", "-c", help="Rendition family to select."
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Directory the files would be written to."
    ),
):
    """Show what would be downloaded for a URL. Nothing is downloaded."""
    config = _load_config(output_dir=str(output_dir) if output_dir else None)

    async def _plan():
        async with _session(config) as aggregator:
            planner = DownloadPlanner(aggregator, Path(config.output_dir))
            try:
                plans = await planner.plan(url, config.preferences(codec))
            except UnsupportedContentError as e:
                if not e.album_urls:
                    raise
                console.print(f"[yellow]{e}[/yellow]")
                for album_url in e.album_urls:
                    console.print(f"  {album_url}")
                return
            print_plans(plans)

    _run(_plan())


@app.command()
def validate():
    """Validate the current configuration."""
    try:
        config = ConfigManager(CONFIG_FILE).load_config()
        print_validation_table(config)
    except AmdlError as e:
        console.print(f"[red]✗ Configuration is invalid: {e}[/red]")
        raise typer.Exit(code=1) from e
