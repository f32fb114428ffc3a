"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any, List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from amdl_cli.models.config import CatalogConfig
from amdl_cli.models.entities import (
    Album,
    Artist,
    CatalogContent,
    DownloadPlan,
    MediaCapabilities,
    Playlist,
    SelectionResult,
    Track,
    TrackList,
    UrlDescriptor,
)
from amdl_cli.storage.config_manager import SENSITIVE_KEYS
from amdl_cli.utils.formatting import format_bandwidth, format_track_number


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "AuthenticationError": [
            "• Your authorization token may have expired.",
            "• Run `amdl-cli init <TOKEN> --force` with a fresh token.",
        ],
        "InvalidUrlError": [
            "• Use a music.apple.com album, song, playlist or artist link.",
            "• Check that the URL contains a two-letter storefront, e.g. /us/.",
        ],
        "EntityNotFoundError": [
            "• The item may not be available in this storefront.",
            "• Double-check the id at the end of the URL.",
        ],
        "NoSuitableVariantError": [
            "• Raise the ceiling with --alac-max or --atmos-max.",
            "• Try another codec with --codec aac.",
        ],
        "NoVariantsError": [
            "• The manifest lists no streams; the song may not be streamable.",
        ],
        "AssetUnavailableError": [
            "• This track exposes no streaming manifest in your storefront.",
        ],
        "ConfigurationError": [
            "• Run `amdl-cli validate` to see which setting is wrong.",
        ],
        "ClientResponseError": [
            "• A network connection issue occurred.",
            "• The Apple Music API might be temporarily unavailable.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration, hiding sensitive data."""
    console = Console()
    content = ""
    for key, value in config_data.items():
        if key in SENSITIVE_KEYS and value:
            value = "[hidden]"
        content += f"{key} = {escape(str(value))}\n"

    console.print(
        Panel(
            content.strip(),
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def print_validation_table(config: CatalogConfig):
    """Displays a summary of the current settings."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    token_state = (
        "[green]✓ Configured[/green]"
        if config.authorization_token
        else "[red]✗ Missing[/red]"
    )
    table.add_row("Authorization Token:", token_state)
    table.add_row("Language:", config.language or "[dim]storefront default[/dim]")
    table.add_row("Cover Size:", config.cover_size)
    table.add_row("ALAC Ceiling:", f"{config.alac_max} Hz")
    table.add_row("Atmos Ceiling:", f"{config.atmos_max} kbps")
    table.add_row("AAC Type:", config.aac_type)
    table.add_row("Output Directory:", f"[dim]{escape(config.output_dir)}[/dim]")

    console.print(
        Panel(
            table,
            title="[bold green]✓ Validated Settings[/bold green]",
            border_style="green",
        )
    )


def print_descriptor(descriptor: UrlDescriptor):
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()
    table.add_row("Kind:", descriptor.kind.value)
    table.add_row("Storefront:", descriptor.storefront)
    table.add_row("ID:", descriptor.id)
    if descriptor.album_id and descriptor.album_id != descriptor.id:
        table.add_row("Album ID:", descriptor.album_id)
    console.print(Panel(table, title="URL", border_style="cyan", expand=False))


def _tracks_table(title: str, tracks: List[Track]) -> Table:
    table = Table(title=title, box=box.SIMPLE_HEAD)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Artist")
    table.add_column("Album", style="dim")
    table.add_column("ID", style="dim")
    for track in tracks:
        table.add_row(
            format_track_number(track.track_number, track.disc_number),
            escape(track.name),
            escape(track.artist_name),
            escape(track.album_name or ""),
            track.id,
        )
    return table


def print_content(content: CatalogContent):
    """Displays any resolved catalog entity."""
    console = Console()

    if isinstance(content, Album):
        console.print(
            f"[bold]{escape(content.name)}[/bold] — {escape(content.artist_name)} "
            f"[dim]({content.release_date or 'unknown date'})[/dim]"
        )
        if content.record_label:
            console.print(f"[dim]{escape(content.record_label)}[/dim]")
        console.print(_tracks_table(f"{len(content.tracks)} tracks", content.tracks))

    elif isinstance(content, Playlist):
        console.print(
            f"[bold]{escape(content.name)}[/bold] — "
            f"curated by {escape(content.curator_name)}"
        )
        if content.description:
            console.print(f"[dim]{escape(content.description)}[/dim]")
        console.print(_tracks_table(f"{len(content.tracks)} tracks", content.tracks))

    elif isinstance(content, Artist):
        table = Table(title=f"{escape(content.name)} — discography", box=box.SIMPLE_HEAD)
        table.add_column("Released", style="dim")
        table.add_column("Album", style="cyan")
        table.add_column("URL", style="dim")
        for album in content.albums:
            table.add_row(
                album.release_date or "?", escape(album.name), album.url or ""
            )
        console.print(table)

    else:
        console.print(_tracks_table("Song", [content]))
        if content.album_url:
            console.print(f"[dim]Album: {content.album_url}[/dim]")


def print_track_list(track_list: TrackList):
    console = Console()
    if not track_list.is_flat:
        console.print(
            "[yellow]Artists have no flat track list. Album URLs:[/yellow]"
        )
        for url in track_list.album_urls:
            console.print(f"  {url}")
        return
    console.print(
        _tracks_table(f"{len(track_list.tracks)} tracks", track_list.tracks)
    )


def print_selection(track: Track, selection: SelectionResult):
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()
    table.add_row("Track:", escape(track.name))
    table.add_row("Quality:", f"[green]{selection.quality}[/green]")
    table.add_row("Codec:", selection.variant.codecs or "?")
    table.add_row("Audio Group:", selection.variant.audio or "?")
    table.add_row("Bandwidth:", format_bandwidth(selection.variant.average_bandwidth))
    table.add_row("Stream URL:", f"[dim]{selection.stream_url}[/dim]")
    console.print(Panel(table, title="Selected Rendition", border_style="green"))


def print_capabilities(track: Track, capabilities: MediaCapabilities):
    console = Console()

    def flag(value: bool) -> str:
        return "[green]✓[/green]" if value else "[red]✗[/red]"

    console.print(f"[bold]{escape(track.name)}[/bold]")
    summary = Table(show_header=False, box=None, padding=(0, 2))
    summary.add_column(style="bold cyan")
    summary.add_column()
    summary.add_row("AAC:", flag(capabilities.has_aac))
    summary.add_row("Lossless:", flag(capabilities.has_lossless))
    summary.add_row("Hi-Res Lossless:", flag(capabilities.has_hi_res))
    summary.add_row("Dolby Atmos:", flag(capabilities.has_atmos))
    summary.add_row("Dolby Audio:", flag(capabilities.has_dolby_audio))
    console.print(summary)

    variants = Table(title="Variants", box=box.SIMPLE_HEAD)
    variants.add_column("Codec", style="cyan")
    variants.add_column("Audio Group")
    variants.add_column("Avg. Bandwidth", justify="right")
    for variant in capabilities.variants:
        variants.add_row(
            variant.codecs or "?",
            variant.audio or "?",
            format_bandwidth(variant.average_bandwidth),
        )
    console.print(variants)


def print_plans(plans: List[DownloadPlan]):
    console = Console()
    table = Table(title=f"{len(plans)} planned downloads", box=box.SIMPLE_HEAD)
    table.add_column("Title", style="cyan")
    table.add_column("Quality", style="green")
    table.add_column("Output", style="dim")
    for plan in plans:
        table.add_row(
            escape(plan.track.name), plan.selection.quality, str(plan.output_path)
        )
    console.print(table)
