"""
Builds download plans: which rendition to fetch for each track and where the
file would be written. Nothing is downloaded here.
"""

import logging
from pathlib import Path
from typing import List, Optional

from rich.markup import escape

from amdl_cli.exceptions import EntityNotFoundError, UnsupportedContentError
from amdl_cli.models.entities import DownloadPlan, MediaPreferences
from amdl_cli.utils.path import build_track_path

from .aggregator import CatalogAggregator, parse_or_raise

log = logging.getLogger(__name__)


class DownloadPlanner:
    """Pairs every track behind a URL with its selected stream and output path."""

    def __init__(self, aggregator: CatalogAggregator, output_dir: Path):
        self.aggregator = aggregator
        self.output_dir = output_dir

    async def plan(
        self,
        url: str,
        preferences: MediaPreferences,
        output_dir: Optional[Path] = None,
    ) -> List[DownloadPlan]:
        """
        Plans every track of `url`, one after the other.

        Raises:
            UnsupportedContentError: For artist URLs, which carry album URLs
            rather than tracks (available on the exception as `album_urls`).
            EntityNotFoundError: If the URL resolves to no tracks at all.
        """
        descriptor = parse_or_raise(url)
        track_list = await self.aggregator.get_track_list(url)

        if not track_list.is_flat:
            raise UnsupportedContentError(
                "Artist URLs cannot be planned directly; plan each album URL instead.",
                album_urls=track_list.album_urls,
            )
        if not track_list.tracks:
            raise EntityNotFoundError(f"No tracks found for {url}")

        target_dir = output_dir or self.output_dir
        plans = []
        for track in track_list.tracks:
            # Collection tracks carry no asset URLs; the song lookup does
            song = track
            if not track.manifest_url:
                song = await self.aggregator.get_song(track.id, descriptor.storefront)

            selection = await self.aggregator.get_media(song, preferences)
            plans.append(
                DownloadPlan(
                    track=song,
                    selection=selection,
                    output_path=build_track_path(target_dir, song.name),
                )
            )
            log.debug(
                f"Planned '{escape(song.name)}' at {selection.quality} "
                f"-> {plans[-1].output_path}"
            )

        return plans
