"""
Resolves share URLs into typed catalog entities.
"""

import logging
from typing import Awaitable, Callable, Dict, Optional

from rich.markup import escape

from amdl_cli.exceptions import (
    AssetUnavailableError,
    InvalidUrlError,
    RelationshipMissingError,
    SongNotFoundError,
)
from amdl_cli.models.config import CatalogConfig
from amdl_cli.models.entities import (
    Album,
    Artist,
    CatalogContent,
    ContentKind,
    MediaCapabilities,
    MediaPreferences,
    Playlist,
    SelectionResult,
    Track,
    TrackList,
    UrlDescriptor,
)
from amdl_cli.media.selector import inspect_manifest, select_variant
from amdl_cli.utils.url import build_album_url, resolve_url

from . import normalizer
from .protocols import CatalogSource, ManifestSource
from .strategies import FALLBACK_ERRORS, run_strategies

log = logging.getLogger(__name__)


def parse_or_raise(url: str) -> UrlDescriptor:
    """Resolves a URL, turning an unrecognized shape into InvalidUrlError."""
    descriptor = resolve_url(url)
    if descriptor is None:
        raise InvalidUrlError(f"Invalid Apple Music URL: {url}")
    return descriptor


class CatalogAggregator:
    """
    Assembles Album/Song/Playlist/Artist views from catalog documents.

    The aggregator holds no per-request state: every call builds its entities
    from fresh lookups, so independent calls may run concurrently.
    """

    def __init__(
        self,
        catalog: CatalogSource,
        config: CatalogConfig,
        manifests: Optional[ManifestSource] = None,
    ):
        self.catalog = catalog
        self.config = config
        self.manifests = manifests

    async def resolve_content(self, url: str) -> CatalogContent:
        """Resolves a share URL into the entity it points at."""
        return await self.resolve_descriptor(parse_or_raise(url))

    async def resolve_descriptor(self, descriptor: UrlDescriptor) -> CatalogContent:
        # An album link selecting one song is a song request first
        if descriptor.embedded_song_id and descriptor.album_id:
            try:
                return await self.get_song(
                    descriptor.embedded_song_id, descriptor.storefront
                )
            except FALLBACK_ERRORS as e:
                log.warning(
                    "[yellow]Could not resolve song "
                    f"{escape(descriptor.embedded_song_id)} from album URL: "
                    f"{escape(str(e))}. Falling back to the album.[/yellow]"
                )
                return await self.get_album(descriptor.album_id, descriptor.storefront)

        handlers: Dict[ContentKind, Callable[[str, str], Awaitable[CatalogContent]]] = {
            ContentKind.ALBUM: self.get_album,
            ContentKind.SONG: self.get_song,
            ContentKind.PLAYLIST: self.get_playlist,
            ContentKind.ARTIST: self.get_artist,
        }
        return await handlers[descriptor.kind](descriptor.id, descriptor.storefront)

    async def get_album(self, album_id: str, storefront: str) -> Album:
        document = await self.catalog.fetch_album(album_id, storefront)
        return normalizer.album_from_document(
            document, storefront, self.config.cover_size
        )

    async def get_playlist(self, playlist_id: str, storefront: str) -> Playlist:
        document = await self.catalog.fetch_playlist(playlist_id, storefront)
        return normalizer.playlist_from_document(document, self.config.cover_size)

    async def get_artist(self, artist_id: str, storefront: str) -> Artist:
        document = await self.catalog.fetch_artist(artist_id, storefront)
        albums = await self.catalog.fetch_artist_albums(artist_id, storefront)
        return normalizer.artist_from_documents(
            document, albums, storefront, self.config.cover_size
        )

    async def get_song(self, song_id: str, storefront: str) -> Track:
        """
        Resolves a song, first directly and then through the album it belongs to.

        If both lookups fail, the error of the direct lookup is raised.
        """
        return await run_strategies(
            [
                ("direct lookup", lambda: self._song_by_id(song_id, storefront)),
                (
                    "album search",
                    lambda: self._song_via_album_search(song_id, storefront),
                ),
            ],
            subject=f"song '{song_id}'",
        )

    async def _song_by_id(self, song_id: str, storefront: str) -> Track:
        document = await self.catalog.fetch_song(song_id, storefront)
        return normalizer.song_from_document(
            document, storefront, self.config.cover_size
        )

    async def _song_via_album_search(self, song_id: str, storefront: str) -> Track:
        albums = await self.catalog.fetch_song_albums(song_id, storefront)
        if not albums:
            raise RelationshipMissingError(f"No album found for song '{song_id}'.")

        album_id = albums[0].get("id")
        if not album_id:
            raise RelationshipMissingError(
                f"Album search result for song '{song_id}' carries no id."
            )

        album_url = build_album_url(storefront, album_id, song_id)
        descriptor = resolve_url(album_url)
        if descriptor is None or descriptor.album_id is None:
            raise InvalidUrlError(f"Invalid album URL: {album_url}")

        album = await self.get_album(descriptor.album_id, descriptor.storefront)
        track = next((t for t in album.tracks if t.id == song_id), None)
        if track is None:
            raise SongNotFoundError(
                f"Song '{song_id}' not found in album '{album.id}'."
            )
        return track.model_copy(update={"album_id": album.id, "album_url": album_url})

    async def get_track_list(self, url: str) -> TrackList:
        """
        Lists the tracks behind a URL.

        Songs are looked up inside their parent album. Artists have no flat track
        list: their album URLs are returned instead and `is_flat` is False.
        """
        descriptor = parse_or_raise(url)
        content = await self.resolve_descriptor(descriptor)

        if isinstance(content, Artist):
            return TrackList(
                source=ContentKind.ARTIST,
                album_urls=[album.url for album in content.albums if album.url],
            )
        if isinstance(content, Album):
            return TrackList(source=ContentKind.ALBUM, tracks=content.tracks)
        if isinstance(content, Playlist):
            return TrackList(source=ContentKind.PLAYLIST, tracks=content.tracks)

        if not content.album_id:
            raise RelationshipMissingError(
                f"Song '{content.id}' has no album to list tracks from."
            )
        album = await self.get_album(content.album_id, descriptor.storefront)
        tracks = [track for track in album.tracks if track.id == content.id]
        if not tracks:
            raise SongNotFoundError(
                f"Song '{content.id}' not found in album '{album.id}'."
            )
        return TrackList(source=ContentKind.SONG, tracks=tracks)

    async def _fetch_manifest(self, track: Track) -> str:
        if not track.manifest_url:
            raise AssetUnavailableError(
                f"No manifest URL found for song '{track.id}'."
            )
        if self.manifests is None:
            raise AssetUnavailableError("No manifest fetcher configured.")
        return await self.manifests.fetch(track.manifest_url)

    async def get_media(
        self, track: Track, preferences: MediaPreferences
    ) -> SelectionResult:
        """Selects the rendition of `track` that matches `preferences`."""
        manifest_text = await self._fetch_manifest(track)
        return select_variant(manifest_text, track.manifest_url, preferences)

    async def get_media_info(self, track: Track) -> MediaCapabilities:
        """Reports which rendition families are available for `track`."""
        return inspect_manifest(await self._fetch_manifest(track))
