"""
Immutable domain models produced by the resolver, the aggregator and the
variant selector.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ContentKind(str, Enum):
    """The type of catalog content a URL points at."""

    ALBUM = "album"
    SONG = "song"
    PLAYLIST = "playlist"
    ARTIST = "artist"


class CodecCategory(str, Enum):
    """Requested rendition family for variant selection."""

    LOSSLESS = "lossless"
    AAC = "aac"
    ATMOS = "atmos"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class UrlDescriptor(_Frozen):
    """Decomposition of a catalog share URL."""

    kind: ContentKind
    storefront: str
    id: str
    embedded_song_id: Optional[str] = None
    album_id: Optional[str] = None
    source_url: str


class Track(_Frozen):
    id: str
    name: str = ""
    artist_name: str = ""
    album_name: Optional[str] = None
    album_id: Optional[str] = None
    album_url: Optional[str] = None
    track_number: Optional[int] = None
    disc_number: Optional[int] = None
    release_date: Optional[str] = None
    content_rating: Optional[str] = None
    isrc: Optional[str] = None
    url: Optional[str] = None
    cover_url: Optional[str] = None
    manifest_url: Optional[str] = None


class Album(_Frozen):
    id: str
    name: str = ""
    artist_name: str = ""
    release_date: Optional[str] = None
    content_rating: Optional[str] = None
    upc: Optional[str] = None
    copyright: Optional[str] = None
    record_label: Optional[str] = None
    cover_url: Optional[str] = None
    url: Optional[str] = None
    tracks: List[Track] = Field(default_factory=list)


class Playlist(_Frozen):
    id: str
    name: str = ""
    curator_name: str = ""
    description: str = ""
    cover_url: Optional[str] = None
    tracks: List[Track] = Field(default_factory=list)


class Artist(_Frozen):
    """An artist together with its discography, oldest release first."""

    id: str
    name: str = ""
    cover_url: Optional[str] = None
    albums: List[Album] = Field(default_factory=list)


CatalogContent = Union[Album, Track, Playlist, Artist]


class TrackList(_Frozen):
    """
    The downloadable units behind a URL.

    Albums, playlists and songs yield tracks. Artists have no flat track list;
    their albums are returned as URLs instead and `is_flat` is False.
    """

    source: ContentKind
    tracks: List[Track] = Field(default_factory=list)
    album_urls: List[str] = Field(default_factory=list)

    @property
    def is_flat(self) -> bool:
        return self.source is not ContentKind.ARTIST


class ManifestVariant(_Frozen):
    """One `#EXT-X-STREAM-INF` entry of a master playlist."""

    uri: str
    bandwidth: int = 0
    average_bandwidth: int = 0
    codecs: Optional[str] = None
    audio: Optional[str] = None
    resolution: Optional[str] = None
    frame_rate: Optional[float] = None


class MediaPreferences(_Frozen):
    """Selection criteria passed explicitly into every selection call."""

    codec: CodecCategory = CodecCategory.LOSSLESS
    alac_max: int = 192000
    atmos_max: int = 2768
    aac_type: str = "aac-lc"


class SelectionResult(_Frozen):
    stream_url: str
    quality: str
    variant: ManifestVariant


class MediaCapabilities(_Frozen):
    """Info-only view of a manifest: which rendition families exist."""

    variants: List[ManifestVariant] = Field(default_factory=list)
    has_aac: bool = False
    has_lossless: bool = False
    has_hi_res: bool = False
    has_atmos: bool = False
    has_dolby_audio: bool = False


class DownloadPlan(_Frozen):
    """Everything a downloader needs for one track. Nothing is fetched here."""

    track: Track
    selection: SelectionResult
    output_path: Path
