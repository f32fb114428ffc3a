"""
Data Models Layer.

Pydantic models for the validated configuration and the immutable catalog
entities, manifest variants and selection results.
"""

from .config import CatalogConfig
from .entities import (
    Album,
    Artist,
    CodecCategory,
    ContentKind,
    DownloadPlan,
    ManifestVariant,
    MediaCapabilities,
    MediaPreferences,
    Playlist,
    SelectionResult,
    Track,
    TrackList,
    UrlDescriptor,
)

__all__ = [
    "Album",
    "Artist",
    "CatalogConfig",
    "CodecCategory",
    "ContentKind",
    "DownloadPlan",
    "ManifestVariant",
    "MediaCapabilities",
    "MediaPreferences",
    "Playlist",
    "SelectionResult",
    "Track",
    "TrackList",
    "UrlDescriptor",
]
