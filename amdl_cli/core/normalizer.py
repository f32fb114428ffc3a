"""
Maps raw catalog documents onto the immutable domain models.
"""

from typing import Any, Dict, List, Optional

from amdl_cli.exceptions import RelationshipMissingError
from amdl_cli.models.entities import Album, Artist, Playlist, Track
from amdl_cli.utils.formatting import resolve_artwork
from amdl_cli.utils.url import build_album_url


def _relationship(document: Dict[str, Any], name: str) -> List[Dict[str, Any]]:
    return (document.get("relationships", {}).get(name) or {}).get("data") or []


def track_from_document(
    document: Dict[str, Any],
    cover_size: str,
    album_name: Optional[str] = None,
    album_id: Optional[str] = None,
    album_url: Optional[str] = None,
) -> Track:
    attrs = document.get("attributes", {})
    return Track(
        id=document["id"],
        name=attrs.get("name", ""),
        artist_name=attrs.get("artistName", ""),
        album_name=attrs.get("albumName") or album_name,
        album_id=album_id,
        album_url=album_url,
        track_number=attrs.get("trackNumber"),
        disc_number=attrs.get("discNumber"),
        release_date=attrs.get("releaseDate"),
        content_rating=attrs.get("contentRating"),
        isrc=attrs.get("isrc"),
        url=attrs.get("url"),
        cover_url=resolve_artwork(attrs, cover_size),
        manifest_url=(attrs.get("extendedAssetUrls") or {}).get("enhancedHls"),
    )


def song_from_document(
    document: Dict[str, Any], storefront: str, cover_size: str
) -> Track:
    """
    Builds a track from a direct song lookup.

    Raises:
        RelationshipMissingError: If the document has no album relationship.
    """
    albums = _relationship(document, "albums")
    if not albums:
        raise RelationshipMissingError(
            f"No album relationship found for song '{document.get('id')}'."
        )
    album_id = albums[0]["id"]
    return track_from_document(
        document,
        cover_size,
        album_id=album_id,
        album_url=build_album_url(storefront, album_id),
    )


def album_from_document(
    document: Dict[str, Any], storefront: str, cover_size: str
) -> Album:
    """Builds an album; tracks keep the catalog's order."""
    attrs = document.get("attributes", {})
    album_id = document["id"]
    album_name = attrs.get("name", "")
    album_url = build_album_url(storefront, album_id)

    tracks = [
        track_from_document(
            track,
            cover_size,
            album_name=album_name,
            album_id=album_id,
            album_url=album_url,
        )
        for track in _relationship(document, "tracks")
    ]

    record_labels = _relationship(document, "record-labels")
    record_label = attrs.get("recordLabel") or (
        record_labels[0].get("attributes", {}).get("name") if record_labels else None
    )

    return Album(
        id=album_id,
        name=album_name,
        artist_name=attrs.get("artistName", ""),
        release_date=attrs.get("releaseDate"),
        content_rating=attrs.get("contentRating"),
        upc=attrs.get("upc"),
        copyright=attrs.get("copyright"),
        record_label=record_label,
        cover_url=resolve_artwork(attrs, cover_size),
        url=attrs.get("url") or album_url,
        tracks=tracks,
    )


def playlist_from_document(document: Dict[str, Any], cover_size: str) -> Playlist:
    attrs = document.get("attributes", {})
    return Playlist(
        id=document["id"],
        name=attrs.get("name", ""),
        curator_name=attrs.get("curatorName") or attrs.get("artistName", ""),
        description=(attrs.get("description") or {}).get("standard", ""),
        cover_url=resolve_artwork(attrs, cover_size),
        tracks=[
            track_from_document(track, cover_size)
            for track in _relationship(document, "tracks")
        ],
    )


def artist_from_documents(
    document: Dict[str, Any],
    album_documents: List[Dict[str, Any]],
    storefront: str,
    cover_size: str,
) -> Artist:
    """Builds an artist; `album_documents` are expected in release order already."""
    attrs = document.get("attributes", {})
    return Artist(
        id=document["id"],
        name=attrs.get("name", ""),
        cover_url=resolve_artwork(attrs, cover_size),
        albums=[
            album_from_document(album, storefront, cover_size)
            for album in album_documents
        ],
    )
