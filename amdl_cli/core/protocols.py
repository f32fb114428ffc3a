"""Collaborator protocols for dependency injection."""

from typing import Any, Dict, List, Protocol


class CatalogSource(Protocol):
    """Narrow interface of the catalog service the aggregator relies on.

    Every method returns raw JSON documents (`data[]` entries) and raises on
    failure; pagination is the implementation's concern.
    """

    async def fetch_song(self, song_id: str, storefront: str) -> Dict[str, Any]: ...

    async def fetch_album(self, album_id: str, storefront: str) -> Dict[str, Any]: ...

    async def fetch_playlist(
        self, playlist_id: str, storefront: str
    ) -> Dict[str, Any]: ...

    async def fetch_artist(self, artist_id: str, storefront: str) -> Dict[str, Any]: ...

    async def fetch_artist_albums(
        self, artist_id: str, storefront: str, relationship: str = "albums"
    ) -> List[Dict[str, Any]]:
        """Full discography, ordered by release date ascending."""
        ...

    async def fetch_song_albums(
        self, song_id: str, storefront: str
    ) -> List[Dict[str, Any]]: ...


class ManifestSource(Protocol):
    """Returns raw manifest text for a manifest URL."""

    async def fetch(self, manifest_url: str) -> str: ...
