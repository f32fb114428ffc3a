"""
Async client for the Apple Music catalog API with transparent pagination.
"""

import logging
import time
from typing import Any, AsyncGenerator, Dict, List, Optional

import aiohttp

from amdl_cli.exceptions import AuthenticationError, EntityNotFoundError

from .auth import TokenProvider

log = logging.getLogger(__name__)


def _release_date_key(item: Dict[str, Any]) -> tuple[bool, str]:
    """Sort key for discographies: ISO dates ascending, undated releases last."""
    release_date = item.get("attributes", {}).get("releaseDate")
    return release_date is None, release_date or ""


class CatalogClient:
    """
    Async client for the Apple Music catalog (amp-api, v1).

    Requests are issued one at a time; collection relationships larger than a
    single page are accumulated by walking `offset` in steps of PAGE_SIZE until
    the service stops returning a `next` link. Nothing is cached and nothing is
    retried: a failed page aborts the whole accumulation.
    """

    BASE_URL = "https://amp-api.music.apple.com/v1/catalog/"
    PAGE_SIZE = 100

    def __init__(
        self,
        token_provider: TokenProvider,
        language: str = "",
        media_user_token: str = "",
    ):
        """
        Initializes the API client.

        Args:
            token_provider: Supplies the bearer token for every session.
            language: Value of the `l` query parameter (catalog localization).
            media_user_token: Optional subscriber token sent as a header.
        """
        self.language = language
        self.media_user_token = media_user_token
        self._token_provider = token_provider
        self._session: Optional[aiohttp.ClientSession] = None

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            token = await self._token_provider.get_token()
            headers = {
                "Authorization": f"Bearer {token}",
                "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
                "Origin": "https://music.apple.com",
                "Accept-Encoding": "gzip, deflate, br",
            }
            if self.media_user_token:
                headers["Media-User-Token"] = self.media_user_token
            self._session = aiohttp.ClientSession(
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=60, connect=15, sock_read=30),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def api_call(self, path: str, **params: Any) -> Dict[str, Any]:
        """
        Makes an authenticated GET request against `<BASE_URL><path>` and
        returns the decoded JSON document.
        """
        await self._initialize_session()

        params = {key: value for key, value in params.items() if value is not None}
        params.setdefault("l", self.language)

        start_time = time.monotonic()
        try:
            async with self._session.get(self.BASE_URL + path, params=params) as r:
                duration_ms = (time.monotonic() - start_time) * 1000
                log.debug(f"GET {path} -> {r.status} ({duration_ms:.0f} ms)")

                if r.status == 401:
                    raise AuthenticationError(
                        "The authorization token was rejected by the catalog."
                    )
                if r.status == 404:
                    raise EntityNotFoundError(f"Nothing found at '{path}'.")

                r.raise_for_status()
                return await r.json()
        except aiohttp.ClientError as e:
            log.debug(f"API call to {path} failed: {e}")
            raise

    async def _yield_paginated(
        self, path: str, offset: int = 0, **params: Any
    ) -> AsyncGenerator[List[Dict[str, Any]], None]:
        """
        Generator over the `data` arrays of a paginated endpoint.

        Each page is requested only after the previous one completed, so
        requesting the same offset twice is harmless.
        """
        while True:
            response = await self.api_call(
                path, offset=offset, limit=self.PAGE_SIZE, **params
            )
            items = response.get("data", [])
            yield items

            if not response.get("next") or not items:
                break
            offset += self.PAGE_SIZE

    async def _collect(
        self, path: str, offset: int = 0, **params: Any
    ) -> List[Dict[str, Any]]:
        collected: List[Dict[str, Any]] = []
        async for page in self._yield_paginated(path, offset, **params):
            collected.extend(page)
        log.debug(f"Collected {len(collected)} items from '{path}'.")
        return collected

    async def _fetch_first(
        self, path: str, entity: str, entity_id: str, **params: Any
    ) -> Dict[str, Any]:
        response = await self.api_call(path, **params)
        data = response.get("data") or []
        if not data:
            raise EntityNotFoundError(f"No {entity} data found for id '{entity_id}'.")
        return next((d for d in data if d.get("id") == entity_id), data[0])

    async def _fetch_collection(
        self, kind: str, collection_id: str, storefront: str
    ) -> Dict[str, Any]:
        """Fetches an album or playlist and pages in every remaining track."""
        document = await self._fetch_first(
            f"{storefront}/{kind}/{collection_id}",
            kind[:-1],
            collection_id,
            **{
                "omit[resource]": "autos",
                "include": "tracks,artists,record-labels",
                "include[songs]": "artists",
                "fields[artists]": "name,artwork",
                "fields[record-labels]": "name",
                "extend": "editorialVideo",
            },
        )

        tracks = document.get("relationships", {}).get("tracks")
        if tracks and tracks.get("next"):
            remaining = await self._collect(
                f"{storefront}/{kind}/{collection_id}/tracks", offset=self.PAGE_SIZE
            )
            tracks["data"] = list(tracks.get("data", [])) + remaining
            tracks.pop("next", None)
            log.debug(
                f"Paged {len(tracks['data'])} tracks for {kind[:-1]} '{collection_id}'."
            )

        return document

    # Public API Methods
    async def fetch_song(self, song_id: str, storefront: str) -> Dict[str, Any]:
        return await self._fetch_first(
            f"{storefront}/songs/{song_id}",
            "song",
            song_id,
            extend="extendedAssetUrls",
            include="albums",
        )

    async def fetch_album(self, album_id: str, storefront: str) -> Dict[str, Any]:
        return await self._fetch_collection("albums", album_id, storefront)

    async def fetch_playlist(
        self, playlist_id: str, storefront: str
    ) -> Dict[str, Any]:
        return await self._fetch_collection("playlists", playlist_id, storefront)

    async def fetch_artist(self, artist_id: str, storefront: str) -> Dict[str, Any]:
        return await self._fetch_first(
            f"{storefront}/artists/{artist_id}", "artist", artist_id
        )

    async def fetch_artist_albums(
        self, artist_id: str, storefront: str, relationship: str = "albums"
    ) -> List[Dict[str, Any]]:
        """
        Accumulates an artist's full discography and orders it by release date.

        The sort is stable, so releases sharing a date keep the service's order.
        """
        albums = await self._collect(
            f"{storefront}/artists/{artist_id}/{relationship}"
        )
        return sorted(albums, key=_release_date_key)

    async def fetch_song_albums(
        self, song_id: str, storefront: str
    ) -> List[Dict[str, Any]]:
        """Secondary lookup of the albums a song appears on."""
        response = await self.api_call(f"{storefront}/songs/{song_id}/albums")
        return response.get("data") or []
