"""
Fetches HLS master playlists referenced by songs' `enhancedHls` asset URLs.
"""

import logging
from typing import Optional

import aiohttp

log = logging.getLogger(__name__)


class ManifestFetcher:
    """Downloads manifest text over a lazily created aiohttp session."""

    def __init__(self, timeout_seconds: float = 30):
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds, connect=15)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _initialize_session(self) -> None:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                headers={"Accept-Encoding": "gzip, deflate, br"},
            )

    async def fetch(self, manifest_url: str) -> str:
        """Returns the raw manifest text. HTTP errors propagate unchanged."""
        await self._initialize_session()
        async with self._session.get(manifest_url) as r:
            r.raise_for_status()
            text = await r.text()
        log.debug(f"Fetched manifest ({len(text)} bytes) from {manifest_url}")
        return text

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
