"""
Classifies Apple Music share URLs into typed descriptors.
"""

import re
from typing import Callable, List, Optional, Tuple

from amdl_cli.models.entities import ContentKind, UrlDescriptor

WEB_BASE_URL = "https://music.apple.com"

_HOST = r"^https://(?:beta\.music|music)\.apple\.com/(?P<storefront>[a-zA-Z]{2})"
_END = r"(?:$|\?)"

# Ordered by precedence: the first matching rule wins.
_ALBUM_SONG_REGEX = re.compile(
    _HOST
    + r"/album(?:/[^/?]+)?/(?:id)?(?P<album_id>\d+)\?(?:[^#]*&)?i=(?P<id>\d+)"
)
_ALBUM_REGEX = re.compile(_HOST + r"/album(?:/.+)?/(?:id)?(?P<id>\d+)" + _END)
_SONG_REGEX = re.compile(_HOST + r"/song(?:/.+)?/(?:id)?(?P<id>\d+)" + _END)
_PLAYLIST_REGEX = re.compile(
    _HOST + r"/playlist(?:/.+)?/(?:id)?(?P<id>pl\.[\w-]+)" + _END
)
_ARTIST_REGEX = re.compile(_HOST + r"/artist(?:/.+)?/(?:id)?(?P<id>\d+)" + _END)


def _embedded_song(match: re.Match, url: str) -> UrlDescriptor:
    return UrlDescriptor(
        kind=ContentKind.SONG,
        storefront=match.group("storefront").lower(),
        id=match.group("id"),
        embedded_song_id=match.group("id"),
        album_id=match.group("album_id"),
        source_url=url,
    )


def _plain(kind: ContentKind) -> Callable[[re.Match, str], UrlDescriptor]:
    def build(match: re.Match, url: str) -> UrlDescriptor:
        return UrlDescriptor(
            kind=kind,
            storefront=match.group("storefront").lower(),
            id=match.group("id"),
            album_id=match.group("id") if kind is ContentKind.ALBUM else None,
            source_url=url,
        )

    return build


URL_RULES: List[Tuple[re.Pattern, Callable[[re.Match, str], UrlDescriptor]]] = [
    (_ALBUM_SONG_REGEX, _embedded_song),
    (_ALBUM_REGEX, _plain(ContentKind.ALBUM)),
    (_SONG_REGEX, _plain(ContentKind.SONG)),
    (_PLAYLIST_REGEX, _plain(ContentKind.PLAYLIST)),
    (_ARTIST_REGEX, _plain(ContentKind.ARTIST)),
]


def resolve_url(url: str) -> Optional[UrlDescriptor]:
    """
    Parses an Apple Music URL into a descriptor.

    Album links carrying an `i=<songId>` query parameter resolve as songs
    that remember their album. Returns None when no rule matches; callers
    should treat that as invalid input rather than an empty result.
    """
    url = url.strip()
    for pattern, build in URL_RULES:
        match = pattern.search(url)
        if match:
            return build(match, url)
    return None


def build_album_url(
    storefront: str, album_id: str, song_id: Optional[str] = None
) -> str:
    """Builds the canonical share URL of an album, optionally selecting a song."""
    url = f"{WEB_BASE_URL}/{storefront}/album/{album_id}"
    if song_id:
        url += f"?i={song_id}"
    return url
