"""Test fixtures and configuration."""

from typing import Any, Dict, List, Optional

import pytest
from amdl_cli.exceptions import EntityNotFoundError
from amdl_cli.models.config import CatalogConfig

MANIFEST_URL = "https://aod.itunes.apple.com/itunes-assets/HLS/P123/P123_master.m3u8"

SAMPLE_MANIFEST = """#EXTM3U
#EXT-X-VERSION:6
#EXT-X-INDEPENDENT-SEGMENTS
#EXT-X-STREAM-INF:BANDWIDTH=300000,AVERAGE-BANDWIDTH=262000,CODECS="mp4a.40.2",AUDIO="audio-stereo-256"
P123_aac_256.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=310000,AVERAGE-BANDWIDTH=264000,CODECS="mp4a.40.2",AUDIO="audio-stereo-256-binaural"
P123_aac_256_binaural.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=1100000,AVERAGE-BANDWIDTH=1000000,CODECS="alac",AUDIO="audio-alac-stereo-44100-16"
P123_alac_44.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=2600000,AVERAGE-BANDWIDTH=2400000,CODECS="alac",AUDIO="audio-alac-stereo-96000-24"
P123_alac_96.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=4000000,AVERAGE-BANDWIDTH=3700000,CODECS="alac",AUDIO="audio-alac-stereo-192000-24"
https://cdn.example.com/hires/P123_alac_192.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=3000000,AVERAGE-BANDWIDTH=2768000,CODECS="ec-3",AUDIO="audio-atmos-2768"
P123_atmos.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=700000,AVERAGE-BANDWIDTH=640000,CODECS="ac-3",AUDIO="audio-ac3-640"
P123_ac3.m3u8
"""


def stream(codecs: str, audio: str, average: int, uri: str, bandwidth: int = 0) -> str:
    """Builds one #EXT-X-STREAM-INF entry."""
    return (
        f"#EXT-X-STREAM-INF:BANDWIDTH={bandwidth or average + 1000},"
        f'AVERAGE-BANDWIDTH={average},CODECS="{codecs}",AUDIO="{audio}"\n{uri}\n'
    )


def manifest(*entries: str) -> str:
    return "#EXTM3U\n#EXT-X-INDEPENDENT-SEGMENTS\n" + "".join(entries)


def artwork(name: str) -> Dict[str, Any]:
    return {"url": f"https://is1-ssl.mzstatic.com/image/{name}/{{w}}x{{h}}bb.jpg"}


def song_doc(
    song_id: str,
    name: str = "Song",
    album_id: Optional[str] = None,
    track_number: int = 1,
    manifest_url: Optional[str] = MANIFEST_URL,
    album_name: str = "Album",
) -> Dict[str, Any]:
    attributes: Dict[str, Any] = {
        "name": name,
        "artistName": "Artist",
        "albumName": album_name,
        "trackNumber": track_number,
        "discNumber": 1,
        "releaseDate": "2020-01-01",
        "isrc": f"US{song_id}",
        "url": f"https://music.apple.com/us/song/{song_id}",
        "artwork": artwork(song_id),
    }
    if manifest_url:
        attributes["extendedAssetUrls"] = {"enhancedHls": manifest_url}
    document: Dict[str, Any] = {"id": song_id, "type": "songs", "attributes": attributes}
    if album_id:
        document["relationships"] = {
            "albums": {"data": [{"id": album_id, "type": "albums"}]}
        }
    return document


def album_doc(
    album_id: str,
    track_ids: List[str],
    name: str = "Album",
    release_date: Optional[str] = "2020-01-01",
) -> Dict[str, Any]:
    tracks = [
        song_doc(tid, name=f"Track {tid}", track_number=i, manifest_url=None)
        for i, tid in enumerate(track_ids, 1)
    ]
    for track in tracks:
        del track["attributes"]["albumName"]
    attributes: Dict[str, Any] = {
        "name": name,
        "artistName": "Artist",
        "releaseDate": release_date,
        "upc": "0000",
        "copyright": "℗ 2020",
        "url": f"https://music.apple.com/us/album/{album_id}",
        "artwork": artwork(album_id),
    }
    return {
        "id": album_id,
        "type": "albums",
        "attributes": attributes,
        "relationships": {
            "tracks": {"data": tracks},
            "record-labels": {"data": [{"id": "l1", "attributes": {"name": "Label"}}]},
        },
    }


class FakeCatalog:
    """In-memory catalog service recording every call."""

    def __init__(self) -> None:
        self.songs: Dict[str, Dict[str, Any]] = {}
        self.albums: Dict[str, Dict[str, Any]] = {}
        self.playlists: Dict[str, Dict[str, Any]] = {}
        self.artists: Dict[str, Dict[str, Any]] = {}
        self.artist_albums: Dict[str, List[Dict[str, Any]]] = {}
        self.song_albums: Dict[str, List[Dict[str, Any]]] = {}
        self.song_errors: Dict[str, Exception] = {}
        self.calls: List[tuple[str, str]] = []

    def _get(self, table: Dict[str, Any], key: str, kind: str) -> Any:
        if key not in table:
            raise EntityNotFoundError(f"No {kind} data found for id '{key}'.")
        return table[key]

    async def fetch_song(self, song_id: str, storefront: str) -> Dict[str, Any]:
        self.calls.append(("song", song_id))
        if song_id in self.song_errors:
            raise self.song_errors[song_id]
        return self._get(self.songs, song_id, "song")

    async def fetch_album(self, album_id: str, storefront: str) -> Dict[str, Any]:
        self.calls.append(("album", album_id))
        return self._get(self.albums, album_id, "album")

    async def fetch_playlist(
        self, playlist_id: str, storefront: str
    ) -> Dict[str, Any]:
        self.calls.append(("playlist", playlist_id))
        return self._get(self.playlists, playlist_id, "playlist")

    async def fetch_artist(self, artist_id: str, storefront: str) -> Dict[str, Any]:
        self.calls.append(("artist", artist_id))
        return self._get(self.artists, artist_id, "artist")

    async def fetch_artist_albums(
        self, artist_id: str, storefront: str, relationship: str = "albums"
    ) -> List[Dict[str, Any]]:
        self.calls.append(("artist_albums", artist_id))
        return self.artist_albums.get(artist_id, [])

    async def fetch_song_albums(
        self, song_id: str, storefront: str
    ) -> List[Dict[str, Any]]:
        self.calls.append(("song_albums", song_id))
        return self.song_albums.get(song_id, [])


class FakeManifests:
    def __init__(self, text: str = SAMPLE_MANIFEST) -> None:
        self.text = text
        self.fetched: List[str] = []

    async def fetch(self, manifest_url: str) -> str:
        self.fetched.append(manifest_url)
        return self.text


@pytest.fixture
def config() -> CatalogConfig:
    return CatalogConfig(authorization_token="token", cover_size="600x600")


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def manifests() -> FakeManifests:
    return FakeManifests()
