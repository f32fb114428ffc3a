"""Tests for share URL classification."""

import pytest
from amdl_cli.models.entities import ContentKind
from amdl_cli.utils.url import build_album_url, resolve_url


class TestResolveUrl:
    """Tests for the five supported URL shapes."""

    @pytest.mark.parametrize(
        ("url", "kind", "storefront", "item_id"),
        [
            (
                "https://music.apple.com/us/album/x/1160118965",
                ContentKind.ALBUM,
                "us",
                "1160118965",
            ),
            (
                "https://music.apple.com/jp/album/utopia/1693409884",
                ContentKind.ALBUM,
                "jp",
                "1693409884",
            ),
            (
                "https://beta.music.apple.com/gb/album/some-album/id1440857781",
                ContentKind.ALBUM,
                "gb",
                "1440857781",
            ),
            (
                "https://music.apple.com/us/album/1160118965",
                ContentKind.ALBUM,
                "us",
                "1160118965",
            ),
            (
                "https://music.apple.com/us/album/x/1160118965?l=es-MX",
                ContentKind.ALBUM,
                "us",
                "1160118965",
            ),
            (
                "https://music.apple.com/us/song/blinding-lights/1488408568",
                ContentKind.SONG,
                "us",
                "1488408568",
            ),
            (
                "https://music.apple.com/jp/playlist/todays-hits/pl.f4d106fed2bd41149aaacabb233eb5eb",
                ContentKind.PLAYLIST,
                "jp",
                "pl.f4d106fed2bd41149aaacabb233eb5eb",
            ),
            (
                "https://music.apple.com/us/playlist/mix/pl.u-8aAVZAgCLpR0eA",
                ContentKind.PLAYLIST,
                "us",
                "pl.u-8aAVZAgCLpR0eA",
            ),
            (
                "https://music.apple.com/jp/artist/taylor-swift/159260351",
                ContentKind.ARTIST,
                "jp",
                "159260351",
            ),
        ],
        ids=[
            "album",
            "album_jp",
            "album_beta_id_prefix",
            "album_without_slug",
            "album_with_query",
            "song",
            "playlist",
            "playlist_with_dashes",
            "artist",
        ],
    )
    def test_supported_shapes(
        self, url: str, kind: ContentKind, storefront: str, item_id: str
    ) -> None:
        descriptor = resolve_url(url)

        assert descriptor is not None
        assert descriptor.kind == kind
        assert descriptor.storefront == storefront
        assert descriptor.id == item_id
        assert descriptor.source_url == url
        assert descriptor.embedded_song_id is None

    def test_album_url_with_song_parameter_resolves_as_song(self) -> None:
        url = "https://music.apple.com/us/album/y/1537521190?i=1537521192"
        descriptor = resolve_url(url)

        assert descriptor is not None
        assert descriptor.kind == ContentKind.SONG
        assert descriptor.storefront == "us"
        assert descriptor.id == "1537521192"
        assert descriptor.embedded_song_id == "1537521192"
        assert descriptor.album_id == "1537521190"

    @pytest.mark.parametrize(
        "slug",
        ["flowers", "album-with-many-words", "1999", "x"],
    )
    def test_song_parameter_wins_regardless_of_slug(self, slug: str) -> None:
        descriptor = resolve_url(
            f"https://music.apple.com/jp/album/{slug}/1663973555?i=1663973562"
        )

        assert descriptor is not None
        assert descriptor.kind == ContentKind.SONG
        assert descriptor.id == "1663973562"

    def test_song_parameter_after_other_parameters(self) -> None:
        descriptor = resolve_url(
            "https://music.apple.com/us/album/y/1537521190?l=en&i=1537521192"
        )

        assert descriptor is not None
        assert descriptor.kind == ContentKind.SONG
        assert descriptor.id == "1537521192"

    @pytest.mark.parametrize(
        ("url", "kind", "storefront"),
        [
            (
                "https://music.apple.com/US/album/x/1160118965",
                ContentKind.ALBUM,
                "us",
            ),
            (
                "https://music.apple.com/Jp/album/y/1537521190?i=1537521192",
                ContentKind.SONG,
                "jp",
            ),
        ],
        ids=["album_upper", "embedded_song_mixed_case"],
    )
    def test_storefront_is_lowercased(
        self, url: str, kind: ContentKind, storefront: str
    ) -> None:
        descriptor = resolve_url(url)

        assert descriptor is not None
        assert descriptor.kind == kind
        assert descriptor.storefront == storefront

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/invalid",
            "https://music.apple.com/us/",
            "http://music.apple.com/us/album/x/1160118965",
            "https://music.apple.com/usa/album/x/1160118965",
            "https://music.apple.com/us/album/x/not-an-id",
            "https://music.apple.com/us/playlist/x/12345",
            "https://music.apple.com/us/curator/apple-music/976439548",
            "",
        ],
        ids=[
            "other_host",
            "no_path",
            "plain_http",
            "three_letter_storefront",
            "non_numeric_album",
            "playlist_without_pl_prefix",
            "unsupported_kind",
            "empty",
        ],
    )
    def test_unsupported_urls_return_none(self, url: str) -> None:
        assert resolve_url(url) is None


class TestBuildAlbumUrl:
    def test_round_trips_as_embedded_song(self) -> None:
        url = build_album_url("us", "1537521190", "1537521192")
        descriptor = resolve_url(url)

        assert url == "https://music.apple.com/us/album/1537521190?i=1537521192"
        assert descriptor is not None
        assert descriptor.kind == ContentKind.SONG
        assert descriptor.album_id == "1537521190"

    def test_without_song(self) -> None:
        assert (
            build_album_url("jp", "1693409884")
            == "https://music.apple.com/jp/album/1693409884"
        )
