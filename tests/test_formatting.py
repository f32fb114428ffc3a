"""Tests for display helpers and output paths."""

from pathlib import Path

import pytest
from amdl_cli.exceptions import (
    AmdlError,
    EntityNotFoundError,
    NoSuitableVariantError,
    UnsupportedContentError,
    VariantSelectionError,
)
from amdl_cli.utils.formatting import (
    format_bandwidth,
    format_track_number,
    resolve_artwork,
)
from amdl_cli.utils.path import build_track_path


class TestResolveArtwork:
    def test_substitutes_size(self) -> None:
        attributes = {"artwork": {"url": "https://a.example/img/{w}x{h}bb.jpg"}}

        assert (
            resolve_artwork(attributes, "1200x1200")
            == "https://a.example/img/1200x1200bb.jpg"
        )

    @pytest.mark.parametrize(
        "attributes",
        [{}, {"artwork": None}, {"artwork": {"width": 100}}],
        ids=["missing", "null", "no_url"],
    )
    def test_no_artwork(self, attributes) -> None:
        assert resolve_artwork(attributes, "600x600") is None


@pytest.mark.parametrize(
    ("track", "disc", "expected"),
    [(3, 1, "03"), (3, None, "03"), (12, 2, "2-12"), (None, 1, "--")],
    ids=["single_disc", "no_disc", "second_disc", "no_track"],
)
def test_format_track_number(track, disc, expected) -> None:
    assert format_track_number(track, disc) == expected


@pytest.mark.parametrize(
    ("bps", "expected"),
    [(0, "0 bps"), (256000, "256.0 kbps"), (2768000, "2.8 Mbps")],
    ids=["zero", "kbps", "mbps"],
)
def test_format_bandwidth(bps: int, expected: str) -> None:
    assert format_bandwidth(bps) == expected


class TestBuildTrackPath:
    def test_plain_name(self, tmp_path: Path) -> None:
        assert build_track_path(tmp_path, "Song") == tmp_path / "Song.m4a"

    def test_empty_name(self, tmp_path: Path) -> None:
        assert build_track_path(tmp_path, "") == tmp_path / "Unknown Title.m4a"

    def test_separators_are_replaced(self, tmp_path: Path) -> None:
        path = build_track_path(tmp_path, "AC/DC")

        assert path.parent == tmp_path
        assert "/" not in path.name


class TestExceptions:
    def test_all_errors_share_a_base(self) -> None:
        assert issubclass(EntityNotFoundError, AmdlError)
        assert issubclass(NoSuitableVariantError, VariantSelectionError)
        assert issubclass(VariantSelectionError, AmdlError)

    def test_unsupported_content_keeps_album_urls(self) -> None:
        error = UnsupportedContentError("artist", album_urls=["u1", "u2"])

        assert error.album_urls == ["u1", "u2"]
        assert str(error) == "artist"
        assert UnsupportedContentError("x").album_urls == []
