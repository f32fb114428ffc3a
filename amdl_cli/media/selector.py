"""
Parses HLS master playlists and picks the rendition matching the requested
codec family and quality ceiling.

Audio-group ids encode the rendition's properties in dash-delimited fields,
e.g. `audio-alac-stereo-44100-24`, `audio-atmos-2768` or `audio-stereo-256`.
Those fields are read best-effort: a token that is missing or not numeric is
treated as unknown, which makes the variant ineligible for ceiling checks and
renders as "unknown" in quality labels.
"""

import logging
import re
from typing import Callable, Dict, List, Optional
from urllib.parse import urljoin

import m3u8
from m3u8.parser import ParseError

from amdl_cli.exceptions import (
    ManifestParseError,
    NoSuitableVariantError,
    NoVariantsError,
)
from amdl_cli.models.entities import (
    CodecCategory,
    ManifestVariant,
    MediaCapabilities,
    MediaPreferences,
    SelectionResult,
)

log = logging.getLogger(__name__)

CODEC_AAC = "mp4a.40.2"
CODEC_ALAC = "alac"
CODEC_ATMOS = "ec-3"
CODEC_DOLBY_AUDIO = "ac-3"

# Highest sample rate still counted as standard (non hi-res) lossless
STANDARD_LOSSLESS_MAX = 48000

_AAC_STEREO_REGEX = re.compile(r"audio-stereo-\d+")
UNKNOWN = "unknown"


def _fields(variant: ManifestVariant) -> List[str]:
    return (variant.audio or "").split("-")


def _to_int(token: Optional[str]) -> Optional[int]:
    try:
        return int(token)
    except (TypeError, ValueError):
        return None


def sample_rate(variant: ManifestVariant) -> Optional[int]:
    """Second-to-last audio-group field, e.g. 44100 in `audio-alac-stereo-44100-16`."""
    fields = _fields(variant)
    return _to_int(fields[-2]) if len(fields) >= 2 else None


def atmos_bitrate(variant: ManifestVariant) -> Optional[int]:
    """Last audio-group field with its leading '2' channel prefix stripped."""
    token = _fields(variant)[-1]
    if token.startswith("2"):
        token = token[1:]
    return _to_int(token)


def is_atmos(variant: ManifestVariant) -> bool:
    return variant.codecs == CODEC_ATMOS and "atmos" in (variant.audio or "")


def parse_manifest(manifest_text: str) -> List[ManifestVariant]:
    """
    Parses master playlist text into variant records, in document order.

    Raises:
        ManifestParseError: If the text is not an HLS playlist or the parser
        rejects one of its tags.
    """
    if not manifest_text or not manifest_text.lstrip().startswith("#EXTM3U"):
        raise ManifestParseError("Manifest text does not start with #EXTM3U.")

    try:
        playlist = m3u8.loads(manifest_text)
    except (ParseError, ValueError, TypeError) as e:
        raise ManifestParseError(f"Could not parse manifest: {e}") from e

    variants = []
    for entry in playlist.playlists:
        info = entry.stream_info
        resolution = (
            f"{info.resolution[0]}x{info.resolution[1]}" if info.resolution else None
        )
        variants.append(
            ManifestVariant(
                uri=entry.uri,
                bandwidth=info.bandwidth or 0,
                average_bandwidth=info.average_bandwidth or 0,
                codecs=info.codecs,
                audio=info.audio,
                resolution=resolution,
                frame_rate=info.frame_rate,
            )
        )
    log.debug(f"Parsed {len(variants)} variants from manifest.")
    return variants


def sort_by_average_bandwidth(
    variants: List[ManifestVariant],
) -> List[ManifestVariant]:
    """Highest average bandwidth first; equal bandwidths keep document order."""
    return sorted(variants, key=lambda v: v.average_bandwidth, reverse=True)


def _find_atmos(
    variants: List[ManifestVariant], prefs: MediaPreferences
) -> Optional[ManifestVariant]:
    for variant in variants:
        bitrate = atmos_bitrate(variant) if is_atmos(variant) else None
        if bitrate is not None and bitrate <= prefs.atmos_max:
            return variant
    # Fall back to plain Dolby Audio
    return next((v for v in variants if v.codecs == CODEC_DOLBY_AUDIO), None)


def _find_aac(
    variants: List[ManifestVariant], prefs: MediaPreferences
) -> Optional[ManifestVariant]:
    for variant in variants:
        if variant.codecs != CODEC_AAC or not variant.audio:
            continue
        if _AAC_STEREO_REGEX.sub("aac", variant.audio, count=1) == prefs.aac_type:
            return variant
    return None


def _find_lossless(
    variants: List[ManifestVariant], prefs: MediaPreferences
) -> Optional[ManifestVariant]:
    for variant in variants:
        if variant.codecs != CODEC_ALAC:
            continue
        rate = sample_rate(variant)
        if rate is not None and rate <= prefs.alac_max:
            return variant
    return None


_FINDERS: Dict[
    CodecCategory,
    Callable[[List[ManifestVariant], MediaPreferences], Optional[ManifestVariant]],
] = {
    CodecCategory.ATMOS: _find_atmos,
    CodecCategory.AAC: _find_aac,
    CodecCategory.LOSSLESS: _find_lossless,
}


def quality_label(variant: ManifestVariant) -> str:
    """Human-readable quality of a variant, e.g. '24B-96.0kHz' or '256 kbps'."""
    fields = _fields(variant)

    if variant.codecs == CODEC_ALAC:
        rate = sample_rate(variant)
        if rate is None or len(fields) < 2:
            return UNKNOWN
        return f"{fields[-1]}B-{rate / 1000:.1f}kHz"

    if variant.codecs in (CODEC_ATMOS, CODEC_DOLBY_AUDIO):
        return f"{fields[-1]} kbps" if fields[-1] else UNKNOWN

    if variant.codecs == CODEC_AAC:
        return f"{fields[2]} kbps" if len(fields) > 2 and fields[2] else UNKNOWN

    return UNKNOWN


def select_variant(
    manifest_text: str, manifest_url: str, preferences: MediaPreferences
) -> SelectionResult:
    """
    Picks the best rendition for the requested codec family.

    Variants are scanned from the highest average bandwidth down, but the codec
    family and its ceiling decide which one is taken, not the bandwidth.

    Raises:
        ManifestParseError: If the manifest text is malformed.
        NoVariantsError: If the manifest lists no variants at all.
        NoSuitableVariantError: If no variant satisfies the preferences.
    """
    variants = parse_manifest(manifest_text)
    if not variants:
        raise NoVariantsError("No playlists found in manifest.")

    ordered = sort_by_average_bandwidth(variants)
    chosen = _FINDERS[preferences.codec](ordered, preferences)
    if chosen is None:
        raise NoSuitableVariantError(
            f"No suitable {preferences.codec.value} variant found "
            f"(alac_max={preferences.alac_max}, atmos_max={preferences.atmos_max}, "
            f"aac_type={preferences.aac_type!r})."
        )

    result = SelectionResult(
        stream_url=urljoin(manifest_url, chosen.uri),
        quality=quality_label(chosen),
        variant=chosen,
    )
    log.debug(f"Selected {chosen.codecs} variant '{chosen.audio}' ({result.quality}).")
    return result


def inspect_manifest(manifest_text: str) -> MediaCapabilities:
    """
    Info-only mode: reports which rendition families the manifest offers.

    Raises:
        ManifestParseError: If the manifest text is malformed.
        NoVariantsError: If the manifest lists no variants at all.
    """
    variants = sort_by_average_bandwidth(parse_manifest(manifest_text))
    if not variants:
        raise NoVariantsError("No playlists found in manifest.")

    def lossless_rates() -> List[Optional[int]]:
        return [sample_rate(v) for v in variants if v.codecs == CODEC_ALAC]

    return MediaCapabilities(
        variants=variants,
        has_aac=any(v.codecs == CODEC_AAC for v in variants),
        has_lossless=any(
            r is not None and r <= STANDARD_LOSSLESS_MAX for r in lossless_rates()
        ),
        has_hi_res=any(
            r is not None and r > STANDARD_LOSSLESS_MAX for r in lossless_rates()
        ),
        has_atmos=any(is_atmos(v) for v in variants),
        has_dolby_audio=any(v.codecs == CODEC_DOLBY_AUDIO for v in variants),
    )
