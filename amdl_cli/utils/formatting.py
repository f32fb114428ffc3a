"""
Helper functions for turning raw catalog attributes into display values.
"""

from typing import Any, Optional

ARTWORK_SIZE_PLACEHOLDER = "{w}x{h}"


def resolve_artwork(attributes: dict[str, Any], cover_size: str) -> Optional[str]:
    """
    Substitutes the `{w}x{h}` placeholder of an artwork URL template with a
    concrete size (e.g. '5000x5000'). Returns None when there is no artwork.
    """
    artwork = attributes.get("artwork") or {}
    template = artwork.get("url")
    if not template:
        return None
    return template.replace(ARTWORK_SIZE_PLACEHOLDER, cover_size)


def format_track_number(track_number: Optional[int], disc_number: Optional[int]) -> str:
    """Formats a position like '1-03', or '03' when there is a single disc."""
    if track_number is None:
        return "--"
    if disc_number and disc_number > 1:
        return f"{disc_number}-{track_number:02}"
    return f"{track_number:02}"


def format_bandwidth(bits_per_second: int) -> str:
    """Formats a bandwidth in bits per second (e.g. '1.2 Mbps')."""
    if bits_per_second <= 0:
        return "0 bps"
    units = ["bps", "kbps", "Mbps", "Gbps"]
    value = float(bits_per_second)
    i = 0
    while value >= 1000 and i < len(units) - 1:
        value /= 1000
        i += 1
    return f"{value:.1f} {units[i]}"
