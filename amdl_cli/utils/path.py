"""
Builds sanitized output file paths for planned downloads.
"""

from pathlib import Path

from pathvalidate import sanitize_filename

TRACK_EXTENSION = "m4a"


def build_track_path(output_dir: Path, track_name: str) -> Path:
    """
    Generates a sanitized `<output_dir>/<track name>.m4a` path.
    """
    file_name = sanitize_filename(
        f"{track_name or 'Unknown Title'}.{TRACK_EXTENSION}",
        replacement_text="_",
        platform="universal",
    )
    return output_dir / file_name
