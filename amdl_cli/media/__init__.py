"""
Media Layer.

This package fetches streaming manifests and selects the audio rendition
that matches the requested codec and quality ceilings.
"""

from .manifest import ManifestFetcher
from .selector import inspect_manifest, parse_manifest, select_variant

__all__ = ["ManifestFetcher", "inspect_manifest", "parse_manifest", "select_variant"]
