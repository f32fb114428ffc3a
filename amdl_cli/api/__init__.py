"""
Apple Music API Layer.

This package handles all communication with the Apple Music catalog API.
"""

from .auth import StaticTokenProvider, TokenProvider
from .client import CatalogClient

__all__ = ["CatalogClient", "StaticTokenProvider", "TokenProvider"]
