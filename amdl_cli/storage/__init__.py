"""
Storage Layer.

This package handles the configuration file. Catalog data itself is never
persisted.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
