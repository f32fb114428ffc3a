"""
amdl-cli: resolve Apple Music catalog links and pick the best audio rendition.
"""

__version__ = "0.3.0"
