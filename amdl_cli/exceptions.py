"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class AmdlError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(AmdlError):
    """Raised for issues related to configuration loading or validation."""


class AuthenticationError(AmdlError):
    """Raised when the catalog rejects the configured authorization token."""


class InvalidUrlError(AmdlError):
    """Raised when a URL does not match any supported catalog link shape."""


class EntityNotFoundError(AmdlError):
    """Raised when the catalog returns an empty `data` array for a lookup."""


class RelationshipMissingError(AmdlError):
    """Raised when an expected relationship is absent on an otherwise valid document."""


class SongNotFoundError(AmdlError):
    """Raised when every song resolution strategy has been exhausted."""


class AssetUnavailableError(AmdlError):
    """Raised when a track carries no streaming manifest reference."""


class UnsupportedContentError(AmdlError):
    """
    Raised when an operation has no meaning for the given content type,
    e.g. asking for a flat track list of an artist.
    """

    def __init__(self, message: str, album_urls: list[str] | None = None):
        super().__init__(message)
        self.album_urls = album_urls or []


class ManifestParseError(AmdlError):
    """Raised when manifest text cannot be parsed as an HLS master playlist."""


class VariantSelectionError(AmdlError):
    """Base class for manifest selection failures."""


class NoVariantsError(VariantSelectionError):
    """Raised when a parsed manifest lists no variant streams at all."""


class NoSuitableVariantError(VariantSelectionError):
    """Raised when no variant satisfies the requested codec and ceiling."""
