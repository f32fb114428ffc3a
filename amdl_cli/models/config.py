"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .entities import CodecCategory, MediaPreferences

_COVER_SIZE_REGEX = re.compile(r"^\d+x\d+$")


class CatalogConfig(BaseModel):
    """A validated configuration model for the application."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # Authentication & API
    authorization_token: str = ""
    media_user_token: str = ""
    language: str = ""

    # Artwork
    cover_size: str = "5000x5000"

    # Rendition selection
    alac_max: int = 192000
    atmos_max: int = 2768
    aac_type: str = "aac-lc"

    # Only consumed by the download planner
    output_dir: str = "output"

    # Internal fields not loaded from INI file
    config_path: str = Field("", repr=False)

    @field_validator("cover_size")
    @classmethod
    def validate_cover_size(cls, v: str) -> str:
        """Cover size is substituted into the `{w}x{h}` artwork template."""
        if not _COVER_SIZE_REGEX.match(v):
            raise ValueError(f"Cover size must look like '600x600', got: {v!r}")
        return v

    @field_validator("alac_max", "atmos_max")
    @classmethod
    def validate_ceiling(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Quality ceilings must be positive integers.")
        return v

    @field_validator("aac_type")
    @classmethod
    def validate_aac_type(cls, v: str) -> str:
        if not v:
            raise ValueError("AAC type cannot be empty.")
        return v

    @field_validator("output_dir")
    @classmethod
    def validate_output_dir(cls, v: str) -> str:
        if not v:
            raise ValueError("Output directory cannot be empty.")
        return v

    def preferences(
        self, codec: CodecCategory = CodecCategory.LOSSLESS
    ) -> MediaPreferences:
        """Builds the selection criteria for one request from these settings."""
        return MediaPreferences(
            codec=codec,
            alac_max=self.alac_max,
            atmos_max=self.atmos_max,
            aac_type=self.aac_type,
        )

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
