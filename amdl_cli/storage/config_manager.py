"""
Manages loading, validation, and migration of the INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from amdl_cli.exceptions import ConfigurationError
from amdl_cli.models.config import CatalogConfig

log = logging.getLogger(__name__)

SECTION = "DEFAULT"
SENSITIVE_KEYS = ("authorization_token", "media_user_token")


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> CatalogConfig:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        A missing file is not an error: defaults are used, so that commands
        which need no token (e.g. parsing a URL) work before `init`.

        Raises:
            ConfigurationError: If the config file is invalid or validation fails.
        """
        config_from_file: dict[str, Any] = {}
        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(
                    f"Error parsing configuration file: {e}"
                ) from e

            if self._migrate_if_needed():
                log.info(
                    "[yellow]Configuration file was updated with new default values."
                    "[/yellow]"
                )
            config_from_file = self.get_config_as_dict()
        else:
            log.debug(f"No configuration file at '{self.config_file_path}'.")

        if cli_options:
            config_from_file.update(cli_options)

        try:
            return CatalogConfig(
                **config_from_file,
                config_path=str(self.config_file_path.parent),
            )
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def save_new_config(self, settings: dict[str, Any]) -> None:
        """
        Creates and saves a new configuration file, filling in defaults for
        every key not present in `settings`.
        """
        try:
            config = CatalogConfig(**settings)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

        parser = configparser.ConfigParser(interpolation=None)
        parser[SECTION] = {
            key: str(getattr(config, key))
            for key in sorted(CatalogConfig.get_ini_keys())
        }

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                parser.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e

    def get_config_as_dict(self) -> dict[str, Any]:
        """Reads the 'DEFAULT' section of the INI file into a dictionary."""
        section = self._parser[SECTION]
        defaults = CatalogConfig()
        try:
            return {
                "authorization_token": section.get("authorization_token", ""),
                "media_user_token": section.get("media_user_token", ""),
                "language": section.get("language", ""),
                "cover_size": section.get("cover_size", defaults.cover_size),
                "alac_max": section.getint("alac_max", defaults.alac_max),
                "atmos_max": section.getint("atmos_max", defaults.atmos_max),
                "aac_type": section.get("aac_type", defaults.aac_type),
                "output_dir": section.get("output_dir", defaults.output_dir),
            }
        except ValueError as e:
            raise ConfigurationError(f"Invalid value in configuration file: {e}") from e

    def _migrate_if_needed(self) -> bool:
        """Adds missing default values to an existing config file."""
        defaults = CatalogConfig()
        config_section = self._parser[SECTION]
        needs_saving = False

        for key in sorted(CatalogConfig.get_ini_keys()):
            if key not in config_section:
                config_section[key] = str(getattr(defaults, key))
                needs_saving = True
                log.debug(
                    f"Migrating config: added missing key '{key}' with "
                    f"value '{config_section[key]}'."
                )

        if needs_saving:
            try:
                with open(self.config_file_path, "w", encoding="utf-8") as f:
                    self._parser.write(f)
            except OSError as e:
                log.error(f"Could not save migrated configuration file: {e}")
                return False

        return needs_saving
