"""Configuration manager for loading Podgrab config."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from podgrab.config.schema import GrabConfig
from podgrab.utils.errors import ConfigNotFoundError, InvalidConfigError
from podgrab.utils.paths import get_config_file

logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads Podgrab configuration from YAML.

    Settings come from an explicit config file, or the user config directory
    when one exists there, falling back to built-in defaults. Nothing is
    written to disk.
    """

    def __init__(self, config_file: Path | None = None) -> None:
        """Initialize the config manager.

        Args:
            config_file: Optional explicit config path. Must exist when given.
        """
        self.explicit = config_file is not None
        self.config_file = config_file if config_file is not None else get_config_file()

    def load_config(self) -> GrabConfig:
        """Load and validate configuration.

        Returns:
            Validated GrabConfig instance

        Raises:
            ConfigNotFoundError: If an explicit config file doesn't exist
            InvalidConfigError: If the config is invalid
        """
        if not self.config_file.exists():
            if self.explicit:
                raise ConfigNotFoundError(f"Config file not found: {self.config_file}")
            logger.debug("No config at %s, using defaults", self.config_file)
            return GrabConfig()

        try:
            with open(self.config_file, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise InvalidConfigError(f"Cannot read {self.config_file}: {e}") from e

        if not isinstance(data, dict):
            raise InvalidConfigError(
                f"Invalid configuration in {self.config_file}: expected a mapping"
            )

        try:
            config = GrabConfig(**data)
        except ValidationError as e:
            raise InvalidConfigError(
                f"Invalid configuration in {self.config_file}: {e}"
            ) from e

        logger.debug("Loaded config from %s", self.config_file)
        return config
