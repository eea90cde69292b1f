"""Configuration management for Podgrab."""

from podgrab.config.manager import ConfigManager
from podgrab.config.schema import DEFAULT_SERIES, GrabConfig, SeriesConfig

__all__ = ["ConfigManager", "GrabConfig", "SeriesConfig", "DEFAULT_SERIES"]
