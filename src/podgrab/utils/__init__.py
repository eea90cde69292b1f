"""Utility functions and helpers for Podgrab."""

from podgrab.utils.errors import (
    ConfigError,
    ConfigNotFoundError,
    DownloadError,
    ExternalToolError,
    FeedError,
    FeedParseError,
    FileIOError,
    InvalidConfigError,
    NetworkError,
    PodgrabError,
    TransportError,
)
from podgrab.utils.paths import get_config_dir, get_config_file, safe_filename

__all__ = [
    # Errors
    "PodgrabError",
    "ConfigError",
    "InvalidConfigError",
    "ConfigNotFoundError",
    "NetworkError",
    "TransportError",
    "FeedError",
    "FeedParseError",
    "DownloadError",
    "FileIOError",
    "ExternalToolError",
    # Paths
    "get_config_dir",
    "get_config_file",
    "safe_filename",
]
