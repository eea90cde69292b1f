"""Filesystem path helpers."""

import re
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "podgrab"

# Longest filename stem we produce, in UTF-8 bytes (leaves room for the suffix)
MAX_FILENAME_BYTES = 200

_ILLEGAL_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f\x7f]')


def get_config_dir() -> Path:
    """Get the user configuration directory for Podgrab."""
    return Path(user_config_dir(APP_NAME))


def get_config_file() -> Path:
    """Get the default config.yaml path."""
    return get_config_dir() / "config.yaml"


def safe_filename(name: str, fallback: str = "episode") -> str:
    """Turn an episode title into a filesystem-safe filename stem.

    Characters that are illegal on common filesystems become underscores,
    surrounding whitespace and dots are stripped, and the result is capped
    at MAX_FILENAME_BYTES bytes without splitting a multi-byte character.

    Args:
        name: Raw episode title
        fallback: Stem to use when nothing printable is left

    Returns:
        Sanitized filename stem (no extension)

    Example:
        >>> safe_filename('MAG 12: "Alexandria"')
        'MAG 12_ _Alexandria_'
    """
    cleaned = _ILLEGAL_CHARS.sub("_", name).strip(" .")

    encoded = cleaned.encode("utf-8")
    if len(encoded) > MAX_FILENAME_BYTES:
        cleaned = encoded[:MAX_FILENAME_BYTES].decode("utf-8", errors="ignore").rstrip(" .")

    return cleaned or fallback
