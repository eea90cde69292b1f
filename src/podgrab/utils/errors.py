"""Custom exceptions for Podgrab."""


class PodgrabError(Exception):
    """Base exception for all Podgrab errors."""

    pass


class ConfigError(PodgrabError):
    """Configuration-related errors."""

    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration data."""

    pass


class ConfigNotFoundError(ConfigError):
    """Configuration file not found."""

    pass


class NetworkError(PodgrabError):
    """Network-related errors."""

    pass


class TransportError(NetworkError):
    """HTTP request failed (DNS, connection, TLS, timeout or non-2xx status)."""

    pass


class FeedError(PodgrabError):
    """Feed processing errors."""

    pass


class FeedParseError(FeedError):
    """RSS feed XML could not be parsed."""

    pass


class DownloadError(PodgrabError):
    """Episode download errors."""

    pass


class FileIOError(DownloadError):
    """Destination file could not be opened or written."""

    pass


class ExternalToolError(PodgrabError):
    """External tagging tool failed or is missing."""

    pass
