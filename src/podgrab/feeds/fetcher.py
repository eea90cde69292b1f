"""HTTP retrieval of the raw feed document."""

import logging

import httpx

from podgrab.utils.errors import TransportError

logger = logging.getLogger(__name__)


def describe_http_error(url: str, error: httpx.HTTPError) -> str:
    """Build a human-readable description of an httpx failure."""
    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        return f"HTTP {response.status_code} {response.reason_phrase} for {url}"
    if isinstance(error, httpx.TimeoutException):
        return f"Timed out requesting {url}"
    return f"Request to {url} failed: {str(error) or type(error).__name__}"


def fetch_feed(client: httpx.Client, url: str) -> bytes:
    """Fetch a feed document.

    Args:
        client: HTTP client to issue the request with
        url: Feed URL, passed to the transport as-is

    Returns:
        Raw response body. It is left undecoded so the XML parser can honor
        the document's own encoding declaration.

    Raises:
        TransportError: On any network failure or non-2xx status
    """
    logger.info("Fetching feed %s", url)
    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise TransportError(describe_http_error(url, e)) from e
    except httpx.InvalidURL as e:
        raise TransportError(f"Invalid URL {url!r}: {e}") from e

    logger.debug("Fetched %d bytes from %s", len(response.content), url)
    return response.content
