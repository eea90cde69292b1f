"""Episode downloader using httpx streaming."""

import logging
from collections.abc import Callable
from pathlib import Path

import httpx
from pydantic import BaseModel, Field

from podgrab.feeds.fetcher import describe_http_error
from podgrab.feeds.models import EpisodeInfo
from podgrab.utils.errors import FileIOError, TransportError
from podgrab.utils.paths import safe_filename

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
AUDIO_SUFFIX = ".mp3"


class DownloadProgress(BaseModel):
    """Progress information for an episode download."""

    status: str = Field(..., description="Current download status")
    downloaded_bytes: int = Field(default=0, ge=0, description="Bytes downloaded so far")
    total_bytes: int | None = Field(
        default=None, ge=0, description="Total bytes to download (if known)"
    )

    @property
    def percentage(self) -> float | None:
        """Calculate download percentage if total is known."""
        if self.total_bytes and self.total_bytes > 0:
            return (self.downloaded_bytes / self.total_bytes) * 100
        return None


class EpisodeDownloader:
    """Download episode enclosures into a directory.

    Files are named after the sanitized episode title with an ``.mp3``
    suffix. An existing file of the same name is overwritten.
    """

    def __init__(
        self,
        client: httpx.Client,
        output_dir: Path | None = None,
        progress_callback: Callable[[DownloadProgress], None] | None = None,
    ):
        """Initialize episode downloader.

        Args:
            client: HTTP client used for every download
            output_dir: Directory to save episodes (default: ./Downloads)
            progress_callback: Optional callback for progress updates
        """
        self.client = client
        self.output_dir = output_dir or Path.cwd() / "Downloads"
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.progress_callback = progress_callback

    def destination_for(self, episode: EpisodeInfo) -> Path:
        """Path the episode will be written to."""
        stem = safe_filename(episode.name, fallback=f"episode-{episode.episode_number}")
        return self.output_dir / f"{stem}{AUDIO_SUFFIX}"

    def _report(self, progress: DownloadProgress) -> None:
        if self.progress_callback:
            self.progress_callback(progress)

    def download(self, episode: EpisodeInfo) -> Path:
        """Download one episode.

        Args:
            episode: Episode to fetch

        Returns:
            Path to the written file

        Raises:
            TransportError: If the link is missing or the request fails; any
                partially written file is removed
            FileIOError: If the destination cannot be opened or written
        """
        if not episode.link:
            raise TransportError(f"Episode '{episode.name}' has no enclosure URL")

        destination = self.destination_for(episode)

        try:
            output = open(destination, "wb")
        except OSError as e:
            raise FileIOError(f"Cannot open {destination} for writing: {e}") from e

        logger.info("Downloading %s -> %s", episode.link, destination)
        try:
            with output:
                self._stream_to(episode.link, output)
        except httpx.HTTPError as e:
            destination.unlink(missing_ok=True)
            raise TransportError(describe_http_error(episode.link, e)) from e
        except httpx.InvalidURL as e:
            destination.unlink(missing_ok=True)
            raise TransportError(f"Invalid URL {episode.link!r}: {e}") from e
        except OSError as e:
            destination.unlink(missing_ok=True)
            raise FileIOError(f"Failed writing {destination}: {e}") from e

        return destination

    def _stream_to(self, url: str, output) -> None:
        """Stream the response body at url into an open binary file."""
        with self.client.stream("GET", url) as response:
            response.raise_for_status()

            length = response.headers.get("Content-Length")
            total = int(length) if length and length.isdigit() else None
            downloaded = 0

            self._report(DownloadProgress(status="downloading", total_bytes=total))
            for chunk in response.iter_bytes(CHUNK_SIZE):
                output.write(chunk)
                downloaded += len(chunk)
                self._report(
                    DownloadProgress(
                        status="downloading",
                        downloaded_bytes=downloaded,
                        total_bytes=total,
                    )
                )

            self._report(
                DownloadProgress(
                    status="finished",
                    downloaded_bytes=downloaded,
                    total_bytes=total,
                )
            )
            logger.debug("Wrote %d bytes from %s", downloaded, url)
