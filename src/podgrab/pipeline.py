"""Fetch, match, download and tag pipeline.

Runs the whole job for one feed URL: the feed is fetched once, then each
configured series is parsed, sorted and processed one episode at a time.
Only the feed fetch can abort a run; every per-episode failure is reported
and counted, and processing moves on to the next episode.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import httpx
from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TransferSpeedColumn,
)

from podgrab.audio.downloader import DownloadProgress, EpisodeDownloader
from podgrab.audio.tagger import TrackTagger
from podgrab.config.schema import GrabConfig, SeriesConfig
from podgrab.feeds.fetcher import fetch_feed
from podgrab.feeds.models import EpisodeInfo
from podgrab.feeds.parser import parse_episodes, sort_episodes
from podgrab.utils.errors import ExternalToolError, FileIOError, TransportError

logger = logging.getLogger(__name__)

DIVIDER = "----------------------"


@dataclass
class SeriesStats:
    """Counters for one series."""

    name: str
    matched: int = 0
    downloaded: int = 0
    failed: int = 0
    tagged: int = 0
    tag_failed: int = 0
    episodes: list[EpisodeInfo] = field(default_factory=list)


@dataclass
class RunStats:
    """Counters for a whole run."""

    series: list[SeriesStats] = field(default_factory=list)

    @property
    def matched(self) -> int:
        return sum(s.matched for s in self.series)

    @property
    def downloaded(self) -> int:
        return sum(s.downloaded for s in self.series)

    @property
    def failed(self) -> int:
        return sum(s.failed for s in self.series)

    @property
    def tagged(self) -> int:
        return sum(s.tagged for s in self.series)

    @property
    def tag_failed(self) -> int:
        return sum(s.tag_failed for s in self.series)


def create_client(config: GrabConfig) -> httpx.Client:
    """Build the HTTP client shared by the feed fetch and all downloads."""
    return httpx.Client(
        timeout=config.timeout_seconds,
        follow_redirects=True,
        headers={"User-Agent": config.user_agent},
    )


class GrabPipeline:
    """Orchestrates a single run against one feed."""

    def __init__(
        self,
        config: GrabConfig,
        client: httpx.Client,
        console: Console | None = None,
        error_console: Console | None = None,
        dry_run: bool = False,
        show_progress: bool = False,
    ) -> None:
        self.config = config
        self.client = client
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)
        self.dry_run = dry_run
        self.show_progress = show_progress

        self.tagger = TrackTagger(config.tagger_command) if config.tag_files else None
        self._downloader: EpisodeDownloader | None = None

    @property
    def downloader(self) -> EpisodeDownloader:
        """Downloader, created on first use so dry runs never touch the disk."""
        if self._downloader is None:
            self._downloader = EpisodeDownloader(self.client, output_dir=self.config.output_dir)
        return self._downloader

    def fetch(self, url: str) -> bytes:
        """Fetch the raw feed document.

        Raises:
            TransportError: If the feed can't be retrieved
        """
        return fetch_feed(self.client, url)

    def run(self, url: str) -> RunStats:
        """Fetch url once and process every configured series in order.

        Raises:
            TransportError: If the feed can't be retrieved
        """
        if not self.dry_run:
            self.config.output_dir.mkdir(parents=True, exist_ok=True)

        xml_data = self.fetch(url)

        stats = RunStats()
        for series in self.config.series:
            stats.series.append(self.process_series(series, xml_data))
        return stats

    def process_series(self, series: SeriesConfig, xml_data: str | bytes) -> SeriesStats:
        """Parse, sort and process one series from an already fetched feed."""
        episodes = sort_episodes(parse_episodes(series, xml_data))
        stats = SeriesStats(name=series.name, matched=len(episodes), episodes=episodes)

        if not episodes:
            self.console.print(f"[yellow]No episodes found for {escape(series.name)}[/yellow]")
            return stats

        for episode in episodes:
            self._print_episode(episode)
            if not self.dry_run:
                self.process_episode(episode, stats)
            self.console.print(DIVIDER, highlight=False)

        return stats

    def process_episode(self, episode: EpisodeInfo, stats: SeriesStats) -> Path | None:
        """Download and tag one episode, recording the outcome in stats.

        Returns:
            Path of the downloaded file, or None if the download failed
        """
        try:
            path = self._download(episode)
        except TransportError as e:
            stats.failed += 1
            logger.info("Download failed for '%s': %s", episode.name, e)
            self.error_console.print(f"[red]✗[/red] Download failed: {escape(str(e))}")
            return None
        except FileIOError as e:
            stats.failed += 1
            logger.info("Cannot write '%s': %s", episode.name, e)
            self.error_console.print(f"[red]✗[/red] {escape(str(e))}")
            return None

        stats.downloaded += 1
        self.console.print(f"[green]✓[/green] Saved {escape(str(path))}", soft_wrap=True)

        if self.tagger is not None:
            try:
                self.tagger.tag(path, episode)
            except ExternalToolError as e:
                stats.tag_failed += 1
                logger.info("Tagging failed for %s: %s", path, e)
                self.error_console.print(
                    f"[red]✗[/red] Error setting track number: {escape(str(e))}"
                )
            else:
                stats.tagged += 1
                self.console.print("[green]✓[/green] Track number set successfully.")

        return path

    def _print_episode(self, episode: EpisodeInfo) -> None:
        self.console.print(f"Title: {escape(episode.name)}", soft_wrap=True, highlight=False)
        self.console.print(f"Link: {escape(episode.link)}", soft_wrap=True, highlight=False)
        self.console.print(f"Episode Number: {episode.episode_number}", highlight=False)

    def _download(self, episode: EpisodeInfo) -> Path:
        if not self.show_progress:
            return self.downloader.download(episode)

        progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=self.console,
            transient=True,
        )
        task_id = progress.add_task("Downloading", total=None)

        def on_progress(update: DownloadProgress) -> None:
            progress.update(task_id, completed=update.downloaded_bytes, total=update.total_bytes)

        self.downloader.progress_callback = on_progress
        try:
            with progress:
                return self.downloader.download(episode)
        finally:
            self.downloader.progress_callback = None
