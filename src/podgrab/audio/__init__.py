"""Episode download and tagging for Podgrab."""

from podgrab.audio.downloader import DownloadProgress, EpisodeDownloader
from podgrab.audio.tagger import TrackTagger

__all__ = [
    "DownloadProgress",
    "EpisodeDownloader",
    "TrackTagger",
]
