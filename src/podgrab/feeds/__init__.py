"""Feed fetching and RSS parsing for Podgrab."""

from podgrab.feeds.fetcher import fetch_feed
from podgrab.feeds.models import EpisodeInfo
from podgrab.feeds.parser import (
    match_episode_number,
    parse_episodes,
    parse_feed_document,
    sort_episodes,
)

__all__ = [
    "EpisodeInfo",
    "fetch_feed",
    "match_episode_number",
    "parse_episodes",
    "parse_feed_document",
    "sort_episodes",
]
