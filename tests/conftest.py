"""Shared pytest fixtures."""

import os

import pytest

# Disable Rich formatting in tests for consistent output across environments
os.environ["NO_COLOR"] = "1"
os.environ["TERM"] = "dumb"


def build_feed(items: list[tuple[str, str | None]]) -> str:
    """Build an RSS document from (title, enclosure url) pairs."""
    parts = []
    for title, link in items:
        enclosure = f'<enclosure url="{link}" type="audio/mpeg" length="3"/>' if link else ""
        parts.append(f"<item><title>{title}</title>{enclosure}</item>")
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel><title>The Magnus Archives</title>'
        + "".join(parts)
        + "</channel></rss>"
    )


@pytest.fixture
def magnus_feed() -> str:
    """Feed mixing two series with unrelated posts, in non-sorted order."""
    return build_feed(
        [
            ("MAG 101 - Lost John's Cave", "https://cdn.example.com/mag101.mp3"),
            ("The Magnus Protocol 2", "https://cdn.example.com/tmp2.mp3"),
            ("MAG 12 - Alexandria", "https://cdn.example.com/mag12.mp3"),
            ("Q&amp;A livestream announcement", "https://cdn.example.com/qa.mp3"),
            ("MAG 7", "https://cdn.example.com/mag7.mp3"),
            ("The Magnus Protocol 1", "https://cdn.example.com/tmp1.mp3"),
        ]
    )


@pytest.fixture
def feed_builder():
    """Factory for RSS documents from (title, enclosure url) pairs."""
    return build_feed
