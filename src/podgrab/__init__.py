"""Podgrab - download and track-tag podcast series from an RSS feed."""

__version__ = "0.1.0"
