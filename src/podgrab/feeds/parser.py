"""RSS feed parsing and episode sequencing."""

import logging
from collections.abc import Iterable
from xml.etree.ElementTree import Element

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError, fromstring

from podgrab.config.schema import SeriesConfig
from podgrab.feeds.models import EpisodeInfo
from podgrab.utils.errors import FeedParseError

logger = logging.getLogger(__name__)


def parse_feed_document(xml_data: str | bytes) -> Element:
    """Parse raw feed XML into its root element.

    Args:
        xml_data: Feed document

    Returns:
        Root element of the document

    Raises:
        FeedParseError: If the document is not well-formed or uses forbidden
            constructs such as entity declarations
    """
    try:
        return fromstring(xml_data)
    except ParseError as e:
        raise FeedParseError(f"Error parsing XML: {e}") from e
    except DefusedXmlException as e:
        raise FeedParseError(f"Refusing to parse XML: {e}") from e


def match_episode_number(series: SeriesConfig, title: str) -> int | None:
    """Extract the episode number from a title.

    A title that doesn't match, a capture group that didn't participate in
    the match, or a capture that isn't made of ASCII digits all count as no match.
    Signs, underscores, whitespace and other scripts' digits are rejected.

    Args:
        series: Series whose pattern and group index to apply
        title: Item title

    Returns:
        Episode number, or None if the title is not part of the series

    Example:
        >>> match_episode_number(SeriesConfig(name="MAG", pattern=r"MAG (\\d+)"), "mag 5 bonus")
        5
    """
    match = series.regex.search(title)
    if match is None:
        return None

    captured = match.group(series.group)
    if captured is None:
        return None

    if not (captured.isascii() and captured.isdigit()):
        logger.debug("Capture %r in %r is not a number", captured, title)
        return None

    return int(captured)


def _child_text(item: Element, tag: str) -> str:
    child = item.find(tag)
    if child is None or child.text is None:
        return ""
    return child.text


def _enclosure_url(item: Element) -> str:
    enclosure = item.find("enclosure")
    if enclosure is None:
        return ""
    return enclosure.get("url", "")


def parse_episodes(series: SeriesConfig, xml_data: str | bytes) -> list[EpisodeInfo]:
    """Extract the episodes of one series from a feed document.

    Items are read from ``rss/channel/item`` in feed order. Parse failures are
    logged and produce an empty list, so callers can't tell a broken feed from
    one with no matching episodes.

    Args:
        series: Series to select
        xml_data: Feed document

    Returns:
        Matching episodes in feed order
    """
    try:
        root = parse_feed_document(xml_data)
    except FeedParseError as e:
        logger.error("%s", e)
        return []

    if root.tag != "rss":
        logger.warning("Feed root is <%s>, expected <rss>; no items read", root.tag)
        return []

    episodes = []
    skipped = 0
    for item in root.findall("channel/item"):
        name = _child_text(item, "title")
        number = match_episode_number(series, name)
        if number is None:
            skipped += 1
            continue

        link = _enclosure_url(item)
        if not link:
            logger.warning("Episode '%s' has no enclosure URL", name)

        episodes.append(EpisodeInfo(name=name, link=link, episode_number=number))

    logger.info(
        "Series '%s': %d matching item(s), %d skipped", series.name, len(episodes), skipped
    )
    return episodes


def sort_episodes(episodes: Iterable[EpisodeInfo]) -> list[EpisodeInfo]:
    """Order episodes by ascending episode number.

    The sort is stable, so episodes sharing a number keep their feed order.
    """
    return sorted(episodes, key=lambda episode: episode.episode_number)
