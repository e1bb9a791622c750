"""
Feed item normalization.

Converts a RawItem into a canonical Article. Normalization never fails: missing
fields are replaced with defaults instead.
"""

from __future__ import annotations

from datetime import datetime, timezone

from .types import Article, RawItem


TITLE_SOURCE_SEPARATOR = " - "
DEFAULT_TITLE = "Untitled Article"
DEFAULT_SOURCE = "Unknown Source"


def normalize(raw: RawItem, topic: str, rank: int) -> Article:
    """Build an Article from a raw feed item.

    Args:
        raw: The unnormalized feed item
        topic: Query topic that produced the item
        rank: Zero-based position of the item in its topic's feed

    Returns:
        Article with cleaned title and resolved source name
    """
    title = raw.title.strip() if raw.title else ""
    source = raw.source.strip() if raw.source else ""
    title, source = split_title_source(title or DEFAULT_TITLE, source or DEFAULT_SOURCE)

    published_at = raw.published_at or datetime.now(timezone.utc)
    if published_at.tzinfo is None:
        published_at = published_at.replace(tzinfo=timezone.utc)

    return Article(
        title=title,
        link=raw.link,
        published_at=published_at,
        source_name=source,
        snippet=raw.snippet or "",
        topic=topic,
        rank=rank,
    )


def split_title_source(title: str, source: str) -> tuple[str, str]:
    """Split a "<headline> - <publisher>" title into headline and publisher.

    The last " - " segment wins over any structured source; the remaining
    segments are rejoined as the headline.

    Examples:
        >>> split_title_source("Foo Bar - Reuters", "Unknown Source")
        ("Foo Bar", "Reuters")
        >>> split_title_source("A - B - C", "Unknown Source")
        ("A - B", "C")
    """
    if TITLE_SOURCE_SEPARATOR not in title:
        return title, source
    parts = title.split(TITLE_SOURCE_SEPARATOR)
    publisher = parts.pop().strip()
    headline = TITLE_SOURCE_SEPARATOR.join(parts).strip()
    return headline or title, publisher or source
