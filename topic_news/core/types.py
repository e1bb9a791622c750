"""
Core data types for topic news aggregation and enrichment.

This module defines the fundamental data structures used throughout the pipeline:
- RawItem: Unnormalized record as returned by the feed parser
- Article: Canonical article produced by the normalizer
- ScrapedPage: Readable text and metadata pulled from an article's origin page
- SummaryRequest / SummaryResult: Summarizer input and output contract
- EnrichmentResult: Summary plus page metadata for one reading session
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class Sentiment(str, Enum):
    """Closed set of sentiment labels the model may return."""

    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"


class SummaryMode(str, Enum):
    """Short-form bullets for feed cards, long-form paragraphs for full reads."""

    SHORT = "short"
    LONG = "long"


class SortMode(str, Enum):
    """Ordering applied to an aggregated article list."""

    LATEST = "latest"
    TRENDING = "trending"


@dataclass(frozen=True)
class RawItem:
    """A feed item before normalization.

    Attributes:
        title: Raw headline, often formatted as "<headline> - <publisher>"
        link: Article URL
        source: Publisher name from the feed's structured source field, if any
        published_at: Publish timestamp, if the feed carried one
        snippet: Plain-text excerpt derived from the item description
    """
    title: str
    link: str
    source: str | None = None
    published_at: datetime | None = None
    snippet: str = ""


@dataclass(frozen=True)
class Article:
    """Canonical unit of content produced by one aggregation call.

    The same story returned for two topics yields two Articles that differ in
    ``topic`` (and usually ``rank``).

    Attributes:
        title: Cleaned headline, never empty
        link: Canonical URL, never empty
        published_at: Timezone-aware publish time
        source_name: Publisher name, or "Unknown Source"
        snippet: Short excerpt, may be empty
        topic: Query topic that produced this article
        rank: Zero-based position within its topic's feed order
    """
    title: str
    link: str
    published_at: datetime
    source_name: str
    snippet: str
    topic: str
    rank: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "publishedAt": self.published_at.isoformat(),
            "sourceName": self.source_name,
            "snippet": self.snippet,
            "topic": self.topic,
            "rank": self.rank,
        }


@dataclass(frozen=True)
class ScrapedPage:
    """Readable content pulled from an article's origin page.

    Empty text with no metadata is the degraded result of any scrape failure.
    """
    text: str = ""
    cover_image: str | None = None
    author: str | None = None


@dataclass(frozen=True)
class SummaryRequest:
    title: str
    body: str
    mode: SummaryMode = SummaryMode.SHORT


@dataclass
class SummaryResult:
    """Parsed model output.

    Attributes:
        summary: Bullet strings (short form) or paragraphs (long form), in presentation order
        sentiment: One of the closed Sentiment labels
        meta: Extra details such as the model name
    """
    summary: list[str]
    sentiment: Sentiment
    meta: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"summary": list(self.summary), "sentiment": self.sentiment.value}


@dataclass
class EnrichmentResult:
    """Summary and metadata for one open reading session; never persisted here.

    Short-form enrichment fills ``bullet_summary``; long-form fills
    ``paragraph_summary`` together with the scraped metadata.
    """
    mode: SummaryMode
    sentiment: Sentiment
    bullet_summary: list[str] = field(default_factory=list)
    paragraph_summary: list[str] = field(default_factory=list)
    cover_image: str | None = None
    author: str | None = None

    @property
    def summary(self) -> list[str]:
        if self.mode is SummaryMode.LONG:
            return self.paragraph_summary
        return self.bullet_summary

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "summary": list(self.summary),
            "sentiment": self.sentiment.value,
        }
        if self.mode is SummaryMode.LONG:
            payload["coverImage"] = self.cover_image
            payload["author"] = self.author
        return payload
