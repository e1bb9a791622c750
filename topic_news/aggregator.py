"""
Cross-topic aggregation.

Fans out one feed fetch per topic, normalizes each topic's items with their
positional index as rank, concatenates the per-topic lists in topic order and
applies the requested ordering. A failing topic contributes no articles and
never aborts the others.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable

import httpx

from .config import FeedConfig
from .core.normalize import normalize
from .core.types import Article, SortMode
from .errors import FeedError
from .feed.client import fetch_topic_feed, open_feed_client
from .logging_utils import log_event

logger = logging.getLogger(__name__)


async def aggregate(
    topics: Iterable[str],
    cfg: FeedConfig,
    sort: SortMode | str | None = None,
    dedupe: bool | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[Article]:
    """Fetch, normalize, merge and order articles for a set of topics.

    Args:
        topics: Topics to query; blanks are ignored and repeats fetched once
        cfg: Feed source configuration
        sort: "latest" (newest first) or "trending" (lowest rank first);
              defaults to cfg.default_sort
        dedupe: Keep only the first occurrence of each link across topics;
                defaults to cfg.dedupe_by_link
        client: Optional shared HTTP client for all topic requests

    Returns:
        Ordered article list; partial when some topics failed
    """
    mode = SortMode(sort or cfg.default_sort)
    unique_topics = list(dict.fromkeys(t.strip() for t in topics if t and t.strip()))
    if not unique_topics:
        return []

    log_event(logger, "Aggregation start", event="aggregate_start", topics=unique_topics, sort=mode.value)

    # gather keeps one result slot per topic index
    if client is None:
        async with open_feed_client(cfg) as owned:
            per_topic = await asyncio.gather(*(_fetch_topic(t, cfg, owned) for t in unique_topics))
    else:
        per_topic = await asyncio.gather(*(_fetch_topic(t, cfg, client) for t in unique_topics))

    articles = [article for batch in per_topic if batch for article in batch]
    if dedupe is None:
        dedupe = cfg.dedupe_by_link
    if dedupe:
        articles = dedupe_by_link(articles)

    ordered = sort_articles(articles, mode)
    log_event(
        logger,
        "Aggregation complete",
        event="aggregate_complete",
        count=len(ordered),
        failed_topics=sum(1 for batch in per_topic if batch is None),
    )
    return ordered


def aggregate_sync(
    topics: Iterable[str],
    cfg: FeedConfig,
    sort: SortMode | str | None = None,
    dedupe: bool | None = None,
) -> list[Article]:
    """Blocking wrapper around aggregate() for callers without an event loop."""
    return asyncio.run(aggregate(topics, cfg, sort=sort, dedupe=dedupe))


def sort_articles(articles: list[Article], mode: SortMode | str) -> list[Article]:
    """Order articles; ties keep their input order.

    latest sorts by publish time descending, trending by rank ascending.
    """
    mode = SortMode(mode)
    if mode is SortMode.TRENDING:
        return sorted(articles, key=lambda a: a.rank)
    # sorted() stays stable with reverse=True
    return sorted(articles, key=lambda a: a.published_at, reverse=True)


def dedupe_by_link(articles: list[Article]) -> list[Article]:
    seen: set[str] = set()
    kept: list[Article] = []
    for article in articles:
        if article.link in seen:
            continue
        seen.add(article.link)
        kept.append(article)
    return kept


async def _fetch_topic(topic: str, cfg: FeedConfig, client: httpx.AsyncClient) -> list[Article] | None:
    try:
        raw_items = await fetch_topic_feed(topic, cfg, client=client)
    except FeedError as exc:
        log_event(
            logger,
            "Feed fetch failed",
            level=logging.WARNING,
            event="feed_fetch_failed",
            topic=exc.topic,
            error=exc.cause,
        )
        return None
    return [normalize(raw, topic, rank) for rank, raw in enumerate(raw_items)]
