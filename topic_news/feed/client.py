"""
Per-topic feed retrieval.

One GET per topic against the feed source's search endpoint, constrained to
the last 24 hours, parsed with feedparser into RawItem records. The client
holds no state: configuration is passed in and the HTTP client is either
supplied by the caller or opened for the single call.
"""

from __future__ import annotations

import calendar
from datetime import datetime, timezone
import logging
import time
from typing import Any
from urllib.parse import quote, urlencode

from bs4 import BeautifulSoup
import feedparser
import httpx

from ..config import FeedConfig
from ..core.types import RawItem
from ..errors import FeedError
from ..logging_utils import log_event

logger = logging.getLogger(__name__)


def build_feed_url(topic: str, cfg: FeedConfig) -> str:
    """Build the search URL for a topic.

    Examples:
        >>> build_feed_url(" AI ", FeedConfig())
        'https://news.google.com/rss/search?q=AI%20when%3A1d&hl=en-US&gl=US&ceid=US%3Aen'
    """
    query = f"{topic.strip()} {cfg.recency}".strip()
    params = urlencode({"hl": cfg.hl, "gl": cfg.gl, "ceid": cfg.ceid})
    return f"{cfg.base_url}?q={quote(query, safe='')}&{params}"


async def fetch_topic_feed(
    topic: str,
    cfg: FeedConfig,
    client: httpx.AsyncClient | None = None,
) -> list[RawItem]:
    """Fetch and parse the feed for one topic.

    Args:
        topic: Topic string as entered by the user
        cfg: Feed source configuration
        client: Optional shared client; a short-lived one is opened otherwise

    Returns:
        Raw items in the feed's own order

    Raises:
        FeedError: On transport failure, non-success status, or unparsable body
    """
    url = build_feed_url(topic, cfg)
    log_event(logger, "Feed fetch start", level=logging.DEBUG, event="feed_fetch_start", topic=topic, url=url)

    try:
        if client is None:
            async with open_feed_client(cfg) as owned:
                resp = await owned.get(url)
        else:
            resp = await client.get(url)
    except httpx.HTTPError as exc:
        raise FeedError(topic, f"{type(exc).__name__}: {exc}") from exc

    if not resp.is_success:
        raise FeedError(topic, f"HTTP {resp.status_code}")

    items = parse_feed(resp.content, topic)
    log_event(logger, "Feed fetch complete", level=logging.DEBUG, event="feed_fetch_complete", topic=topic, count=len(items))
    return items


def parse_feed(content: bytes | str, topic: str = "") -> list[RawItem]:
    """Parse an RSS document into raw items.

    Entries without a link are skipped with a warning.

    Raises:
        FeedError: If the body is not a usable syndication document
    """
    feed = feedparser.parse(content)
    entries = getattr(feed, "entries", None)
    if not isinstance(entries, list):
        raise FeedError(topic, "Feed has no entries")
    # bozo alone is not fatal: it is also set for recoverable charset issues
    if not entries and not feed.get("version"):
        exc = feed.get("bozo_exception")
        raise FeedError(topic, f"Invalid feed document ({exc})" if exc else "Invalid feed document")

    items: list[RawItem] = []
    for entry in entries:
        link = (entry.get("link") or "").strip()
        if not link:
            log_event(
                logger,
                "Skipping feed entry without link",
                level=logging.WARNING,
                event="feed_entry_skipped",
                topic=topic,
                title=entry.get("title"),
            )
            continue
        items.append(
            RawItem(
                title=(entry.get("title") or "").strip(),
                link=link,
                source=_get_source(entry),
                published_at=_to_datetime(entry),
                snippet=_to_snippet(entry.get("summary") or entry.get("description") or ""),
            )
        )
    return items


def open_feed_client(cfg: FeedConfig) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=cfg.timeout_seconds,
        headers={"User-Agent": cfg.user_agent},
        follow_redirects=True,
        trust_env=cfg.trust_env,
    )


def _get_source(entry: dict[str, Any]) -> str | None:
    src = entry.get("source") or {}
    if isinstance(src, dict):
        title = src.get("title")
        if isinstance(title, str) and title.strip():
            return title.strip()
    return None


def _to_datetime(entry: dict[str, Any]) -> datetime | None:
    """Convert the entry's parsed date to an aware UTC datetime.

    feedparser normalizes *_parsed fields to UTC struct_time values.
    """
    for key in ("published_parsed", "updated_parsed"):
        val = entry.get(key)
        if isinstance(val, time.struct_time):
            return datetime.fromtimestamp(calendar.timegm(val), tz=timezone.utc)
    return None


def _to_snippet(description: str) -> str:
    if not description:
        return ""
    text = BeautifulSoup(description, "html.parser").get_text(separator=" ")
    return " ".join(text.split())
