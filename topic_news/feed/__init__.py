"""
Feed source access.

This package builds per-topic search URLs, fetches them,
and parses the returned RSS documents into raw items.
"""

from .client import build_feed_url, fetch_topic_feed, open_feed_client, parse_feed

__all__ = ["build_feed_url", "fetch_topic_feed", "open_feed_client", "parse_feed"]
