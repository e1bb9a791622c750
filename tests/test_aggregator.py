"""Tests for cross-topic aggregation, failure isolation and ordering."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from topic_news import aggregator
from topic_news.aggregator import aggregate, dedupe_by_link, sort_articles
from topic_news.config import FeedConfig
from topic_news.core.types import Article, RawItem, SortMode
from topic_news.errors import FeedError


def _ts(day: int, hour: int = 0) -> datetime:
    return datetime(2024, 1, day, hour, tzinfo=timezone.utc)


def _article(title: str, published_at: datetime, rank: int = 0, topic: str = "t", link: str | None = None) -> Article:
    return Article(
        title=title,
        link=link or f"https://example.com/{title}",
        published_at=published_at,
        source_name="Source",
        snippet="",
        topic=topic,
        rank=rank,
    )


def _install_feeds(monkeypatch, feeds: dict[str, list[RawItem] | Exception]) -> list[str]:
    calls: list[str] = []

    async def fake_fetch(topic, cfg, client=None):
        calls.append(topic)
        outcome = feeds[topic]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(aggregator, "fetch_topic_feed", fake_fetch)
    return calls


def test_failed_topic_contributes_nothing(monkeypatch):
    _install_feeds(
        monkeypatch,
        {
            "x": FeedError("x", "HTTP 500"),
            "y": [
                RawItem(title="One - Pub", link="https://example.com/1", published_at=_ts(2)),
                RawItem(title="Two - Pub", link="https://example.com/2", published_at=_ts(1)),
            ],
        },
    )

    articles = asyncio.run(aggregate(["x", "y"], FeedConfig()))

    assert [a.title for a in articles] == ["One", "Two"]
    assert all(a.topic == "y" for a in articles)


def test_all_topics_failing_returns_empty(monkeypatch):
    _install_feeds(monkeypatch, {"x": FeedError("x", "boom"), "y": FeedError("y", "boom")})

    assert asyncio.run(aggregate(["x", "y"], FeedConfig())) == []


def test_rank_is_position_within_topic_feed(monkeypatch):
    _install_feeds(
        monkeypatch,
        {
            "a": [RawItem(title=f"A{i}", link=f"https://a/{i}", published_at=_ts(1)) for i in range(3)],
            "b": [RawItem(title=f"B{i}", link=f"https://b/{i}", published_at=_ts(1)) for i in range(2)],
        },
    )

    articles = asyncio.run(aggregate(["a", "b"], FeedConfig(), sort="trending"))

    assert [(a.title, a.rank) for a in articles] == [("A0", 0), ("B0", 0), ("A1", 1), ("B1", 1), ("A2", 2)]


def test_same_story_is_kept_once_per_topic(monkeypatch):
    shared = RawItem(title="Shared - Pub", link="https://example.com/shared", published_at=_ts(1))
    _install_feeds(monkeypatch, {"a": [shared], "b": [shared]})

    articles = asyncio.run(aggregate(["a", "b"], FeedConfig()))

    assert [a.topic for a in articles] == ["a", "b"]
    assert len({a.link for a in articles}) == 1


def test_dedupe_option_keeps_first_topic_copy(monkeypatch):
    shared = RawItem(title="Shared - Pub", link="https://example.com/shared", published_at=_ts(1))
    _install_feeds(monkeypatch, {"a": [shared], "b": [shared]})

    articles = asyncio.run(aggregate(["a", "b"], FeedConfig(), dedupe=True))

    assert [a.topic for a in articles] == ["a"]


def test_repeated_and_blank_topics_are_fetched_once(monkeypatch):
    calls = _install_feeds(monkeypatch, {"a": []})

    asyncio.run(aggregate(["a", " a ", "", "   "], FeedConfig()))

    assert calls == ["a"]


def test_no_topics_makes_no_requests(monkeypatch):
    calls = _install_feeds(monkeypatch, {})

    assert asyncio.run(aggregate([], FeedConfig())) == []
    assert calls == []


def test_latest_orders_newest_first():
    t1 = _article("t1", _ts(2))
    t2 = _article("t2", _ts(1))

    assert sort_articles([t2, t1], SortMode.LATEST) == [t1, t2]


def test_latest_ties_keep_input_order():
    first = _article("first", _ts(1))
    second = _article("second", _ts(1))
    newer = _article("newer", _ts(3))

    assert sort_articles([first, second, newer], "latest") == [newer, first, second]


def test_trending_orders_by_ascending_rank():
    r5 = _article("r5", _ts(1), rank=5)
    r1 = _article("r1", _ts(1), rank=1)
    r3 = _article("r3", _ts(1), rank=3)

    assert sort_articles([r5, r1, r3], SortMode.TRENDING) == [r1, r3, r5]


def test_trending_ties_keep_input_order():
    a = _article("a", _ts(3), rank=1, topic="x")
    b = _article("b", _ts(1), rank=1, topic="y")
    c = _article("c", _ts(2), rank=0, topic="z")

    assert sort_articles([a, b, c], SortMode.TRENDING) == [c, a, b]


def test_sorting_is_repeatable():
    articles = [_article(str(i), _ts(1 + i % 3), rank=i % 2) for i in range(10)]

    assert sort_articles(articles, "latest") == sort_articles(list(articles), "latest")
    assert sort_articles(articles, "trending") == sort_articles(list(articles), "trending")


def test_dedupe_by_link_preserves_order():
    a = _article("a", _ts(1), link="https://x/1")
    b = _article("b", _ts(1), link="https://x/2")
    c = _article("c", _ts(1), link="https://x/1")

    assert dedupe_by_link([a, b, c]) == [a, b]


def test_default_sort_comes_from_config(monkeypatch):
    _install_feeds(
        monkeypatch,
        {
            "a": [
                RawItem(title="old", link="https://a/old", published_at=_ts(1)),
                RawItem(title="new", link="https://a/new", published_at=_ts(5)),
            ]
        },
    )

    latest = asyncio.run(aggregate(["a"], FeedConfig(default_sort="latest")))
    trending = asyncio.run(aggregate(["a"], FeedConfig(default_sort="trending")))

    assert [a.title for a in latest] == ["new", "old"]
    assert [a.title for a in trending] == ["old", "new"]
