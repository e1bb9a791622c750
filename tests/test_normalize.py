"""Tests for feed item normalization and the title/source split."""

from __future__ import annotations

from datetime import datetime, timezone

from topic_news.core.normalize import normalize, split_title_source
from topic_news.core.types import RawItem


def _raw(title: str, source: str | None = None, published_at: datetime | None = None) -> RawItem:
    return RawItem(
        title=title,
        link="https://example.com/story",
        source=source,
        published_at=published_at,
        snippet="Short excerpt",
    )


def test_title_split_takes_last_segment_as_source():
    article = normalize(_raw("Foo Bar - Reuters"), "markets", 0)

    assert article.title == "Foo Bar"
    assert article.source_name == "Reuters"


def test_title_split_with_multiple_separators():
    assert split_title_source("A - B - C", "Unknown Source") == ("A - B", "C")


def test_embedded_source_overrides_structured_source():
    article = normalize(_raw("Rates hold steady - Bloomberg", source="Google News"), "economy", 2)

    assert article.source_name == "Bloomberg"
    assert article.title == "Rates hold steady"


def test_title_without_separator_keeps_structured_source():
    article = normalize(_raw("Plain headline", source="AP News"), "world", 1)

    assert article.title == "Plain headline"
    assert article.source_name == "AP News"


def test_defaults_for_missing_title_and_source():
    article = normalize(_raw(""), "science", 0)

    assert article.title == "Untitled Article"
    assert article.source_name == "Unknown Source"


def test_hyphenated_words_are_not_split():
    article = normalize(_raw("State-of-the-art chips ship"), "tech", 0)

    assert article.title == "State-of-the-art chips ship"
    assert article.source_name == "Unknown Source"


def test_topic_and_rank_pass_through():
    article = normalize(_raw("Headline - Source"), "climate", 7)

    assert article.topic == "climate"
    assert article.rank == 7
    assert article.link == "https://example.com/story"
    assert article.snippet == "Short excerpt"


def test_missing_timestamp_defaults_to_now():
    before = datetime.now(timezone.utc)
    article = normalize(_raw("Headline"), "tech", 0)
    after = datetime.now(timezone.utc)

    assert before <= article.published_at <= after


def test_naive_timestamp_is_treated_as_utc():
    article = normalize(_raw("Headline", published_at=datetime(2024, 1, 2, 8, 30)), "tech", 0)

    assert article.published_at == datetime(2024, 1, 2, 8, 30, tzinfo=timezone.utc)


def test_normalize_is_idempotent_when_timestamp_present():
    raw = _raw("Foo - Bar", published_at=datetime(2024, 1, 1, tzinfo=timezone.utc))

    assert normalize(raw, "x", 3) == normalize(raw, "x", 3)


def test_normalize_is_idempotent_apart_from_default_timestamp():
    raw = _raw("Foo - Bar")
    first = normalize(raw, "x", 3)
    second = normalize(raw, "x", 3)

    assert first.title == second.title
    assert first.source_name == second.source_name
    assert first.link == second.link
    assert first.rank == second.rank


def test_article_to_dict_uses_camel_case_keys():
    article = normalize(
        _raw("Foo - Bar", published_at=datetime(2024, 1, 2, tzinfo=timezone.utc)),
        "x",
        0,
    )

    payload = article.to_dict()

    assert payload["sourceName"] == "Bar"
    assert payload["publishedAt"] == "2024-01-02T00:00:00+00:00"
    assert payload["rank"] == 0
