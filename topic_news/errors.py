"""
Error taxonomy for feed aggregation and article enrichment.

Feed failures are scoped to one topic and never abort an aggregation.
Summarization failures carry the HTTP status the API surface reports.
"""

from __future__ import annotations


class TopicNewsError(Exception):
    """Base class for all errors raised by topic_news."""


class FeedError(TopicNewsError):
    """Raised when a topic's feed cannot be fetched or parsed."""

    def __init__(self, topic: str, cause: str):
        super().__init__(f"Feed fetch failed for topic {topic!r}: {cause}")
        self.topic = topic
        self.cause = cause


class SummarizationError(TopicNewsError):
    """Base class for errors surfaced by the summarizer."""

    status_code = 500


class ValidationError(SummarizationError):
    """Required input is missing."""

    status_code = 400


class AuthError(SummarizationError):
    """The caller-supplied credential is missing or malformed."""

    status_code = 401


class UpstreamError(SummarizationError):
    """The model provider failed or returned no content."""

    status_code = 500


class ParseError(SummarizationError):
    """The model response is not a JSON object of the expected shape."""

    status_code = 500
