"""
Topic News - per-topic news aggregation with on-demand AI enrichment.

This package fetches a news search feed per topic, normalizes the items into
canonical articles, merges and orders them across topics, and on request
scrapes an article page and asks an LLM for a structured summary and
sentiment label.

Main entry points are the CLI (`topic-news feed`, `topic-news summarize`,
`topic-news serve`) and the FastAPI app from `topic_news.api.create_app`.

Example:
    $ topic-news feed "artificial intelligence" climate --sort trending
"""

__all__ = [
    "__version__",
    "Article",
    "EnrichmentResult",
    "EnrichmentSession",
    "Summarizer",
    "aggregate",
    "aggregate_sync",
    "enrich_article",
    "normalize",
    "scrape",
]
__version__ = "0.1.0"

from .aggregator import aggregate, aggregate_sync
from .core.normalize import normalize
from .core.types import Article, EnrichmentResult
from .enrichment import EnrichmentSession, enrich_article
from .fetch.scraper import scrape
from .summarizer import Summarizer
