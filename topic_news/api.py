"""
HTTP surface for the aggregation and enrichment pipeline.

Routes:
- GET  /health
- GET  /api/news?topic=...                      single topic, feed order
- GET  /api/feed?topic=a&topic=b&sort=latest    merged topics, partial on failure
- POST /api/summarize                           short form, or long form when a link is given

Errors are rendered as {"error": message}.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .aggregator import aggregate
from .config import AppConfig
from .core.normalize import normalize
from .core.types import SortMode, SummaryMode
from .enrichment import enrich_article
from .errors import FeedError, SummarizationError
from .feed.client import fetch_topic_feed
from .llm.providers.base import CompletionProvider
from .llm.providers.factory import create_provider
from .logging_utils import log_event
from .summarizer import Summarizer

logger = logging.getLogger(__name__)


class SummarizeBody(BaseModel):
    credential: str | None = None
    title: str | None = None
    link: str | None = None
    snippet: str | None = None


def create_app(cfg: AppConfig | None = None, provider: CompletionProvider | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        cfg: Application configuration; defaults are used when omitted
        provider: Completion backend; built from cfg.provider when omitted
    """
    cfg = cfg or AppConfig()
    if provider is None:
        provider = create_provider(cfg.provider, cfg.summary, cfg.logging)
    summarizer = Summarizer(provider, cfg.provider, cfg.summary)

    app = FastAPI(
        title="Topic News API",
        description="Per-topic news aggregation with on-demand AI summaries",
        version="0.1.0",
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        log_event(logger, "Invalid request", level=logging.WARNING, event="request_invalid", url=str(request.url), error=message)
        return JSONResponse({"error": f"Invalid request: {message}"}, status_code=400)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/api/news")
    async def news_for_topic(topic: str | None = Query(None)):
        topic = (topic or "").strip()
        if not topic:
            return JSONResponse({"error": "Must provide a 'topic' query parameter"}, status_code=400)
        try:
            raw_items = await fetch_topic_feed(topic, cfg.feed)
        except FeedError as exc:
            log_event(logger, "Feed fetch failed", level=logging.ERROR, event="feed_fetch_failed", topic=topic, error=exc.cause)
            return JSONResponse({"error": "Failed to fetch news feed"}, status_code=500)
        articles = [normalize(raw, topic, rank) for rank, raw in enumerate(raw_items)]
        return {"articles": [a.to_dict() for a in articles]}

    @app.get("/api/feed")
    async def merged_feed(
        topic: list[str] | None = Query(None),
        sort: str | None = Query(None),
    ):
        topics = [t for t in (topic or []) if t.strip()]
        if not topics:
            return JSONResponse({"error": "Must provide at least one 'topic' query parameter"}, status_code=400)
        try:
            mode = SortMode(sort or cfg.feed.default_sort)
        except ValueError:
            return JSONResponse({"error": f"Unsupported sort mode: {sort}"}, status_code=400)
        articles = await aggregate(topics, cfg.feed, sort=mode)
        return {"articles": [a.to_dict() for a in articles]}

    @app.post("/api/summarize")
    async def summarize(body: SummarizeBody):
        mode = SummaryMode.LONG if body.link else SummaryMode.SHORT
        try:
            result = await enrich_article(
                body.title or "",
                summarizer,
                body.credential,
                cfg.summary,
                cfg.scrape,
                mode=mode,
                link=body.link,
                snippet=body.snippet or "",
            )
        except SummarizationError as exc:
            log_event(
                logger,
                "Summarization failed",
                level=logging.WARNING if exc.status_code < 500 else logging.ERROR,
                event="summarize_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return JSONResponse({"error": str(exc)}, status_code=exc.status_code)
        return result.to_dict()

    return app
