"""
On-demand article enrichment.

enrich_article() runs the sequential pipeline for one article:
scrape (long form only) -> summarize -> merge page metadata.

EnrichmentSession wraps it in the per-article state machine

    Idle -> Loading -> Success | Failed

and publishes every transition to its subscribers, so any front end can
observe loading, error and success states without owning them. Closing a
session abandons in-flight work: calls are allowed to finish but their
results never reach the session's state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Callable

import httpx

from .config import ScrapeConfig, SummaryConfig
from .core.types import Article, EnrichmentResult, ScrapedPage, SummaryMode, SummaryRequest
from .errors import SummarizationError, ValidationError
from .fetch.scraper import scrape
from .logging_utils import log_event
from .summarizer import Summarizer

logger = logging.getLogger(__name__)


class EnrichmentState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class StateChange:
    """Event emitted on every state transition.

    Attributes:
        link: Link of the article the session belongs to
        state: State entered
        result: Enrichment result, set only on SUCCESS
        error: Surfaced error message, set only on FAILED
    """
    link: str
    state: EnrichmentState
    result: EnrichmentResult | None = None
    error: str | None = None


Listener = Callable[[StateChange], None]


async def enrich_article(
    title: str,
    summarizer: Summarizer,
    credential: str | None,
    summary_cfg: SummaryConfig,
    scrape_cfg: ScrapeConfig,
    mode: SummaryMode = SummaryMode.LONG,
    link: str | None = None,
    snippet: str = "",
    client: httpx.AsyncClient | None = None,
) -> EnrichmentResult:
    """Produce an EnrichmentResult for one article.

    Long form scrapes ``link`` first and always proceeds to the summarizer,
    substituting a placeholder when no text could be extracted. Short form
    summarizes the title and snippet without scraping.

    Raises:
        SummarizationError: Any summarizer failure, unchanged
    """
    if mode is SummaryMode.SHORT:
        result = await summarizer.summarize(SummaryRequest(title=title, body=snippet or "", mode=mode), credential)
        return EnrichmentResult(mode=mode, sentiment=result.sentiment, bullet_summary=result.summary)

    # Fail on the credential before paying for the page fetch
    summarizer.check_credential(credential)
    if not title.strip() and not (link or "").strip():
        raise ValidationError("Missing article title or link")
    page = await scrape(link, scrape_cfg, client=client) if link else ScrapedPage()
    body = page.text or summary_cfg.missing_text_placeholder
    result = await summarizer.summarize(SummaryRequest(title=title, body=body, mode=mode), credential)
    return EnrichmentResult(
        mode=mode,
        sentiment=result.sentiment,
        paragraph_summary=result.summary,
        cover_image=page.cover_image,
        author=page.author or summary_cfg.default_author,
    )


class EnrichmentSession:
    """State machine for one article's reading session.

    Sessions share nothing; several may run concurrently for different
    articles. Re-opening the same session discards any earlier in-flight
    work and starts over from Idle.
    """

    def __init__(
        self,
        article: Article,
        summarizer: Summarizer,
        credential: str | None,
        summary_cfg: SummaryConfig,
        scrape_cfg: ScrapeConfig,
        mode: SummaryMode = SummaryMode.LONG,
        client: httpx.AsyncClient | None = None,
    ):
        self.article = article
        self.summarizer = summarizer
        self.credential = credential
        self.summary_cfg = summary_cfg
        self.scrape_cfg = scrape_cfg
        self.mode = mode
        self.client = client
        self.state = EnrichmentState.IDLE
        self.result: EnrichmentResult | None = None
        self.error: str | None = None
        self._listeners: list[Listener] = []
        self._generation = 0

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def open(self) -> StateChange:
        """Reset to Idle, then run the enrichment through Loading.

        Returns:
            The final transition of this run, or the current state if the
            run was abandoned before it settled
        """
        self._generation += 1
        generation = self._generation
        self._transition(EnrichmentState.IDLE)
        self._transition(EnrichmentState.LOADING)

        try:
            result = await enrich_article(
                self.article.title,
                self.summarizer,
                self.credential,
                self.summary_cfg,
                self.scrape_cfg,
                mode=self.mode,
                link=self.article.link,
                snippet=self.article.snippet,
                client=self.client,
            )
        except SummarizationError as exc:
            if generation != self._generation:
                return self._current()
            log_event(
                logger,
                "Enrichment failed",
                level=logging.WARNING,
                event="enrichment_failed",
                url=self.article.link,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return self._transition(EnrichmentState.FAILED, error=str(exc))
        except Exception as exc:  # noqa: BLE001
            if generation != self._generation:
                return self._current()
            logger.exception("Enrichment crashed for %s", self.article.link)
            return self._transition(EnrichmentState.FAILED, error=f"Enrichment failed: {type(exc).__name__}")

        if generation != self._generation:
            log_event(logger, "Enrichment result discarded", level=logging.DEBUG, event="enrichment_discarded", url=self.article.link)
            return self._current()
        return self._transition(EnrichmentState.SUCCESS, result=result)

    def close(self) -> None:
        """End the reading session; late results from an open() are dropped."""
        self._generation += 1
        self._transition(EnrichmentState.IDLE)

    def _transition(
        self,
        state: EnrichmentState,
        result: EnrichmentResult | None = None,
        error: str | None = None,
    ) -> StateChange:
        self.state = state
        self.result = result
        self.error = error
        change = self._current()
        for listener in list(self._listeners):
            listener(change)
        return change

    def _current(self) -> StateChange:
        return StateChange(link=self.article.link, state=self.state, result=self.result, error=self.error)
