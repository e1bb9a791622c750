"""
Origin page scraping.

Pulls readable text and metadata out of an article page by DOM inspection:
- text: every <p> element in document order, blank-line separated, truncated
- cover image: og:image, then twitter:image
- author: author meta, then article:author meta, then a byline-class node

This is a paragraph heuristic, not a content-extraction algorithm; boilerplate
rendered inside <p> tags is kept.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup
import httpx

from ..config import ScrapeConfig
from ..core.types import ScrapedPage
from ..logging_utils import log_event
from .fetcher import fetch_url

logger = logging.getLogger(__name__)

PARAGRAPH_SEPARATOR = "\n\n"


async def scrape(
    url: str,
    cfg: ScrapeConfig,
    client: httpx.AsyncClient | None = None,
) -> ScrapedPage:
    """Fetch a page and extract its text and metadata.

    Never raises: any fetch or parse failure yields an empty ScrapedPage.

    Args:
        url: Article URL
        cfg: Scrape configuration
        client: Optional shared HTTP client

    Returns:
        ScrapedPage with text truncated to cfg.max_chars
    """
    if not url:
        return ScrapedPage()

    result = await fetch_url(url, cfg, client=client)
    if not result.ok:
        log_event(
            logger,
            "Scrape failed",
            level=logging.WARNING,
            event="scrape_failed",
            url=url,
            status_code=result.status_code,
            error=result.error,
        )
        return ScrapedPage()

    try:
        soup = BeautifulSoup(result.text, "html.parser")
    except Exception as exc:  # noqa: BLE001
        log_event(logger, "Scrape parse failed", level=logging.WARNING, event="scrape_failed", url=url, error=str(exc))
        return ScrapedPage()

    cover_image, author = extract_metadata(soup)
    text = truncate_text_budget(extract_paragraph_text(soup), cfg.max_chars)
    log_event(
        logger,
        "Scrape complete",
        level=logging.DEBUG,
        event="scrape_complete",
        url=url,
        text_chars=len(text),
        has_cover_image=cover_image is not None,
        has_author=author is not None,
    )
    return ScrapedPage(text=text, cover_image=cover_image, author=author)


def extract_metadata(soup: BeautifulSoup) -> tuple[str | None, str | None]:
    """Return (cover_image, author) in order of preference, None when absent."""
    cover_image = _meta_content(soup, property="og:image") or _meta_content(soup, name="twitter:image")
    author = (
        _meta_content(soup, name="author")
        or _meta_content(soup, property="article:author")
        or _byline_text(soup)
    )
    return cover_image, author


def extract_paragraph_text(soup: BeautifulSoup) -> str:
    paragraphs = []
    for node in soup.find_all("p"):
        text = node.get_text().strip()
        if text:
            paragraphs.append(text)
    return PARAGRAPH_SEPARATOR.join(paragraphs)


def truncate_text_budget(text: str, max_chars: int) -> str:
    """Hard-truncate text to at most max_chars characters."""
    return text[:max_chars]


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str | None:
    # twitter:image is published under either name= or property= in the wild
    tag = soup.find("meta", attrs=attrs)
    if tag is None and "name" in attrs:
        tag = soup.find("meta", attrs={"property": attrs["name"]})
    if tag is None:
        return None
    content = (tag.get("content") or "").strip()
    return content or None


def _byline_text(soup: BeautifulSoup) -> str | None:
    node = soup.find(class_=lambda c: bool(c) and "byline" in c.lower())
    if node is None:
        return None
    text = " ".join(node.get_text().split())
    return text or None
