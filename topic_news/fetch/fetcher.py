"""
HTTP page fetching for article enrichment.

Fetches an article's origin page with a browser-like identification header.
Failures are reported through FetchResult rather than raised; no request is
retried.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from ..config import ScrapeConfig


@dataclass
class FetchResult:
    """Result of an HTTP fetch operation.

    Either text will be populated (success) or error will be populated (failure),
    but never both. status_code may be None for network-level failures.

    Attributes:
        url: The URL that was fetched
        status_code: HTTP status code, or None if request failed before getting response
        text: The response body text, or None on error
        error: Error message if fetch failed, None on success
    """
    url: str
    status_code: int | None
    text: str | None
    error: str | None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.text)


async def fetch_url(
    url: str,
    cfg: ScrapeConfig,
    client: httpx.AsyncClient | None = None,
) -> FetchResult:
    """Fetch a URL, following redirects.

    Args:
        url: The URL to fetch
        cfg: Scrape configuration (timeout, user agent, proxy handling)
        client: Optional shared client; a short-lived one is opened otherwise

    Returns:
        FetchResult with text on success or error message on failure
    """
    try:
        if client is None:
            async with open_page_client(cfg) as owned:
                resp = await owned.get(url)
        else:
            resp = await client.get(url, headers={"User-Agent": cfg.user_agent})
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return FetchResult(url=url, status_code=None, text=None, error=f"{type(exc).__name__}: {exc}")

    if not resp.is_success:
        return FetchResult(url=url, status_code=resp.status_code, text=None, error=f"HTTP {resp.status_code}")
    if not resp.text.strip():
        return FetchResult(url=url, status_code=resp.status_code, text=None, error="Empty body")
    return FetchResult(url=url, status_code=resp.status_code, text=resp.text, error=None)


def open_page_client(cfg: ScrapeConfig) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=cfg.timeout_seconds,
        headers={"User-Agent": cfg.user_agent},
        follow_redirects=True,
        trust_env=cfg.trust_env,
    )
