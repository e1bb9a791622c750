"""
Article page fetching and scraping.

This package handles HTTP fetching of origin pages and
paragraph-based text and metadata extraction.
"""

from .fetcher import FetchResult, fetch_url, open_page_client
from .scraper import extract_metadata, extract_paragraph_text, scrape, truncate_text_budget

__all__ = [
    "FetchResult",
    "fetch_url",
    "open_page_client",
    "scrape",
    "extract_metadata",
    "extract_paragraph_text",
    "truncate_text_budget",
]
