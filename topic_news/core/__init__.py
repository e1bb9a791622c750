"""
Core domain models and normalization.

This package contains data types and pure logic that is
independent of any network I/O.
"""

from .normalize import normalize, split_title_source
from .types import (
    Article,
    EnrichmentResult,
    RawItem,
    ScrapedPage,
    Sentiment,
    SortMode,
    SummaryMode,
    SummaryRequest,
    SummaryResult,
)

__all__ = [
    "Article",
    "EnrichmentResult",
    "RawItem",
    "ScrapedPage",
    "Sentiment",
    "SortMode",
    "SummaryMode",
    "SummaryRequest",
    "SummaryResult",
    "normalize",
    "split_title_source",
]
