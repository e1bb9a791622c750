"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FeedConfig: Feed source endpoint and aggregation settings
- ScrapeConfig: Origin page fetching and text budget settings
- SummaryConfig: Prompt and output-shape settings
- ProviderConfig: LLM provider settings
- LoggingConfig: Logging behavior
- ApiConfig: HTTP server settings
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
import os
from typing import Any

import yaml


BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


@dataclass
class FeedConfig:
    """Configuration for the per-topic feed source.

    Attributes:
        base_url: Search endpoint of the feed source
        recency: Constraint appended to every topic query
        hl: Interface language parameter
        gl: Region parameter
        ceid: Edition parameter
        timeout_seconds: Per-request timeout
        user_agent: HTTP User-Agent header string
        trust_env: Whether to respect system proxy settings
        default_sort: "latest" or "trending"
        dedupe_by_link: Drop repeated links across topics (off keeps one copy per topic)
    """

    base_url: str = "https://news.google.com/rss/search"
    recency: str = "when:1d"
    hl: str = "en-US"
    gl: str = "US"
    ceid: str = "US:en"
    timeout_seconds: float = 20.0
    user_agent: str = "topic-news/0.1 (RSS reader)"
    trust_env: bool = True
    default_sort: str = "latest"
    dedupe_by_link: bool = False


@dataclass
class ScrapeConfig:
    """Configuration for fetching article origin pages.

    Attributes:
        timeout_seconds: Per-request timeout
        user_agent: Browser-like User-Agent; some sites reject default clients
        trust_env: Whether to respect system proxy settings
        max_chars: Hard cap on extracted text handed to the summarizer
    """

    timeout_seconds: float = 20.0
    user_agent: str = BROWSER_USER_AGENT
    trust_env: bool = True
    max_chars: int = 15000


@dataclass
class SummaryConfig:
    """Configuration for prompt construction.

    Attributes:
        short_bullets: Number of bullets requested in short form
        long_paragraphs_min: Minimum paragraphs requested in long form
        long_paragraphs_max: Maximum paragraphs requested in long form
        temperature: Sampling temperature
        max_output_tokens: Completion token cap
        missing_text_placeholder: Body sent when no article text could be scraped
        missing_snippet_placeholder: Body sent when a short-form request has no snippet
        default_author: Author shown when none could be extracted
    """

    short_bullets: int = 3
    long_paragraphs_min: int = 3
    long_paragraphs_max: int = 4
    temperature: float = 0.1
    max_output_tokens: int = 1024
    missing_text_placeholder: str = "Article text not available."
    missing_snippet_placeholder: str = "No snippet available."
    default_author: str = "Editorial Team"


@dataclass
class ProviderConfig:
    """Configuration for the LLM provider.

    Attributes:
        name: Provider name ("groq" currently supported)
        model: Model identifier
        base_url: OpenAI-compatible API root
        api_key_env: Environment variable consulted when no credential is passed
        credential_prefix: Prefix every valid credential starts with
        timeout_seconds: Per-request timeout
        trust_env: Whether to respect system proxy settings for API requests
    """

    name: str = "groq"
    model: str = "llama-3.1-8b-instant"
    base_url: str = "https://api.groq.com/openai/v1"
    api_key_env: str = "GROQ_API_KEY"
    credential_prefix: str = "gsk_"
    timeout_seconds: float = 30.0
    trust_env: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
        llm_log_enabled: Whether to enable separate LLM interaction logging
        llm_log_detail: LLM log detail level ("summary_only", "response_only", "prompt_response")
        llm_log_redaction: Redaction mode for LLM logs ("none", "redact_content", "redact_urls_authors")
        llm_log_file: Name of the LLM log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "topic_news.jsonl"
    llm_log_enabled: bool = False
    llm_log_detail: str = "response_only"
    llm_log_redaction: str = "redact_urls_authors"
    llm_log_file: str = "llm.jsonl"


@dataclass
class ApiConfig:
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    feed: FeedConfig = field(default_factory=FeedConfig)
    scrape: ScrapeConfig = field(default_factory=ScrapeConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    api: ApiConfig = field(default_factory=ApiConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig, ignoring unknown keys."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            known = {k: v for k, v in value.items() if k in data[key]}
            data[key].update(known)
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    sections = {f.name: f.default_factory for f in fields(AppConfig)}
    return AppConfig(**{name: factory(**data[name]) for name, factory in sections.items()})


def get_api_key(cfg: ProviderConfig) -> str | None:
    """Get the provider credential from the configured environment variable."""
    return os.getenv(cfg.api_key_env)
