"""
Command-line interface for topic news.

Uses Typer to provide commands for aggregating topic feeds, summarizing a
single article, and serving the HTTP API. Supports loading .env files for
the provider credential.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
import typer

from .aggregator import aggregate_sync
from .config import AppConfig, get_api_key, load_config
from .core.types import SortMode, SummaryMode
from .enrichment import enrich_article
from .errors import SummarizationError
from .llm.providers.factory import create_provider
from .logging_utils import setup_llm_logger, setup_logging
from .summarizer import Summarizer

app = typer.Typer(add_completion=False)
console = Console()


def _load(config: Path | None, log_level: str | None, log_dir: Path | None) -> AppConfig:
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    if log_dir is not None:
        cfg.logging.file = True
    setup_logging(cfg.logging, log_dir)
    return cfg


@app.command()
def feed(
    topics: list[str] = typer.Argument(..., help="Topics to aggregate."),
    sort: SortMode | None = typer.Option(None, "--sort", "-s", help="latest or trending (default from config)."),
    limit: int = typer.Option(20, "--limit", "-n", min=1, help="Number of articles to show."),
    dedupe: bool | None = typer.Option(
        None, "--dedupe/--no-dedupe", help="Drop repeated links across topics (default from config)."
    ),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_dir: Path | None = typer.Option(None, "--log-dir", help="Directory for the JSONL log file."),
):
    """Fetch, merge and print the latest articles for TOPICS."""
    cfg = _load(config, log_level, log_dir)
    mode = SortMode(sort or cfg.feed.default_sort)
    articles = aggregate_sync(topics, cfg.feed, sort=mode, dedupe=dedupe)

    table = Table(title=f"{len(articles)} articles ({mode.value})")
    table.add_column("Published")
    table.add_column("Topic")
    table.add_column("Source")
    table.add_column("Title")
    for article in articles[:limit]:
        table.add_row(
            article.published_at.strftime("%Y-%m-%d %H:%M"),
            article.topic,
            article.source_name,
            f"[link={article.link}]{article.title}[/link]",
        )
    console.print(table)


@app.command()
def summarize(
    title: str = typer.Option("", "--title", "-t"),
    link: str | None = typer.Option(None, "--link", "-l", help="Scrape the page and write a long-form summary."),
    snippet: str = typer.Option("", "--snippet"),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        help="Provider credential (or set GROQ_API_KEY / .env).",
    ),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_dir: Path | None = typer.Option(None, "--log-dir", help="Directory for JSONL logs."),
):
    """Summarize one article: bullets from title/snippet, or paragraphs from --link."""
    cfg = _load(config, log_level, log_dir)
    llm_logger = setup_llm_logger(cfg.logging, log_dir)
    provider = create_provider(cfg.provider, cfg.summary, cfg.logging, llm_logger)
    summarizer = Summarizer(provider, cfg.provider, cfg.summary)
    credential = api_key or get_api_key(cfg.provider)
    mode = SummaryMode.LONG if link else SummaryMode.SHORT

    try:
        result = asyncio.run(
            enrich_article(
                title,
                summarizer,
                credential,
                cfg.summary,
                cfg.scrape,
                mode=mode,
                link=link,
                snippet=snippet,
            )
        )
    except SummarizationError as exc:
        console.print(f"[bold red]{type(exc).__name__}[/bold red]: {exc}")
        raise typer.Exit(code=1)

    console.print(f"[bold]Sentiment[/bold]: {result.sentiment.value}")
    if mode is SummaryMode.LONG:
        console.print(f"[bold]Author[/bold]: {result.author}")
        if result.cover_image:
            console.print(f"[bold]Cover image[/bold]: {result.cover_image}")
    for item in result.summary:
        if mode is SummaryMode.SHORT:
            console.print(f"- {item}")
        else:
            console.print(f"{item}\n")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Serve the HTTP API with uvicorn."""
    import uvicorn

    from .api import create_app

    cfg = _load(config, log_level, None)
    uvicorn.run(create_app(cfg), host=host or cfg.api.host, port=port or cfg.api.port)


if __name__ == "__main__":
    app()
