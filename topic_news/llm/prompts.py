"""Prompt loading and rendering for short-form and long-form summaries."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from ..config import SummaryConfig
from ..core.types import SummaryMode, SummaryRequest


_PROMPT_DIR = Path(__file__).resolve().parent.parent / "prompts"


@lru_cache(maxsize=None)
def _load_template(name: str) -> str:
    path = _PROMPT_DIR / f"{name}.md"
    return path.read_text(encoding="utf-8").strip()


def _render_template(name: str, **values: object) -> str:
    template = _load_template(name)
    return template.format(**values)


def build_summary_prompt(request: SummaryRequest, cfg: SummaryConfig) -> str:
    """Render the instruction for the request's mode.

    An empty body is replaced with the mode's placeholder so the model can
    still attempt a title-only summary.
    """
    if request.mode is SummaryMode.LONG:
        return _render_template(
            "long",
            title=request.title,
            body=request.body or cfg.missing_text_placeholder,
            paragraphs_min=cfg.long_paragraphs_min,
            paragraphs_max=cfg.long_paragraphs_max,
        )
    return _render_template(
        "short",
        title=request.title,
        body=request.body or cfg.missing_snippet_placeholder,
        bullets=cfg.short_bullets,
    )
