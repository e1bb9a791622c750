"""
Article summarization with a strict JSON contract.

One component serves both modes:
- short: title + feed snippet, exactly-three-bullets requested
- long: title + scraped text, three-to-four paragraphs requested

The credential gate and input validation run before any network call. The
model reply must parse as a JSON object with a list of strings under
"summary" and a closed-set label under "sentiment"; the list length is
requested in the prompt and passed through unchecked.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from .config import ProviderConfig, SummaryConfig
from .core.types import Sentiment, SummaryRequest, SummaryResult
from .errors import AuthError, ParseError, ValidationError
from .llm.prompts import build_summary_prompt
from .llm.providers.base import CompletionProvider
from .logging_utils import log_event

logger = logging.getLogger(__name__)


class Summarizer:
    def __init__(
        self,
        provider: CompletionProvider,
        provider_cfg: ProviderConfig,
        summary_cfg: SummaryConfig,
    ):
        self.provider = provider
        self.provider_cfg = provider_cfg
        self.summary_cfg = summary_cfg

    async def summarize(self, request: SummaryRequest, credential: str | None) -> SummaryResult:
        """Summarize one article.

        Args:
            request: Title, body and mode
            credential: Caller-supplied provider credential

        Returns:
            SummaryResult with summary strings and sentiment

        Raises:
            AuthError: Credential missing or without the expected prefix
            ValidationError: Both title and body are empty
            UpstreamError: Provider call failed or returned no content
            ParseError: Reply is not a JSON object of the expected shape
        """
        self.check_credential(credential)
        if not request.title.strip() and not request.body.strip():
            raise ValidationError("Missing article title or content")

        prompt = build_summary_prompt(request, self.summary_cfg)
        content = await self.provider.complete_json(prompt, credential)
        try:
            result = parse_summary_response(content)
        except ParseError:
            log_event(
                logger,
                "LLM parse error",
                level=logging.WARNING,
                event="llm_parse_error",
                mode=request.mode.value,
                title=request.title,
            )
            raise

        result.meta.update({"model": self.provider_cfg.model, "mode": request.mode.value})
        log_event(
            logger,
            "Summary complete",
            event="summary_complete",
            mode=request.mode.value,
            items=len(result.summary),
            sentiment=result.sentiment.value,
        )
        return result

    def check_credential(self, credential: str | None) -> None:
        """Raise AuthError unless the credential carries the provider prefix."""
        prefix = self.provider_cfg.credential_prefix
        if not credential or not credential.startswith(prefix):
            raise AuthError("Invalid or missing API key")


def parse_summary_response(content: str) -> SummaryResult:
    """Parse and shape-check a model reply.

    Raises:
        ParseError: If the reply is not a JSON object with a string list under
            "summary" and a known label under "sentiment"
    """
    try:
        obj = _parse_json_response(content)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Model response is not valid JSON: {exc.msg}") from exc

    if not isinstance(obj, dict):
        raise ParseError("Model response is not a JSON object")

    summary = obj.get("summary")
    if not isinstance(summary, list) or not all(isinstance(item, str) for item in summary):
        raise ParseError("Model response field 'summary' must be a list of strings")

    try:
        sentiment = Sentiment(obj.get("sentiment"))
    except ValueError as exc:
        raise ParseError(f"Model response has unknown sentiment: {obj.get('sentiment')!r}") from exc

    return SummaryResult(summary=[item.strip() for item in summary], sentiment=sentiment)


def _parse_json_response(content: str) -> Any:
    if not content:
        raise json.JSONDecodeError("Empty content", content or "", 0)
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        extracted = _extract_json_snippet(content)
        return json.loads(extracted)


def _extract_json_snippet(content: str) -> str:
    fence = _extract_fenced_json(content)
    if fence:
        return fence
    start = content.find("{")
    end = content.rfind("}")
    if start == -1 or end == -1 or end <= start:
        raise json.JSONDecodeError("No JSON object found", content, 0)
    return content[start : end + 1]


def _extract_fenced_json(content: str) -> str | None:
    lines = content.splitlines()
    start_idx = None
    for idx, line in enumerate(lines):
        if line.strip().startswith("```") and "json" in line.lower():
            start_idx = idx + 1
            break
    if start_idx is None:
        return None
    for idx in range(start_idx, len(lines)):
        if lines[idx].strip().startswith("```"):
            snippet = "\n".join(lines[start_idx:idx]).strip()
            return snippet or None
    return None
