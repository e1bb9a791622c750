"""Groq provider using the OpenAI-compatible chat completions API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ...config import LoggingConfig, ProviderConfig, SummaryConfig
from ...errors import UpstreamError
from ...logging_utils import log_event, redact_text, truncate_text
from .base import CompletionProvider


class GroqProvider(CompletionProvider):
    """Sends prompts in strict JSON-object output mode.

    The credential is supplied per call (bring-your-own-key) and is never stored
    on the instance or logged.
    """

    def __init__(
        self,
        cfg: ProviderConfig,
        summary_cfg: SummaryConfig,
        log_cfg: LoggingConfig,
        llm_logger: logging.Logger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.cfg = cfg
        self.summary_cfg = summary_cfg
        self.log_cfg = log_cfg
        self.llm_logger = llm_logger
        self.transport = transport

    async def complete_json(self, prompt: str, credential: str) -> str:
        payload = {
            "model": self.cfg.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.summary_cfg.temperature,
            "max_tokens": self.summary_cfg.max_output_tokens,
            "response_format": {"type": "json_object"},
        }
        try:
            data = await self._post(payload, credential)
        except httpx.HTTPError as exc:
            self._log_llm_response("provider_error", str(exc), prompt)
            raise UpstreamError(f"Model provider request failed: {type(exc).__name__}") from exc

        content = _extract_text(data)
        if not content.strip():
            self._log_llm_response("empty_response", "", prompt)
            raise UpstreamError("Empty response from model provider")

        self._log_llm_response("ok", content, prompt)
        return content

    async def _post(self, payload: dict[str, Any], credential: str) -> dict[str, Any]:
        url = f"{self.cfg.base_url.rstrip('/')}/chat/completions"
        headers = {"Authorization": f"Bearer {credential}"}
        async with httpx.AsyncClient(
            timeout=self.cfg.timeout_seconds,
            trust_env=self.cfg.trust_env,
            transport=self.transport,
        ) as client:
            resp = await client.post(url, headers=headers, json=payload)
            resp.raise_for_status()
            try:
                return resp.json()
            except ValueError as exc:
                raise httpx.DecodingError("Provider returned a non-JSON body") from exc

    def _log_llm_response(self, status: str, content: str, prompt: str) -> None:
        if self.llm_logger is None:
            return
        detail = self.log_cfg.llm_log_detail
        redaction = self.log_cfg.llm_log_redaction
        payload = {
            "event": "llm_response",
            "status": status,
            "model": self.cfg.model,
        }
        if detail == "summary_only":
            payload["raw_response"] = ""
        elif detail == "prompt_response":
            payload["raw_prompt"] = truncate_text(redact_text(prompt, redaction))
            payload["raw_response"] = truncate_text(redact_text(content, redaction))
        else:
            payload["raw_response"] = truncate_text(redact_text(content, redaction))
        log_event(self.llm_logger, "LLM response", **payload)


def _extract_text(data: dict[str, Any]) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content if isinstance(content, str) else ""
