"""Tests for the summarizer's credential gate, prompts and response contract."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from topic_news.config import LoggingConfig, ProviderConfig, SummaryConfig
from topic_news.core.types import Sentiment, SummaryMode, SummaryRequest
from topic_news.errors import AuthError, ParseError, UpstreamError, ValidationError
from topic_news.llm.prompts import build_summary_prompt
from topic_news.llm.providers.base import CompletionProvider
from topic_news.llm.providers.groq import GroqProvider
from topic_news.summarizer import Summarizer, parse_summary_response


VALID_KEY = "gsk_test_key"


class _FakeProvider(CompletionProvider):
    """Records prompts and replies with a canned payload."""

    def __init__(self, reply: str | Exception):
        self.reply = reply
        self.prompts: list[str] = []

    async def complete_json(self, prompt: str, credential: str) -> str:
        self.prompts.append(prompt)
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


def _summarizer(provider: CompletionProvider) -> Summarizer:
    return Summarizer(provider, ProviderConfig(), SummaryConfig())


def _reply(summary, sentiment="Neutral") -> str:
    return json.dumps({"summary": summary, "sentiment": sentiment})


@pytest.mark.parametrize("credential", [None, "", "abc", "sk-openai-style"])
def test_bad_credential_fails_before_any_call(credential):
    provider = _FakeProvider(_reply(["a", "b", "c"]))

    with pytest.raises(AuthError):
        asyncio.run(_summarizer(provider).summarize(SummaryRequest("Title", "Body"), credential))

    assert provider.prompts == []


def test_empty_title_and_body_is_validation_error():
    provider = _FakeProvider(_reply(["a", "b", "c"]))

    with pytest.raises(ValidationError):
        asyncio.run(_summarizer(provider).summarize(SummaryRequest("  ", ""), VALID_KEY))

    assert provider.prompts == []


def test_short_form_returns_bullets_and_sentiment():
    provider = _FakeProvider(_reply(["One", "Two", "Three"], "Positive"))

    result = asyncio.run(
        _summarizer(provider).summarize(SummaryRequest("Chip sales soar", "Record quarter"), VALID_KEY)
    )

    assert result.summary == ["One", "Two", "Three"]
    assert result.sentiment is Sentiment.POSITIVE
    assert result.meta["mode"] == "short"
    assert "exactly 3 bullet points" in provider.prompts[0]
    assert "Title: Chip sales soar" in provider.prompts[0]
    assert "Snippet: Record quarter" in provider.prompts[0]


def test_long_form_prompt_requests_paragraphs():
    provider = _FakeProvider(_reply(["p1", "p2", "p3"], "Negative"))

    result = asyncio.run(
        _summarizer(provider).summarize(
            SummaryRequest("Plant closes", "Full article text", SummaryMode.LONG),
            VALID_KEY,
        )
    )

    assert result.sentiment is Sentiment.NEGATIVE
    assert "3 to 4 full paragraphs" in provider.prompts[0]
    assert "Full article text" in provider.prompts[0]


def test_cardinality_is_not_revalidated():
    provider = _FakeProvider(_reply(["only one"]))

    result = asyncio.run(_summarizer(provider).summarize(SummaryRequest("T", "B"), VALID_KEY))

    assert result.summary == ["only one"]


def test_title_only_request_uses_snippet_placeholder():
    prompt = build_summary_prompt(SummaryRequest("Headline only", ""), SummaryConfig())

    assert "Snippet: No snippet available." in prompt


def test_prompt_keeps_braces_in_user_text():
    prompt = build_summary_prompt(SummaryRequest("Use {curly} braces", "x"), SummaryConfig())

    assert "Use {curly} braces" in prompt
    assert '{"summary":' in prompt


def test_provider_failure_propagates_as_upstream_error():
    provider = _FakeProvider(UpstreamError("Empty response from model provider"))

    with pytest.raises(UpstreamError):
        asyncio.run(_summarizer(provider).summarize(SummaryRequest("T", "B"), VALID_KEY))


@pytest.mark.parametrize(
    "content",
    [
        "not json at all",
        "[1, 2, 3]",
        json.dumps({"summary": "a string", "sentiment": "Neutral"}),
        json.dumps({"summary": ["ok", 3], "sentiment": "Neutral"}),
        json.dumps({"summary": ["ok"], "sentiment": "Mixed"}),
        json.dumps({"summary": ["ok"]}),
    ],
)
def test_malformed_reply_is_parse_error(content):
    provider = _FakeProvider(content)

    with pytest.raises(ParseError):
        asyncio.run(_summarizer(provider).summarize(SummaryRequest("T", "B"), VALID_KEY))


def test_parse_accepts_fenced_json():
    content = 'Here you go:\n```json\n{"summary": ["a"], "sentiment": "Positive"}\n```'

    result = parse_summary_response(content)

    assert result.summary == ["a"]
    assert result.sentiment is Sentiment.POSITIVE


def _groq(handler) -> GroqProvider:
    return GroqProvider(
        ProviderConfig(),
        SummaryConfig(),
        LoggingConfig(),
        transport=httpx.MockTransport(handler),
    )


def test_groq_provider_sends_json_mode_request():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"content": _reply(["a", "b", "c"])}}]})

    content = asyncio.run(_groq(handler).complete_json("prompt text", VALID_KEY))

    assert json.loads(content)["summary"] == ["a", "b", "c"]
    request = seen[0]
    assert request.url == "https://api.groq.com/openai/v1/chat/completions"
    assert request.headers["Authorization"] == f"Bearer {VALID_KEY}"
    body = json.loads(request.content)
    assert body["response_format"] == {"type": "json_object"}
    assert body["messages"] == [{"role": "user", "content": "prompt text"}]


def test_groq_provider_error_status_is_upstream_error():
    provider = _groq(lambda request: httpx.Response(401, json={"error": {"message": "bad key"}}))

    with pytest.raises(UpstreamError):
        asyncio.run(provider.complete_json("prompt", VALID_KEY))


@pytest.mark.parametrize("content", ["", None, {"summary": []}, ["a"]])
def test_groq_provider_empty_or_non_text_content_is_upstream_error(content):
    provider = _groq(lambda request: httpx.Response(200, json={"choices": [{"message": {"content": content}}]}))

    with pytest.raises(UpstreamError):
        asyncio.run(provider.complete_json("prompt", VALID_KEY))


def test_end_to_end_with_groq_provider():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": [{"message": {"content": _reply(["x", "y", "z"], "Neutral")}}]})

    summarizer = Summarizer(_groq(handler), ProviderConfig(), SummaryConfig())

    result = asyncio.run(summarizer.summarize(SummaryRequest("Title", "Body"), VALID_KEY))

    assert result.to_dict() == {"summary": ["x", "y", "z"], "sentiment": "Neutral"}
