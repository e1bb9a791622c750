"""LLM prompts and completion providers."""

from .prompts import build_summary_prompt
from .providers import CompletionProvider, GroqProvider, available_providers, create_provider

__all__ = [
    "CompletionProvider",
    "GroqProvider",
    "available_providers",
    "build_summary_prompt",
    "create_provider",
]
