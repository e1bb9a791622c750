"""Abstract interface for LLM completion backends."""

from __future__ import annotations

from abc import ABC, abstractmethod


class CompletionProvider(ABC):
    """Provider interface for JSON-mode text generation.

    Implementations send one prompt with the caller's credential and return
    the raw text content of the model's reply.
    """

    @abstractmethod
    async def complete_json(self, prompt: str, credential: str) -> str:
        """Return the model's JSON-mode reply text.

        Raises:
            UpstreamError: If the call fails or the reply has no content
        """
        raise NotImplementedError
