"""
LLM provider implementations.

To add a new provider:
1. Inherit from CompletionProvider
2. Implement complete_json()
3. Register the class in factory._PROVIDER_REGISTRY
"""

from .base import CompletionProvider
from .factory import available_providers, create_provider
from .groq import GroqProvider

__all__ = ["CompletionProvider", "GroqProvider", "available_providers", "create_provider"]
