"""AI provider abstraction layer.

This module provides a unified interface for the chat backends a
conversation can branch into (LM Studio, OpenAI, Google, Groq,
OpenRouter).

Usage:
    from vynix.providers import ProviderRegistry, ProviderType

    provider = ProviderRegistry.get(ProviderType.LMSTUDIO)
    response = provider.invoke("Explain recursion", context=[...])
    print(response.content)
"""

# Import providers to register them
from vynix.config.schema import ProviderType
from vynix.providers.base import ChatProvider, ProviderResponse, build_messages
from vynix.providers.google import GoogleProvider
from vynix.providers.mock import MockProvider
from vynix.providers.openai_compat import OpenAICompatibleProvider
from vynix.providers.registry import ProviderRegistry

__all__ = [
    # Base classes
    "ChatProvider",
    "ProviderResponse",
    "ProviderType",
    "build_messages",
    # Registry
    "ProviderRegistry",
    # Providers
    "GoogleProvider",
    "MockProvider",
    "OpenAICompatibleProvider",
]
