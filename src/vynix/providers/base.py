"""Base provider class and types for AI provider abstraction."""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, NoReturn

from vynix.cache.base import ContextMessage
from vynix.config.schema import ProviderType
from vynix.exceptions import (
    ProviderAuthError,
    ProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)

Context = Sequence[ContextMessage | Mapping[str, Any]]


@dataclass
class ProviderResponse:
    """Standardized response from any provider."""

    content: str
    model: str
    tokens_used: int | None = None


def build_messages(prompt: str, context: Context | None) -> list[tuple[str, str]]:
    """Build a chat transcript: prior turns followed by the new prompt."""
    messages = [
        (message.role, message.content)
        for message in map(ContextMessage.coerce, context or ())
    ]
    messages.append(("user", prompt))
    return messages


def raise_provider_error(label: str, e: Exception, timeout: float) -> NoReturn:
    """Convert a backend exception into the matching provider error."""
    error_str = str(e).lower()

    auth_markers = ("authentication", "invalid api key", "401")
    if any(marker in error_str for marker in auth_markers):
        raise ProviderAuthError(
            f"{label} authentication failed. Check your API key."
        ) from e

    if "rate limit" in error_str or "429" in error_str:
        raise ProviderRateLimitError(
            f"{label} rate limit exceeded. Try again later."
        ) from e

    if "timeout" in error_str or "timed out" in error_str:
        raise ProviderTimeoutError(f"{label} request timed out after {timeout}s") from e

    if isinstance(e, ConnectionError):
        raise e

    if "connection" in error_str:
        raise ConnectionError(f"{label} connection failed: {e}") from e

    raise ProviderError(f"{label} error: {e}") from e


class ChatProvider(ABC):
    """Abstract base class for chat completion providers.

    Every backend (LM Studio, OpenAI, Google, Groq, OpenRouter) answers a
    prompt given the prior turns of a conversation.
    """

    def __init__(self, provider_type: ProviderType, model_name: str) -> None:
        self._provider_type = provider_type
        self._model_name = model_name

    @property
    def provider_type(self) -> ProviderType:
        """Get the provider type."""
        return self._provider_type

    @property
    def model_name(self) -> str:
        """Get the model name."""
        return self._model_name

    @abstractmethod
    def invoke(self, prompt: str, context: Context | None = None) -> ProviderResponse:
        """Synchronously generate a reply.

        Args:
            prompt: The new user prompt.
            context: Prior conversation turns, oldest first.

        Returns:
            ProviderResponse with the generated content.

        Raises:
            ProviderError: If the invocation fails.
        """
        ...

    @abstractmethod
    async def ainvoke(
        self, prompt: str, context: Context | None = None
    ) -> ProviderResponse:
        """Asynchronously generate a reply."""
        ...

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}"
            f"(provider={self.provider_type.value}, model={self.model_name})"
        )
