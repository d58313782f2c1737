"""OpenAI-compatible chat providers (LM Studio, OpenAI, Groq, OpenRouter).

All four speak the ``/chat/completions`` protocol, so one LangChain
``ChatOpenAI`` client pointed at a different base URL serves each of them.

Requires langchain-openai:
    pip install vynix[openai]
"""

from typing import Any

from vynix.config.schema import ProviderType
from vynix.exceptions import ProviderAuthError, ProviderError
from vynix.providers.base import (
    ChatProvider,
    Context,
    ProviderResponse,
    build_messages,
    raise_provider_error,
)
from vynix.providers.registry import ProviderRegistry

LMSTUDIO_PLACEHOLDER_KEY = "lm-studio"

_LABELS = {
    ProviderType.LMSTUDIO: "LM Studio",
    ProviderType.OPENAI: "OpenAI",
    ProviderType.GROQ: "Groq",
    ProviderType.OPENROUTER: "OpenRouter",
}


class OpenAICompatibleProvider(ChatProvider):
    """Chat provider for any OpenAI-compatible endpoint."""

    def __init__(
        self,
        provider_type: ProviderType,
        model: str,
        *,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float = 60.0,
        max_tokens: int = 1000,
        temperature: float = 0.7,
        default_headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            provider_type: Which backend this instance talks to.
            model: Chat model name.
            base_url: API root, e.g. ``http://127.0.0.1:1234/v1``.
            api_key: API key; the local LM Studio server needs none.
            timeout: Request timeout in seconds.
            max_tokens: Completion token limit.
            temperature: Sampling temperature.
            default_headers: Extra headers sent with every request.
        """
        super().__init__(provider_type, model)
        self._label = _LABELS.get(provider_type, provider_type.value)
        self._base_url = base_url
        self._timeout = timeout
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._default_headers = default_headers or {}

        if provider_type == ProviderType.LMSTUDIO:
            api_key = api_key or LMSTUDIO_PLACEHOLDER_KEY
        if not api_key:
            raise ProviderAuthError(f"{self._label} API key not provided.")
        self._api_key = api_key

        # Lazy initialization
        self._chat_model: Any = None

    @property
    def base_url(self) -> str | None:
        return self._base_url

    def _get_chat_model(self) -> Any:
        """Lazily initialize and return the chat model."""
        if self._chat_model is None:
            try:
                from langchain_openai import ChatOpenAI
            except ImportError as e:
                raise ProviderError(
                    "langchain-openai not installed. "
                    "Install with: pip install vynix[openai]"
                ) from e

            self._chat_model = ChatOpenAI(
                model=self.model_name,
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                default_headers=self._default_headers or None,
            )
        return self._chat_model

    def _to_response(self, message: Any) -> ProviderResponse:
        tokens_used = None
        usage = getattr(message, "usage_metadata", None)
        if usage:
            tokens_used = usage.get("total_tokens")

        metadata = getattr(message, "response_metadata", None) or {}
        return ProviderResponse(
            content=message.content,
            model=metadata.get("model_name") or self.model_name,
            tokens_used=tokens_used,
        )

    def invoke(self, prompt: str, context: Context | None = None) -> ProviderResponse:
        chat = self._get_chat_model()
        try:
            message = chat.invoke(build_messages(prompt, context))
        except Exception as e:
            raise_provider_error(self._label, e, self._timeout)
        return self._to_response(message)

    async def ainvoke(
        self, prompt: str, context: Context | None = None
    ) -> ProviderResponse:
        chat = self._get_chat_model()
        try:
            message = await chat.ainvoke(build_messages(prompt, context))
        except Exception as e:
            raise_provider_error(self._label, e, self._timeout)
        return self._to_response(message)


@ProviderRegistry.register(ProviderType.LMSTUDIO)
def create_lmstudio_provider(
    model: str = "openai/gpt-oss-20b", **kwargs: Any
) -> OpenAICompatibleProvider:
    """Create a provider for a local LM Studio server."""
    kwargs.setdefault("base_url", "http://127.0.0.1:1234/v1")
    kwargs.setdefault("timeout", 120.0)
    return OpenAICompatibleProvider(ProviderType.LMSTUDIO, model, **kwargs)


@ProviderRegistry.register(ProviderType.OPENAI)
def create_openai_provider(
    model: str = "gpt-3.5-turbo", **kwargs: Any
) -> OpenAICompatibleProvider:
    """Create an OpenAI provider."""
    return OpenAICompatibleProvider(ProviderType.OPENAI, model, **kwargs)


@ProviderRegistry.register(ProviderType.GROQ)
def create_groq_provider(
    model: str = "llama-3.1-8b-instant", **kwargs: Any
) -> OpenAICompatibleProvider:
    """Create a Groq provider."""
    kwargs.setdefault("base_url", "https://api.groq.com/openai/v1")
    return OpenAICompatibleProvider(ProviderType.GROQ, model, **kwargs)


@ProviderRegistry.register(ProviderType.OPENROUTER)
def create_openrouter_provider(
    model: str = "openai/gpt-oss-20b:free",
    *,
    referer: str = "https://vynix.app",
    title: str = "Vynix",
    **kwargs: Any,
) -> OpenAICompatibleProvider:
    """Create an OpenRouter provider with its attribution headers."""
    kwargs.setdefault("base_url", "https://openrouter.ai/api/v1")
    kwargs.setdefault("max_tokens", 2048)
    kwargs["default_headers"] = {"HTTP-Referer": referer, "X-Title": title}
    return OpenAICompatibleProvider(ProviderType.OPENROUTER, model, **kwargs)
