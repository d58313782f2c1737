"""AI generation service with response caching.

The service checks the response cache before calling a provider and
stores the result only after a successful generation. Concurrent misses
for the same request are not de-duplicated: each calls the provider and
the last write wins.
"""

import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import Any

from vynix.cache import CachedResponse, ResponseCache
from vynix.cache.keys import ContextLike
from vynix.config.schema import ProviderType, VynixConfig
from vynix.exceptions import (
    EmptyResponseError,
    FreeModeError,
    ProviderError,
    ProviderNotAvailableError,
    VynixError,
)
from vynix.providers import ChatProvider, ProviderRegistry, ProviderResponse
from vynix.utils.logging import get_logger, log_with_context
from vynix.utils.retry import async_retrying, retrying

logger = get_logger(__name__)

ProviderFactory = Callable[[ProviderType, str | None], ChatProvider]

FREE_PROVIDERS = (ProviderType.LMSTUDIO.value, ProviderType.OPENROUTER.value)
PUBLIC_PROVIDERS = (
    ProviderType.LMSTUDIO,
    ProviderType.OPENAI,
    ProviderType.GOOGLE,
    ProviderType.GROQ,
    ProviderType.OPENROUTER,
)

KNOWN_MODELS: dict[str, list[str]] = {
    "google": [
        "gemini-1.5-flash",
        "gemini-1.5-flash-exp",
        "gemini-2.0-flash",
        "gemini-1.5-pro",
        "gemini-1.0-pro",
        "gemini-pro",
    ],
    "openai": ["gpt-4o", "gpt-4o-mini", "gpt-3.5-turbo"],
    "groq": ["llama-3.1-70b-versatile", "llama-3.1-8b-instant"],
    "lmstudio": ["openai/gpt-oss-20b"],
    "openrouter": [
        "openai/gpt-oss-20b:free",
        "z-ai/glm-4.5-air:free",
        "qwen/qwen3-coder:free",
        "moonshotai/kimi-k2:free",
        "cognitivecomputations/dolphin-mistral-24b-venice-edition:free",
        "google/gemma-3n-e2b-it:free",
    ],
}

CONNECTION_TEST_PROMPT = (
    "Hello, this is a connection test. Please respond with "
    "'Connection successful' if you can see this message."
)


@dataclass
class GenerationResult:
    """A generated (or cache-served) reply.

    Attributes:
        id: Response identifier.
        content: Generated text.
        tokens: Tokens used (0 when unknown).
        response_time: Milliseconds spent serving this request.
        provider: Provider identifier.
        model: Resolved model name.
        cached: Whether the reply came from the cache.
    """

    id: str
    content: str
    tokens: int
    response_time: int
    provider: str
    model: str
    cached: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def provider_settings(provider_type: ProviderType, config: VynixConfig) -> dict[str, Any]:
    """Collect the factory keyword arguments for a provider from config."""
    if provider_type == ProviderType.MOCK:
        return {}

    provider_config = getattr(config.providers, provider_type.value)
    return provider_config.model_dump(exclude={"default_model"}, exclude_none=True)


class AIService:
    """Generates replies through the configured providers, with caching."""

    def __init__(
        self,
        cache: ResponseCache,
        config: VynixConfig | None = None,
        *,
        provider_factory: ProviderFactory | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            cache: The process-wide response cache.
            config: Configuration; defaults to built-in defaults.
            provider_factory: Builds a provider for a type and model.
                Defaults to the provider registry fed from ``config``.
        """
        self.cache = cache
        self.config = config or VynixConfig()
        self._provider_factory = provider_factory or self._create_provider

    def _create_provider(self, provider_type: ProviderType, model: str | None) -> ChatProvider:
        if provider_type != ProviderType.MOCK:
            provider_config = getattr(self.config.providers, provider_type.value)
            model = model or provider_config.default_model
        return ProviderRegistry.get(
            provider_type, model=model, **provider_settings(provider_type, self.config)
        )

    def _check_free_mode(self, provider: str, model: str | None) -> None:
        if not self.config.free_mode:
            return
        if provider not in FREE_PROVIDERS:
            raise FreeModeError(
                f"Provider {provider} is not available in FREE_MODE. "
                "Only LM Studio and OpenRouter free models are allowed."
            )
        if provider == ProviderType.OPENROUTER.value and model and ":free" not in model:
            raise FreeModeError(
                f"Model {model} is not free. "
                "Only models ending with ':free' are allowed in FREE_MODE."
            )

    def _resolve_provider(self, provider: str, model: str | None) -> ChatProvider:
        try:
            provider_type = ProviderType(provider)
        except ValueError as e:
            raise ProviderNotAvailableError(f"Unsupported provider: {provider}") from e
        return self._provider_factory(provider_type, model)

    def _from_cache(
        self, cached: CachedResponse, provider: str, model: str | None, started: float
    ) -> GenerationResult:
        logger.info("Returning cached response")
        return GenerationResult(
            id=cached.id or str(uuid.uuid4()),
            content=cached.content or "",
            tokens=cached.tokens,
            response_time=_elapsed_ms(started),
            provider=cached.provider or provider,
            model=cached.model or model or "default",
            cached=True,
        )

    def _finish(
        self,
        response: ProviderResponse,
        provider: str,
        model: str | None,
        prompt: str,
        context: ContextLike | None,
        started: float,
    ) -> GenerationResult:
        if not response.content or not response.content.strip():
            raise EmptyResponseError("AI API returned empty response content")

        result = GenerationResult(
            id=str(uuid.uuid4()),
            content=response.content,
            tokens=response.tokens_used or 0,
            response_time=_elapsed_ms(started),
            provider=provider,
            model=response.model or model or "default",
        )
        self.cache.set(provider, model, prompt, context, result)
        return result

    def _wrap_error(self, provider: str, e: Exception) -> VynixError:
        log_with_context(
            logger, logging.ERROR, "AI service error", provider=provider, error=str(e)
        )
        if provider == ProviderType.LMSTUDIO.value:
            return ProviderNotAvailableError(
                f"LM Studio connection failed: {e}. "
                "Please ensure LM Studio is running and the model is loaded."
            )
        if isinstance(e, VynixError):
            return e
        return ProviderError(f"Failed to generate response: {e}")

    def generate(
        self,
        prompt: str,
        provider: str = ProviderType.LMSTUDIO.value,
        model: str | None = None,
        context: ContextLike | None = None,
    ) -> GenerationResult:
        """Generate a reply, serving it from the cache when possible.

        Args:
            prompt: The new user prompt.
            provider: Provider identifier.
            model: Model name; None selects the provider default.
            context: Prior conversation turns, oldest first.

        Returns:
            The generation result.

        Raises:
            FreeModeError: If free mode forbids the provider or model.
            ProviderError: If generation fails.
        """
        started = time.perf_counter()
        self._check_free_mode(provider, model)

        cached = self.cache.get(provider, model, prompt, context)
        if cached is not None:
            return self._from_cache(cached, provider, model, started)

        chat = self._resolve_provider(provider, model)
        retry = self.config.retry
        try:
            for attempt in retrying(retry.max_attempts, retry.min_wait, retry.max_wait):
                with attempt:
                    response = chat.invoke(prompt, context)
            return self._finish(response, provider, model, prompt, context, started)
        except Exception as e:
            wrapped = self._wrap_error(provider, e)
            if wrapped is e:
                raise
            raise wrapped from e

    async def agenerate(
        self,
        prompt: str,
        provider: str = ProviderType.LMSTUDIO.value,
        model: str | None = None,
        context: ContextLike | None = None,
    ) -> GenerationResult:
        """Asynchronous counterpart of :meth:`generate`.

        Cache access stays synchronous; only the provider call awaits.
        """
        started = time.perf_counter()
        self._check_free_mode(provider, model)

        cached = self.cache.get(provider, model, prompt, context)
        if cached is not None:
            return self._from_cache(cached, provider, model, started)

        chat = self._resolve_provider(provider, model)
        retry = self.config.retry
        try:
            async for attempt in async_retrying(
                retry.max_attempts, retry.min_wait, retry.max_wait
            ):
                with attempt:
                    response = await chat.ainvoke(prompt, context)
            return self._finish(response, provider, model, prompt, context, started)
        except Exception as e:
            wrapped = self._wrap_error(provider, e)
            if wrapped is e:
                raise
            raise wrapped from e

    def test_connection(self, provider: str) -> dict[str, Any]:
        """Send a short test prompt and report whether it succeeded."""
        try:
            result = self.generate(CONNECTION_TEST_PROMPT, provider, None, [])
        except VynixError as e:
            return {"success": False, "error": str(e), "provider": provider}
        return {"success": True, "response": result.content, "provider": provider}

    def available_providers(self) -> list[str]:
        """List provider identifiers callers may choose from."""
        providers = [p.value for p in PUBLIC_PROVIDERS]
        if self.config.free_mode:
            return [p for p in providers if p in FREE_PROVIDERS]
        return providers

    def models(self, provider: str) -> list[str]:
        """List known models for a provider, filtered by free mode."""
        models = KNOWN_MODELS.get(provider, [])
        if not self.config.free_mode:
            return list(models)
        if provider == ProviderType.OPENROUTER.value:
            return [m for m in models if ":free" in m]
        if provider == ProviderType.LMSTUDIO.value:
            return list(models)
        return []

    def cache_stats(self) -> dict[str, Any]:
        return self.cache.stats()

    def clear_cache(self) -> int:
        return self.cache.clear()


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def create_service(config: VynixConfig) -> AIService:
    """Build the service and its cache from configuration."""
    return AIService(ResponseCache.from_config(config.cache), config)
