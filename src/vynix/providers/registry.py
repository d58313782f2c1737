"""Provider registry for creating and reusing provider instances."""

from collections.abc import Callable
from typing import Any

from vynix.config.schema import ProviderType
from vynix.exceptions import ProviderError, ProviderNotAvailableError, VynixError
from vynix.providers.base import ChatProvider

# Type for provider factory functions
ProviderFactory = Callable[..., ChatProvider]


class ProviderRegistry:
    """Factory for creating and reusing provider instances.

    Usage:
        @ProviderRegistry.register(ProviderType.GROQ)
        def create_groq(model: str = "llama-3.1-8b-instant", **kwargs) -> ChatProvider:
            return OpenAICompatibleProvider(ProviderType.GROQ, model, **kwargs)

        provider = ProviderRegistry.get(ProviderType.GROQ, model="llama-3.1-70b-versatile")
    """

    _factories: dict[ProviderType, ProviderFactory] = {}
    _instances: dict[str, ChatProvider] = {}

    @classmethod
    def register(
        cls, provider_type: ProviderType
    ) -> Callable[[ProviderFactory], ProviderFactory]:
        """Decorator to register a provider factory."""

        def decorator(factory: ProviderFactory) -> ProviderFactory:
            cls._factories[provider_type] = factory
            return factory

        return decorator

    @classmethod
    def get(
        cls,
        provider_type: ProviderType,
        model: str | None = None,
        *,
        use_cache: bool = True,
        **kwargs: Any,
    ) -> ChatProvider:
        """Get or create a provider instance.

        Args:
            provider_type: Type of provider to get.
            model: Model name (uses provider default if None).
            use_cache: Whether to reuse instances with the same settings.
            **kwargs: Additional arguments for the provider factory.

        Returns:
            Provider instance.

        Raises:
            ProviderNotAvailableError: If provider type is not registered.
            ProviderError: If provider creation fails.
        """
        factory = cls._factories.get(provider_type)
        if factory is None:
            available = [p.value for p in cls._factories]
            raise ProviderNotAvailableError(
                f"Provider '{provider_type.value}' is not registered. "
                f"Available providers: {available}"
            )

        instance_key = cls._build_instance_key(provider_type, model, **kwargs)
        if use_cache and instance_key in cls._instances:
            return cls._instances[instance_key]

        try:
            if model is not None:
                instance = factory(model=model, **kwargs)
            else:
                instance = factory(**kwargs)
        except VynixError:
            raise
        except Exception as e:
            raise ProviderError(
                f"Failed to create provider '{provider_type.value}': {e}"
            ) from e

        if use_cache:
            cls._instances[instance_key] = instance

        return instance

    @classmethod
    def _build_instance_key(
        cls,
        provider_type: ProviderType,
        model: str | None,
        **kwargs: Any,
    ) -> str:
        sorted_kwargs = sorted(kwargs.items())
        kwargs_str = ",".join(f"{k}={v}" for k, v in sorted_kwargs)
        return f"{provider_type.value}:{model or 'default'}:{kwargs_str}"

    @classmethod
    def clear_cache(cls) -> None:
        """Drop all reused provider instances."""
        cls._instances.clear()
