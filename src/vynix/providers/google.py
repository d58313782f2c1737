"""Google Gemini provider implementation using the google-genai SDK.

Requires google-genai:
    pip install vynix[google]
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


def gemini_contents(prompt: str, context: Context | None) -> list[dict[str, Any]]:
    """Gemini only knows user and model turns; everything else is a user turn."""
    return [
        {
            "role": "model" if role == "assistant" else "user",
            "parts": [{"text": content}],
        }
        for role, content in build_messages(prompt, context)
    ]


class GoogleProvider(ChatProvider):
    """Google Gemini provider."""

    def __init__(
        self,
        model: str = "gemini-1.5-flash",
        api_key: str | None = None,
        *,
        timeout: float = 60.0,
        max_tokens: int = 1000,
        temperature: float = 0.7,
        base_url: str | None = None,
    ) -> None:
        super().__init__(ProviderType.GOOGLE, model)
        if not api_key:
            raise ProviderAuthError(
                "Google AI key not provided. Set the GOOGLE_AI_KEY environment variable."
            )
        self._api_key = api_key
        self._timeout = timeout
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._base_url = base_url

        self._client: Any = None

    def _get_client(self) -> Any:
        """Lazily initialize and return the SDK client."""
        if self._client is None:
            try:
                from google import genai
                from google.genai import types
            except ImportError as e:
                raise ProviderError(
                    "google-genai not installed. Install with: pip install vynix[google]"
                ) from e

            # HttpOptions takes the timeout in milliseconds
            http_options = types.HttpOptions(
                base_url=self._base_url, timeout=int(self._timeout * 1000)
            )
            self._client = genai.Client(api_key=self._api_key, http_options=http_options)
        return self._client

    def _generation_config(self) -> Any:
        from google.genai import types

        return types.GenerateContentConfig(
            temperature=self._temperature,
            max_output_tokens=self._max_tokens,
        )

    def _to_response(self, response: Any) -> ProviderResponse:
        usage = getattr(response, "usage_metadata", None)
        return ProviderResponse(
            content=response.text or "",
            model=self.model_name,
            tokens_used=getattr(usage, "total_token_count", None),
        )

    def invoke(self, prompt: str, context: Context | None = None) -> ProviderResponse:
        client = self._get_client()
        try:
            response = client.models.generate_content(
                model=self.model_name,
                contents=gemini_contents(prompt, context),
                config=self._generation_config(),
            )
        except Exception as e:
            raise_provider_error("Google AI", e, self._timeout)
        return self._to_response(response)

    async def ainvoke(
        self, prompt: str, context: Context | None = None
    ) -> ProviderResponse:
        client = self._get_client()
        try:
            response = await client.aio.models.generate_content(
                model=self.model_name,
                contents=gemini_contents(prompt, context),
                config=self._generation_config(),
            )
        except Exception as e:
            raise_provider_error("Google AI", e, self._timeout)
        return self._to_response(response)


@ProviderRegistry.register(ProviderType.GOOGLE)
def create_google_provider(
    model: str = "gemini-1.5-flash", **kwargs: Any
) -> GoogleProvider:
    """Factory function to create a Google Gemini provider."""
    return GoogleProvider(model=model, **kwargs)
