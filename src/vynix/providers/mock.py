"""Mock provider for testing."""

import hashlib
from typing import Any

from vynix.config.schema import ProviderType
from vynix.providers.base import ChatProvider, Context, ProviderResponse
from vynix.providers.registry import ProviderRegistry


class MockProvider(ChatProvider):
    """Mock chat provider for testing.

    Generates deterministic responses based on input, making tests
    predictable. Can be configured with canned responses for prompts
    containing a substring, and with errors to raise before succeeding.
    """

    def __init__(
        self,
        model: str = "mock-model",
        responses: dict[str, str] | None = None,
        failures: list[Exception] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize mock provider.

        Args:
            model: Model name to report.
            responses: Dict mapping prompt substrings to responses.
            failures: Exceptions raised, in order, by the first calls.
            **kwargs: Provider settings from configuration (ignored).
        """
        super().__init__(ProviderType.MOCK, model)
        self._responses = responses or {}
        self._failures = list(failures or [])
        self._call_history: list[dict[str, Any]] = []

    @property
    def call_history(self) -> list[dict[str, Any]]:
        """Get history of all calls made to this provider."""
        return self._call_history

    @property
    def call_count(self) -> int:
        """Get the number of calls made to this provider."""
        return len(self._call_history)

    def _generate_response(self, prompt: str) -> str:
        """Generate a deterministic response based on the prompt."""
        for key, response in self._responses.items():
            if key.lower() in prompt.lower():
                return response

        prompt_hash = hashlib.sha256(prompt.encode()).hexdigest()[:8]
        return f"Mock response for prompt (hash: {prompt_hash}): {prompt[:50]}"

    def _respond(self, method: str, prompt: str, context: Context | None) -> ProviderResponse:
        self._call_history.append(
            {"method": method, "prompt": prompt, "context": list(context or [])}
        )
        if self._failures:
            raise self._failures.pop(0)

        content = self._generate_response(prompt)
        return ProviderResponse(
            content=content,
            model=self.model_name,
            tokens_used=len(prompt.split()) + len(content.split()),
        )

    def invoke(self, prompt: str, context: Context | None = None) -> ProviderResponse:
        return self._respond("invoke", prompt, context)

    async def ainvoke(
        self, prompt: str, context: Context | None = None
    ) -> ProviderResponse:
        return self._respond("ainvoke", prompt, context)


@ProviderRegistry.register(ProviderType.MOCK)
def create_mock_provider(model: str = "mock-model", **kwargs: Any) -> MockProvider:
    """Factory function to create a mock provider."""
    return MockProvider(model=model, **kwargs)
