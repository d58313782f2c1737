"""Exception hierarchy for vynix."""


class VynixError(Exception):
    """Base exception for all vynix errors."""

    exit_code: int = 1
    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Provider Errors
class ProviderError(VynixError):
    """AI provider-related errors."""

    exit_code = 2
    user_message = "AI provider error"


class ProviderNotAvailableError(ProviderError):
    """Provider is not registered or not configured."""

    exit_code = 2
    user_message = "AI provider is not available"


class ProviderRateLimitError(ProviderError):
    """Rate limit exceeded."""

    exit_code = 3
    user_message = "Rate limit exceeded. Try again later."


class ProviderAuthError(ProviderError):
    """Authentication failed."""

    exit_code = 4
    user_message = "Authentication failed. Check your API key."


class ProviderTimeoutError(ProviderError):
    """Request timed out."""

    exit_code = 5
    user_message = "Request timed out. Try again."


class EmptyResponseError(ProviderError):
    """Provider answered with no content."""

    exit_code = 6
    user_message = "AI provider returned an empty response"


class FreeModeError(ProviderError):
    """Provider or model is not allowed while free mode is on."""

    exit_code = 7
    user_message = "Only LM Studio and free OpenRouter models are available in free mode"


# Config Errors
class ConfigError(VynixError):
    """Configuration errors."""

    exit_code = 20
    user_message = "Configuration error"


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    exit_code = 22
    user_message = "Invalid configuration"
