"""Pydantic models for vynix configuration."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, PositiveInt


class ProviderType(str, Enum):
    """Supported AI providers."""

    LMSTUDIO = "lmstudio"
    OPENAI = "openai"
    GOOGLE = "google"
    GROQ = "groq"
    OPENROUTER = "openrouter"
    MOCK = "mock"


class ProviderConfig(BaseModel):
    """Settings shared by every provider."""

    default_model: str
    base_url: str | None = None
    api_key: str | None = None  # Prefer the provider's env var
    timeout: PositiveFloat = 60.0
    max_tokens: PositiveInt = 1000
    temperature: float = 0.7


class LMStudioConfig(ProviderConfig):
    """LM Studio (local OpenAI-compatible server) configuration."""

    default_model: str = "openai/gpt-oss-20b"
    base_url: str | None = "http://127.0.0.1:1234/v1"
    timeout: PositiveFloat = 120.0


class OpenAIConfig(ProviderConfig):
    """OpenAI provider configuration."""

    default_model: str = "gpt-3.5-turbo"
    base_url: str | None = "https://api.openai.com/v1"


class GoogleConfig(ProviderConfig):
    """Google Gemini provider configuration."""

    default_model: str = "gemini-1.5-flash"


class GroqConfig(ProviderConfig):
    """Groq provider configuration."""

    default_model: str = "llama-3.1-8b-instant"
    base_url: str | None = "https://api.groq.com/openai/v1"


class OpenRouterConfig(ProviderConfig):
    """OpenRouter provider configuration."""

    default_model: str = "openai/gpt-oss-20b:free"
    base_url: str | None = "https://openrouter.ai/api/v1"
    max_tokens: PositiveInt = 2048
    referer: str = "https://vynix.app"
    title: str = "Vynix"


class ProvidersConfig(BaseModel):
    """Configuration for all AI providers."""

    lmstudio: LMStudioConfig = Field(default_factory=LMStudioConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    google: GoogleConfig = Field(default_factory=GoogleConfig)
    groq: GroqConfig = Field(default_factory=GroqConfig)
    openrouter: OpenRouterConfig = Field(default_factory=OpenRouterConfig)


class CacheConfig(BaseModel):
    """Response cache configuration."""

    max_items: PositiveInt = 500
    ttl_ms: PositiveInt = 86_400_000  # 24 hours
    disabled: bool = False
    cleanup_interval_seconds: PositiveFloat = 3600.0


class RetryConfig(BaseModel):
    """Retry policy for transient provider errors."""

    max_attempts: PositiveInt = 3
    min_wait: float = 1.0
    max_wait: float = 10.0


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: Path | None = None  # Default: no file logging
    json_format: bool = False


class VynixConfig(BaseModel):
    """Root configuration for vynix."""

    model_config = ConfigDict(
        use_enum_values=True, validate_default=True, validate_assignment=True
    )

    default_provider: ProviderType = ProviderType.LMSTUDIO
    free_mode: bool = False
    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
