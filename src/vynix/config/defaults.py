"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

# Default directories
DEFAULT_CONFIG_DIR: Final[Path] = Path.home() / ".config" / "vynix"

# Default file paths
DEFAULT_CONFIG_FILE: Final[Path] = DEFAULT_CONFIG_DIR / "config.toml"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "VYNIX_CONFIG"
ENV_LOG_LEVEL: Final[str] = "VYNIX_LOG_LEVEL"
ENV_DEFAULT_PROVIDER: Final[str] = "VYNIX_PROVIDER"
ENV_FREE_MODE: Final[str] = "FREE_MODE"

# Cache environment variables
ENV_CACHE_MAX_ITEMS: Final[str] = "CACHE_MAX_ITEMS"
ENV_CACHE_TTL_MS: Final[str] = "CACHE_TTL_MS"
ENV_CACHE_DISABLED: Final[str] = "CACHE_DISABLED"

# Provider environment variables
ENV_OPENAI_API_KEY: Final[str] = "OPENAI_API_KEY"
ENV_GROQ_API_KEY: Final[str] = "GROQ_API_KEY"
ENV_OPENROUTER_API_KEY: Final[str] = "OPENROUTER_API_KEY"
ENV_OPENROUTER_REFERER: Final[str] = "OPENROUTER_REFERER"
ENV_GOOGLE_AI_KEY: Final[str] = "GOOGLE_AI_KEY"
ENV_GEMINI_DEFAULT_MODEL: Final[str] = "GEMINI_DEFAULT_MODEL"
ENV_LMSTUDIO_BASE_URL: Final[str] = "LMSTUDIO_BASE_URL"

# Default config content (TOML)
DEFAULT_CONFIG_TOML: Final[str] = """\
# vynix configuration

default_provider = "lmstudio"
free_mode = false

[providers.lmstudio]
default_model = "openai/gpt-oss-20b"
base_url = "http://127.0.0.1:1234/v1"
timeout = 120.0

[providers.openai]
default_model = "gpt-3.5-turbo"
# api_key = ""  # Use OPENAI_API_KEY env var

[providers.google]
default_model = "gemini-1.5-flash"
# api_key = ""  # Use GOOGLE_AI_KEY env var

[providers.groq]
default_model = "llama-3.1-8b-instant"
# api_key = ""  # Use GROQ_API_KEY env var

[providers.openrouter]
default_model = "openai/gpt-oss-20b:free"
max_tokens = 2048
# api_key = ""  # Use OPENROUTER_API_KEY env var

[cache]
max_items = 500
ttl_ms = 86400000  # 24 hours
disabled = false
cleanup_interval_seconds = 3600

[retry]
max_attempts = 3

[logging]
level = "INFO"
json_format = false
"""


def ensure_directories() -> None:
    """Ensure all default directories exist."""
    DEFAULT_CONFIG_DIR.mkdir(parents=True, exist_ok=True)


def get_config_path() -> Path:
    """Get the configuration file path."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE
