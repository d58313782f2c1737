"""Configuration loading from TOML files and environment variables."""

import contextlib
import os
from pathlib import Path

from pydantic import ValidationError

from vynix.config.defaults import (
    DEFAULT_CONFIG_TOML,
    ENV_CACHE_DISABLED,
    ENV_CACHE_MAX_ITEMS,
    ENV_CACHE_TTL_MS,
    ENV_DEFAULT_PROVIDER,
    ENV_FREE_MODE,
    ENV_GEMINI_DEFAULT_MODEL,
    ENV_GOOGLE_AI_KEY,
    ENV_GROQ_API_KEY,
    ENV_LMSTUDIO_BASE_URL,
    ENV_LOG_LEVEL,
    ENV_OPENAI_API_KEY,
    ENV_OPENROUTER_API_KEY,
    ENV_OPENROUTER_REFERER,
    ensure_directories,
    get_config_path,
)
from vynix.config.schema import ProviderType, VynixConfig
from vynix.exceptions import ConfigError, ConfigValidationError

# Global config instance (singleton)
_config: VynixConfig | None = None

_TRUTHY = ("1", "true", "yes")


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = True,
) -> VynixConfig:
    """Load configuration from TOML file and environment variables.

    Args:
        config_path: Path to config file. If None, uses default.
        create_if_missing: Create default config if file doesn't exist.

    Returns:
        Loaded and validated configuration.

    Raises:
        ConfigError: If configuration cannot be loaded.
        ConfigValidationError: If configuration is invalid.
    """
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib

    path = config_path or get_config_path()

    if not path.exists():
        if create_if_missing:
            if config_path is None:
                ensure_directories()
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(DEFAULT_CONFIG_TOML)
        else:
            return _apply_env_overrides(VynixConfig())

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    try:
        config = VynixConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e

    return _apply_env_overrides(config)


def _positive_int(value: str | None) -> int | None:
    """Parse a positive integer, returning None for anything else."""
    if not value:
        return None
    with contextlib.suppress(ValueError):
        number = int(value.strip())
        if number > 0:
            return number
    return None


def _apply_env_overrides(config: VynixConfig) -> VynixConfig:
    """Apply environment variable overrides to configuration."""
    provider_env = os.environ.get(ENV_DEFAULT_PROVIDER)
    if provider_env:
        with contextlib.suppress(ValueError):
            config.default_provider = ProviderType(provider_env.lower())

    free_mode = os.environ.get(ENV_FREE_MODE)
    if free_mode:
        config.free_mode = free_mode.lower() in _TRUTHY

    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        config.logging.level = log_level.upper()

    # Cache overrides; unparsable numbers keep the configured value
    max_items = _positive_int(os.environ.get(ENV_CACHE_MAX_ITEMS))
    if max_items is not None:
        config.cache.max_items = max_items

    ttl_ms = _positive_int(os.environ.get(ENV_CACHE_TTL_MS))
    if ttl_ms is not None:
        config.cache.ttl_ms = ttl_ms

    cache_disabled = os.environ.get(ENV_CACHE_DISABLED)
    if cache_disabled:
        config.cache.disabled = cache_disabled.lower() in _TRUTHY

    # API keys from environment
    providers = config.providers
    for provider_config, env_name in (
        (providers.openai, ENV_OPENAI_API_KEY),
        (providers.groq, ENV_GROQ_API_KEY),
        (providers.openrouter, ENV_OPENROUTER_API_KEY),
        (providers.google, ENV_GOOGLE_AI_KEY),
    ):
        env_key = os.environ.get(env_name)
        if env_key and not provider_config.api_key:
            provider_config.api_key = env_key

    referer = os.environ.get(ENV_OPENROUTER_REFERER)
    if referer:
        providers.openrouter.referer = referer

    gemini_model = os.environ.get(ENV_GEMINI_DEFAULT_MODEL)
    if gemini_model:
        providers.google.default_model = gemini_model

    lmstudio_url = os.environ.get(ENV_LMSTUDIO_BASE_URL)
    if lmstudio_url:
        providers.lmstudio.base_url = lmstudio_url

    return config


def get_config() -> VynixConfig:
    """Get the current configuration (singleton).

    Loads config on first access, caches for subsequent calls.

    Returns:
        Current configuration.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the configuration singleton (mainly for testing)."""
    global _config
    _config = None
