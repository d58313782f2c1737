"""Configuration management."""

from vynix.config.loader import get_config, load_config, reset_config
from vynix.config.schema import CacheConfig, ProviderType, VynixConfig

__all__ = [
    "CacheConfig",
    "ProviderType",
    "VynixConfig",
    "get_config",
    "load_config",
    "reset_config",
]
