"""In-memory cache for AI generation results.

Usage:
    from vynix.cache import ResponseCache

    cache = ResponseCache(max_items=500, ttl_ms=86_400_000)

    cached = cache.get("openai", "gpt-4o-mini", prompt, context)
    if cached is None:
        result = generate(prompt, context)
        cache.set("openai", "gpt-4o-mini", prompt, context, result)
"""

from vynix.cache.base import CachedResponse, CacheEntry, ContextMessage
from vynix.cache.keys import EMPTY_CONTEXT, generate_cache_key, generate_context_hash
from vynix.cache.memory_cache import DEFAULT_MAX_ITEMS, DEFAULT_TTL_MS, ResponseCache
from vynix.cache.sweeper import CacheSweeper

__all__ = [
    # Data types
    "CachedResponse",
    "CacheEntry",
    "ContextMessage",
    # Store
    "ResponseCache",
    "CacheSweeper",
    "DEFAULT_MAX_ITEMS",
    "DEFAULT_TTL_MS",
    # Key generation
    "EMPTY_CONTEXT",
    "generate_cache_key",
    "generate_context_hash",
]
