"""In-memory response cache with FIFO eviction and lazy TTL expiry."""

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Any

from vynix.cache.base import CachedResponse, CacheEntry
from vynix.cache.keys import ContextLike, generate_cache_key
from vynix.config.schema import CacheConfig
from vynix.utils.hashing import short_key
from vynix.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)

DEFAULT_MAX_ITEMS = 500
DEFAULT_TTL_MS = 86_400_000  # 24 hours


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class ResponseCache:
    """Bounded, expiring memoization of AI generation results.

    Entries are evicted strictly in insertion order once ``max_items`` is
    reached; reading an entry never changes its position. Expired entries
    are dropped when read, or in bulk by :meth:`cleanup`.

    Hit and miss counters are diagnostics only. They are reported by
    :meth:`stats` and never influence lookups, eviction or expiry.

    All operations take a single lock, so a capacity check, eviction and
    insertion happen as one step even when several threads share the
    cache.

    Attributes:
        max_items: Maximum number of entries held at once.
        ttl: Entry lifetime in milliseconds.
        disabled: When True, every get misses and every set is a no-op.
    """

    def __init__(
        self,
        max_items: int = DEFAULT_MAX_ITEMS,
        ttl_ms: int = DEFAULT_TTL_MS,
        disabled: bool = False,
        *,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            max_items: Positive entry limit.
            ttl_ms: Positive entry lifetime in milliseconds.
            disabled: Bypass caching entirely.
            clock: Millisecond clock; defaults to a monotonic clock.
        """
        if max_items < 1:
            raise ValueError(f"max_items must be positive, got {max_items}")
        if ttl_ms < 1:
            raise ValueError(f"ttl_ms must be positive, got {ttl_ms}")

        self.max_items = max_items
        self.ttl = ttl_ms
        self.disabled = disabled
        self._clock = clock or _monotonic_ms
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.RLock()

        self._hits = 0
        self._misses = 0

    @classmethod
    def from_config(
        cls,
        config: CacheConfig,
        *,
        clock: Callable[[], float] | None = None,
    ) -> "ResponseCache":
        """Create a cache from the ``[cache]`` configuration section."""
        return cls(
            max_items=config.max_items,
            ttl_ms=config.ttl_ms,
            disabled=config.disabled,
            clock=clock,
        )

    def get(
        self,
        provider: str,
        model: str | None,
        prompt: str,
        context: ContextLike | None = None,
    ) -> CachedResponse | None:
        """Look up a cached response.

        Returns:
            A copy of the stored payload, or None on a miss. An expired
            entry is deleted and reported as a miss.
        """
        if self.disabled:
            return None

        key = generate_cache_key(provider, model, prompt, context)

        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            if entry.is_expired(self._clock(), self.ttl):
                del self._entries[key]
                self._misses += 1
                log_with_context(
                    logger, logging.DEBUG, "Cache entry expired", key=short_key(key)
                )
                return None

            self._hits += 1
            payload = entry.payload.copy()

        log_with_context(logger, logging.DEBUG, "Cache hit", key=short_key(key))
        return payload

    def set(
        self,
        provider: str,
        model: str | None,
        prompt: str,
        context: ContextLike | None,
        response: Any,
    ) -> None:
        """Store a generation result.

        Overwriting an existing key counts as a fresh insertion: its TTL
        restarts and it becomes the newest entry for eviction.

        Args:
            provider: Provider identifier.
            model: Requested model (used when the response has none).
            prompt: Prompt text.
            context: Ordered prior turns.
            response: Mapping or object exposing ``id``, ``content``,
                ``tokens``, ``provider`` and ``model``.
        """
        if self.disabled:
            return

        key = generate_cache_key(provider, model, prompt, context)
        payload = CachedResponse.normalize(response, model)

        with self._lock:
            self._entries.pop(key, None)

            if len(self._entries) >= self.max_items:
                evicted, _ = self._entries.popitem(last=False)
                log_with_context(
                    logger, logging.DEBUG, "Evicted oldest cache entry",
                    key=short_key(evicted),
                )

            self._entries[key] = CacheEntry(
                key=key, payload=payload, inserted_at=self._clock()
            )

        log_with_context(logger, logging.DEBUG, "Cached response", key=short_key(key))

    def clear(self) -> int:
        """Remove all entries.

        Returns:
            The number of entries removed.
        """
        with self._lock:
            count = len(self._entries)
            self._entries.clear()

        logger.info("Cache cleared (%d entries)", count)
        return count

    def cleanup(self) -> int:
        """Remove every expired entry.

        Returns:
            The number of entries removed.
        """
        with self._lock:
            now = self._clock()
            expired = [
                key
                for key, entry in self._entries.items()
                if entry.is_expired(now, self.ttl)
            ]
            for key in expired:
                del self._entries[key]

        if expired:
            logger.info("Cleaned up %d expired cache entries", len(expired))
        return len(expired)

    def stats(self) -> dict[str, Any]:
        """Get a read-only snapshot of the cache state.

        ``expired_entries`` counts stale entries still held; they are not
        removed.
        """
        with self._lock:
            now = self._clock()
            expired = sum(
                1 for entry in self._entries.values() if entry.is_expired(now, self.ttl)
            )
            total = len(self._entries)
            hits, misses = self._hits, self._misses

        return {
            "total_entries": total,
            "expired_entries": expired,
            "max_items": self.max_items,
            "ttl": self.ttl,
            "disabled": self.disabled,
            "hits": hits,
            "misses": misses,
        }

    def __repr__(self) -> str:
        return (
            f"ResponseCache(max_items={self.max_items}, ttl={self.ttl}, "
            f"disabled={self.disabled})"
        )
