"""Background sweeper that purges expired cache entries on an interval."""

import threading
from typing import Any

from vynix.cache.memory_cache import ResponseCache
from vynix.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_INTERVAL_SECONDS = 3600.0


class CacheSweeper:
    """Periodically calls :meth:`ResponseCache.cleanup` on a daemon thread.

    The cache stays correct without a sweeper; this only bounds memory
    when entries are written and never read again.

    Usage:
        with CacheSweeper(cache, interval_seconds=600):
            run_session()
    """

    def __init__(
        self,
        cache: ResponseCache,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError(
                f"interval_seconds must be positive, got {interval_seconds}"
            )
        self._cache = cache
        self._interval = interval_seconds
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start sweeping. Calling start on a running sweeper does nothing."""
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="vynix-cache-sweeper", daemon=True
        )
        self._thread.start()
        logger.debug("Cache sweeper started (every %ss)", self._interval)

    def stop(self, timeout: float | None = None) -> None:
        """Stop sweeping and wait for the thread to exit."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
            logger.debug("Cache sweeper stopped")

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            self._cache.cleanup()

    def __enter__(self) -> "CacheSweeper":
        self.start()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.stop()
