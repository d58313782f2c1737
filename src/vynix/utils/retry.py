"""Retry controllers for provider calls using tenacity."""

from tenacity import (
    AsyncRetrying,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from vynix.exceptions import ProviderRateLimitError, ProviderTimeoutError

TRANSIENT_ERRORS: tuple[type[Exception], ...] = (
    ProviderRateLimitError,
    ProviderTimeoutError,
    ConnectionError,
)


def retrying(
    max_attempts: int = 3,
    min_wait: float = 1.0,
    max_wait: float = 10.0,
) -> Retrying:
    """Build a ``Retrying`` controller for transient provider errors."""
    return Retrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        reraise=True,
    )


def async_retrying(
    max_attempts: int = 3,
    min_wait: float = 1.0,
    max_wait: float = 10.0,
) -> AsyncRetrying:
    """Async counterpart of :func:`retrying`."""
    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        reraise=True,
    )
