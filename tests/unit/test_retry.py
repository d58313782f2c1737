"""Unit tests for retry utilities."""

from unittest.mock import Mock

import pytest

from vynix.exceptions import (
    ProviderAuthError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)
from vynix.utils.retry import async_retrying, retrying


def call_with_retry(func: Mock, max_attempts: int = 3) -> object:
    for attempt in retrying(max_attempts, min_wait=0, max_wait=0):
        with attempt:
            return func()
    raise AssertionError("unreachable")


class TestRetrying:
    """Tests for the synchronous retry controller."""

    def test_success_no_retry(self) -> None:
        """Successful calls run once."""
        mock_func = Mock(return_value="success")

        assert call_with_retry(mock_func) == "success"
        assert mock_func.call_count == 1

    @pytest.mark.parametrize(
        "error",
        [
            ProviderRateLimitError("Rate limited"),
            ProviderTimeoutError("Timeout"),
            ConnectionError("Refused"),
        ],
    )
    def test_retries_transient_errors(self, error: Exception) -> None:
        mock_func = Mock(side_effect=[error, "success"])

        assert call_with_retry(mock_func) == "success"
        assert mock_func.call_count == 2

    def test_no_retry_on_auth_error(self) -> None:
        """Authentication failures are not transient."""
        mock_func = Mock(side_effect=ProviderAuthError("Bad key"))

        with pytest.raises(ProviderAuthError):
            call_with_retry(mock_func)
        assert mock_func.call_count == 1

    def test_reraises_after_max_attempts(self) -> None:
        mock_func = Mock(side_effect=ProviderRateLimitError("Rate limited"))

        with pytest.raises(ProviderRateLimitError):
            call_with_retry(mock_func, max_attempts=2)
        assert mock_func.call_count == 2


class TestAsyncRetrying:
    """Tests for the asynchronous retry controller."""

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self) -> None:
        mock_func = Mock(side_effect=[ProviderTimeoutError("Timeout"), "success"])

        result = None
        async for attempt in async_retrying(3, min_wait=0, max_wait=0):
            with attempt:
                result = mock_func()

        assert result == "success"
        assert mock_func.call_count == 2
