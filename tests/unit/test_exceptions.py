"""Tests for exception hierarchy."""

import pytest

from vynix.exceptions import (
    ConfigError,
    ConfigValidationError,
    EmptyResponseError,
    FreeModeError,
    ProviderAuthError,
    ProviderError,
    ProviderNotAvailableError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    VynixError,
)


class TestVynixError:
    """Tests for base VynixError."""

    def test_default_message(self) -> None:
        error = VynixError()
        assert str(error) == "An error occurred"
        assert error.user_message == "An error occurred"
        assert error.exit_code == 1

    def test_custom_message(self) -> None:
        error = VynixError("Custom error")
        assert str(error) == "Custom error"

    def test_custom_user_message(self) -> None:
        """A per-instance user message leaves the class default alone."""
        error = VynixError("Internal", user_message="User-friendly message")
        assert error.user_message == "User-friendly message"
        assert VynixError.user_message == "An error occurred"


class TestProviderErrors:
    """Tests for provider-related errors."""

    @pytest.mark.parametrize(
        ("error_class", "exit_code"),
        [
            (ProviderError, 2),
            (ProviderNotAvailableError, 2),
            (ProviderRateLimitError, 3),
            (ProviderAuthError, 4),
            (ProviderTimeoutError, 5),
            (EmptyResponseError, 6),
            (FreeModeError, 7),
        ],
    )
    def test_exit_codes(self, error_class: type[ProviderError], exit_code: int) -> None:
        error = error_class()
        assert error.exit_code == exit_code
        assert isinstance(error, ProviderError)
        assert str(error) == error.user_message

    def test_free_mode_message(self) -> None:
        assert "free" in FreeModeError().user_message.lower()


class TestConfigErrors:
    """Tests for configuration errors."""

    def test_config_error(self) -> None:
        error = ConfigError()
        assert error.exit_code == 20
        assert isinstance(error, VynixError)

    def test_validation_error(self) -> None:
        error = ConfigValidationError("bad value")
        assert error.exit_code == 22
        assert isinstance(error, ConfigError)
        assert str(error) == "bad value"
