"""Tests for the vynix command line interface."""

import itertools
import json
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from vynix import __version__
from vynix.cli import app
from vynix.cache import memory_cache
from vynix.cli.options import get_provider_name

runner = CliRunner()


@pytest.fixture
def cli_env(config_file: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI at the mock-provider test config."""
    monkeypatch.setenv("VYNIX_CONFIG", str(config_file))
    return config_file


class TestProviderOption:
    """Tests for provider name validation."""

    def test_default(self) -> None:
        assert get_provider_name(None) == "lmstudio"
        assert get_provider_name(None, "groq") == "groq"

    def test_case_insensitive(self) -> None:
        assert get_provider_name("OpenRouter") == "openrouter"

    def test_invalid(self) -> None:
        with pytest.raises(typer.BadParameter):
            get_provider_name("nope")


class TestCommands:
    """Tests for CLI commands backed by the mock provider."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_generate_json(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["generate", "Hello there", "--json"])

        assert result.exit_code == 0, result.output
        assert '"provider": "mock"' in result.output
        assert '"model": "mock-model"' in result.output
        assert '"cached": false' in result.output

    def test_generate_with_context(self, cli_env: Path, temp_dir: Path) -> None:
        context_file = temp_dir / "context.json"
        context_file.write_text(
            json.dumps([{"role": "user", "content": "Earlier question"}])
        )

        result = runner.invoke(
            app, ["generate", "Follow up", "--context", str(context_file), "--json"]
        )

        assert result.exit_code == 0, result.output
        assert "Follow up" in result.output

    def test_generate_rejects_bad_context(self, cli_env: Path, temp_dir: Path) -> None:
        context_file = temp_dir / "context.json"
        context_file.write_text('{"role": "user"}')

        result = runner.invoke(app, ["generate", "Hi", "--context", str(context_file)])

        assert result.exit_code != 0

    def test_generate_free_mode_error_exit_code(
        self, cli_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FREE_MODE", "true")

        result = runner.invoke(app, ["generate", "Hi", "--provider", "openai"])

        assert result.exit_code == 7
        assert "FREE_MODE" in result.output

    def test_chat_serves_repeat_from_cache(self, cli_env: Path) -> None:
        result = runner.invoke(
            app, ["chat"], input="Hello\n/reset\nHello\n/stats\n/quit\n"
        )

        assert result.exit_code == 0, result.output
        assert "(cached)" in result.output
        assert "Cache Statistics" in result.output

    def test_chat_clear(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["chat"], input="Hello\n/clear\n")

        assert result.exit_code == 0, result.output
        assert "Cleared 1 cache entries" in result.output

    def test_providers(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["providers"])

        assert result.exit_code == 0
        assert "openrouter" in result.output
        assert "gpt-4o" in result.output

    def test_providers_free_mode(
        self, cli_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FREE_MODE", "1")

        result = runner.invoke(app, ["providers"])

        assert "FREE_MODE is on" in result.output
        assert "gpt-4o" not in result.output

    def test_connection_mock(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["test-connection", "mock"])

        assert result.exit_code == 0, result.output
        assert "successful" in result.output

    def test_connection_failure(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["test-connection", "openai"])

        assert result.exit_code == 1
        assert "failed" in result.output

    def test_config_path(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["config", "--path"])

        assert result.exit_code == 0
        assert cli_env.name in result.output

    def test_config_show(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "Default provider: mock" in result.output
        assert "Max items: 50" in result.output

    def test_chat_cleanup_purges_expired(
        self, cli_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Each clock reading lands past the configured 60 s TTL."""
        ticks = itertools.count(step=120_000)
        monkeypatch.setattr(memory_cache, "_monotonic_ms", lambda: float(next(ticks)))

        result = runner.invoke(app, ["chat"], input="Hello\n/cleanup\n/quit\n")

        assert result.exit_code == 0, result.output
        assert "Removed 1 expired entries" in result.output


class TestInvalidConfig:
    """Commands report configuration errors with their exit code."""

    @pytest.fixture
    def invalid_config(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
        config_path = temp_dir / "invalid.toml"
        config_path.write_text("[cache]\nmax_items = 0\n")
        monkeypatch.setenv("VYNIX_CONFIG", str(config_path))
        return config_path

    @pytest.mark.parametrize(
        "args",
        [
            ["generate", "Hi"],
            ["chat"],
            ["providers"],
            ["test-connection", "mock"],
            ["config"],
        ],
    )
    def test_exit_code(self, invalid_config: Path, args: list[str]) -> None:
        result = runner.invoke(app, args, input="/quit\n")

        assert result.exit_code == 22
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "Invalid configuration" in result.output
