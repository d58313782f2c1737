"""Pytest fixtures for vynix tests."""

import logging
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from vynix.cache import ResponseCache
from vynix.config import reset_config
from vynix.config.schema import VynixConfig
from vynix.providers import ProviderRegistry

from helpers import FakeClock

ENV_VARS = (
    "VYNIX_CONFIG",
    "VYNIX_LOG_LEVEL",
    "VYNIX_PROVIDER",
    "FREE_MODE",
    "CACHE_MAX_ITEMS",
    "CACHE_TTL_MS",
    "CACHE_DISABLED",
    "OPENAI_API_KEY",
    "GROQ_API_KEY",
    "OPENROUTER_API_KEY",
    "OPENROUTER_REFERER",
    "GOOGLE_AI_KEY",
    "GEMINI_DEFAULT_MODEL",
    "LMSTUDIO_BASE_URL",
)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ResponseCache:
    """A small cache driven by the fake clock."""
    return ResponseCache(max_items=3, ttl_ms=1000, clock=clock)


@pytest.fixture
def default_config() -> VynixConfig:
    """Get default configuration."""
    return VynixConfig()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate tests from the caller's environment and singletons."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    ProviderRegistry.clear_cache()
    yield
    reset_config()
    ProviderRegistry.clear_cache()
    vynix_logger = logging.getLogger("vynix")
    vynix_logger.handlers.clear()
    vynix_logger.propagate = True


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Create a test config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""
default_provider = "mock"

[providers.openrouter]
default_model = "qwen/qwen3-coder:free"

[cache]
max_items = 50
ttl_ms = 60000

[retry]
max_attempts = 2
min_wait = 0
max_wait = 0
""")
    return config_path
