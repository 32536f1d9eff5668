"""
Test Configuration
==================

Pytest configuration with fixtures shared by the unit tests.
Provides test settings, HTML source files and stub render engines.
"""

import os

# Must be set before html_convert configures logging on import
os.environ.setdefault("HTML_CONVERT_ENVIRONMENT", "testing")

import pytest
from pathlib import Path
from typing import Callable, Generator
from unittest.mock import patch

from pydantic_settings import SettingsConfigDict

from html_convert.config import settings as settings_module
from html_convert.config.settings import Settings
from tests.utils.mocks import StubRenderEngine


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    environment: str = "testing"
    log_level: str = "DEBUG"
    playwright_headless: bool = True
    render_timeout_ms: int = 5000

    model_config = SettingsConfigDict(env_file=".env.test")


@pytest.fixture(scope="session")
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture(scope="session", autouse=True)
def override_settings(test_settings: TestSettings) -> Generator[TestSettings, None, None]:
    """Override application settings for testing."""
    with patch.object(settings_module, "settings", test_settings):
        yield test_settings


@pytest.fixture
def stub_engine() -> StubRenderEngine:
    """Deterministic render engine returning fixed bytes."""
    return StubRenderEngine()


@pytest.fixture
def write_html(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing HTML text to a file under tmp_path."""

    def _write(content: str, name: str = "source.html", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding=encoding)
        return path

    return _write


@pytest.fixture
def greeting_html(write_html: Callable[..., Path]) -> Path:
    """HTML source with a single {{name}} marker."""
    return write_html("<h1>Hello {{name}}</h1>", name="greeting.html")
