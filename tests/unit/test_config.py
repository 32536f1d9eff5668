"""
Unit Tests for Configuration
============================

Tests for settings validation, environment parsing and logging configuration.
"""

import pytest
from pathlib import Path
from pydantic import ValidationError

from html_convert.config import settings as settings_module
from html_convert.config.logging import get_logger, get_logging_config
from html_convert.config.settings import Settings, get_settings, reload_settings


class TestSettings:
    """Test settings defaults and validators."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("HTML_CONVERT_ENVIRONMENT", raising=False)
        settings = Settings(_env_file=None)

        assert settings.environment == "development"
        assert settings.default_encoding == "utf-8"
        assert settings.playwright_headless is True
        assert settings.render_timeout_ms == 30000
        assert settings.wait_until == "load"
        assert settings.optimize_images is False
        assert "--no-sandbox" in settings.browser_args

    def test_only_consumed_fields_declared(self):
        assert "app_name" not in Settings.model_fields
        assert "app_version" not in Settings.model_fields

    def test_invalid_environment(self):
        with pytest.raises(ValidationError, match="Environment must be one of"):
            Settings(_env_file=None, environment="staging")

    def test_log_level_upper_cased(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="verbose")

    def test_invalid_wait_until(self):
        with pytest.raises(ValidationError, match="wait_until must be one of"):
            Settings(_env_file=None, wait_until="idle")

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, render_timeout_ms=0)

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("HTML_CONVERT_DEFAULT_ENCODING", "latin-1")
        monkeypatch.setenv("HTML_CONVERT_PLAYWRIGHT_HEADLESS", "false")

        settings = Settings(_env_file=None)

        assert settings.default_encoding == "latin-1"
        assert settings.playwright_headless is False

    def test_browser_args_comma_separated(self, monkeypatch):
        monkeypatch.setenv("HTML_CONVERT_BROWSER_ARGS", "--mute-audio, --no-sandbox")

        assert Settings(_env_file=None).browser_args == ["--mute-audio", "--no-sandbox"]

    def test_browser_args_json_list(self, monkeypatch):
        monkeypatch.setenv("HTML_CONVERT_BROWSER_ARGS", '["--disable-gpu"]')

        assert Settings(_env_file=None).browser_args == ["--disable-gpu"]

    def test_get_settings_is_cached(self, monkeypatch):
        monkeypatch.setattr(settings_module, "settings", None)

        assert get_settings() is get_settings()

    def test_reload_settings_rebuilds(self, monkeypatch):
        monkeypatch.setattr(settings_module, "settings", None)
        first = get_settings()

        reloaded = reload_settings()

        assert reloaded is not first
        assert get_settings() is reloaded


class TestLoggingConfig:
    """Test the logging dictConfig builder."""

    def test_testing_environment_uses_console_only(self):
        settings = Settings(_env_file=None, environment="testing", log_dir=Path("/tmp/logs"))

        config = get_logging_config(settings)

        assert set(config["handlers"]) == {"console"}
        assert config["loggers"]["html_convert"]["handlers"] == ["console"]

    def test_log_dir_adds_rotating_files(self, tmp_path):
        settings = Settings(_env_file=None, environment="development", log_dir=tmp_path)

        config = get_logging_config(settings)

        assert config["handlers"]["file"]["filename"] == f"{tmp_path}/html_convert.log"
        assert config["handlers"]["error_file"]["level"] == "ERROR"
        assert config["loggers"]["html_convert"]["handlers"] == ["console", "file", "error_file"]

    def test_production_uses_json_formatter(self):
        settings = Settings(_env_file=None, environment="production")

        config = get_logging_config(settings)

        assert config["handlers"]["console"]["formatter"] == "json"

    def test_log_level_applied(self):
        settings = Settings(_env_file=None, environment="testing", log_level="warning")

        config = get_logging_config(settings)

        assert config["handlers"]["console"]["level"] == "WARNING"
        assert config["loggers"]["html_convert"]["level"] == "WARNING"

    def test_get_logger_binds_context(self):
        logger = get_logger("html_convert.tests")

        assert logger.bind(component="test") is not None
