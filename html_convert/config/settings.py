"""
Application Settings
===================

Conversion settings and environment configuration using Pydantic Settings.
Supports development, testing, and production environments.
"""

from typing import Annotated, Optional, List, Union
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
import json
from pathlib import Path


class Settings(BaseSettings):
    """Conversion settings with environment variable support."""

    # Application Configuration
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: Optional[Path] = Field(default=None, description="Directory for rotating log files")
    configure_logging: bool = Field(
        default=True, description="Configure logging when the package is imported"
    )

    # Template Configuration
    default_encoding: str = Field(default="utf-8", description="Default HTML source encoding")

    # Browser Configuration
    playwright_headless: bool = Field(default=True, description="Run browser in headless mode")
    browser_args: Annotated[List[str], NoDecode] = Field(
        default=[
            "--no-sandbox",
            "--disable-setuid-sandbox",
            "--disable-dev-shm-usage",
        ],
        description="Chromium launch arguments",
    )
    render_timeout_ms: int = Field(
        default=30000, gt=0, description="Playwright timeout in milliseconds"
    )
    wait_until: str = Field(default="load", description="Load state awaited after set_content")

    # Image Configuration
    optimize_images: bool = Field(default=False, description="Re-encode PNG screenshots")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("wait_until")
    @classmethod
    def validate_wait_until(cls, v: str) -> str:
        """Validate the Playwright load state."""
        allowed = {"load", "domcontentloaded", "networkidle", "commit"}
        if v not in allowed:
            raise ValueError(f"wait_until must be one of: {allowed}")
        return v

    @field_validator("browser_args", mode="before")
    @classmethod
    def parse_browser_args(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse browser args from string or list."""
        if isinstance(v, str):
            # Handle JSON-like string: ["--no-sandbox", "--mute-audio"]
            v = v.strip()
            if v.startswith("[") and v.endswith("]"):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            # Handle comma-separated string: "--no-sandbox,--mute-audio"
            return [arg.strip() for arg in v.split(",") if arg.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="HTML_CONVERT_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
