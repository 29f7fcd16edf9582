"""
Renderer Settings
=================

Process-wide renderer settings using Pydantic Settings.
Values can be overridden with ``PW_RENDER_*`` environment variables or a ``.env`` file.
"""

from typing import Optional
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Renderer settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="Playwright Image Renderer", description="Application name")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_path: Optional[Path] = Field(
        default=None, description="Directory for rotating log files, console only when unset"
    )

    # Filesystem Configuration
    temp_html_path: Path = Field(
        default=Path("./temp/html"), description="Directory for rendered HTML files"
    )
    resources_path: Path = Field(
        default_factory=lambda: Path.cwd() / "resources",
        description="Directory exposed to templates as resPath",
    )

    # Browser Recycling
    restart_num: int = Field(
        default=100, gt=0, description="Recycle the browser after this many screenshots"
    )
    restart_delay: float = Field(
        default=0.1, ge=0, description="Seconds to wait before closing a recycled browser"
    )

    # Pagination
    multi_page_height: int = Field(default=4000, gt=0, description="Default page slice height")
    multi_page_throttle: float = Field(
        default=0.2, ge=0, description="Pause in seconds between page slices"
    )

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

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="PW_RENDER_"
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
