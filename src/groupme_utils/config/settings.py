"""
Configuration settings for GroupMe Utils.

This module provides configuration management using Pydantic settings
with support for environment variables and .env files.
"""

from typing import Optional, Dict, Any
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.groupme.com/v3"


class GroupMeSettings(BaseSettings):
    """
    Main configuration settings for GroupMe Utils.

    Settings are loaded from multiple sources in order of preference:
    1. Explicit keyword arguments
    2. Environment variables (prefixed with GROUPME_)
    3. The .env file in the working directory
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="GROUPME_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    token: Optional[str] = Field(
        default=None,
        description="GroupMe access token"
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base endpoint of the GroupMe API"
    )

    timeout: float = Field(
        default=30.0,
        description="Request timeout in seconds",
        gt=0
    )

    # Output Configuration
    progress_width: int = Field(
        default=70,
        description="Line width of the export progress bar",
        ge=8
    )

    csv_empty_value: str = Field(
        default="0",
        description="Value written to like-matrix cells where a user liked none of an author's messages"
    )

    # Logging Configuration
    log_level: str = Field(
        default="WARNING",
        description="Logging level"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate the API base URL."""
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"Invalid base URL '{v}'. It must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level '{v}'. Valid levels: {', '.join(sorted(valid_levels))}")
        return v_upper

    @property
    def is_configured(self) -> bool:
        """Check if an access token is available."""
        return bool(self.token)

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the debug flag."""
        return "DEBUG" if self.debug else self.log_level

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary, excluding sensitive data."""
        data = self.model_dump()
        # Mask sensitive data
        if data.get("token"):
            data["token"] = "***masked***"
        return data


def get_settings(**overrides: Any) -> GroupMeSettings:
    """Get the current GroupMe Utils settings."""
    return GroupMeSettings(**overrides)
