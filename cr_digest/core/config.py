"""
Configuration management for the Daily Digest reader.
"""

import math
from typing import Any, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.congress.gov/v3"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_PDFTOTEXT_BINARY = "pdftotext"
DEFAULT_LOG_LEVEL = "WARNING"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    # Congress.gov API
    congress_api_key: str = Field(alias="CONGRESS_API_KEY")
    congress_base_url: str = Field(DEFAULT_BASE_URL, alias="CONGRESS_BASE_URL")

    # Overall budget for network and extraction calls
    http_timeout_seconds: float = Field(DEFAULT_TIMEOUT_SECONDS, alias="HTTP_TIMEOUT_SECONDS")

    # Text extraction
    pdftotext_binary: str = Field(DEFAULT_PDFTOTEXT_BINARY, alias="PDFTOTEXT_BINARY")

    log_level: str = Field(DEFAULT_LOG_LEVEL, alias="LOG_LEVEL")

    @field_validator("congress_api_key", mode="before")
    @classmethod
    def _require_api_key(cls, value: Any) -> Any:
        if value is None or not str(value).strip():
            raise ValueError("CONGRESS_API_KEY is not set")
        return str(value).strip()

    @field_validator("congress_base_url", mode="before")
    @classmethod
    def _normalize_base_url(cls, value: Any) -> str:
        if value is None or not str(value).strip():
            return DEFAULT_BASE_URL
        return str(value).strip().rstrip("/")

    @field_validator("http_timeout_seconds", mode="before")
    @classmethod
    def _parse_timeout(cls, value: Any) -> float:
        # Unusable values fall back to the default instead of failing the run
        try:
            seconds = float(value)
        except (TypeError, ValueError):
            return DEFAULT_TIMEOUT_SECONDS
        if not math.isfinite(seconds) or seconds <= 0:
            return DEFAULT_TIMEOUT_SECONDS
        return seconds

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        if value is None or not str(value).strip():
            return DEFAULT_LOG_LEVEL
        return str(value).strip().upper()


def load_settings(**overrides: Optional[Any]) -> Settings:
    """Build settings from the environment.

    Precedence is explicit keyword override, then environment variable, then
    the module defaults. Overrides set to None are ignored.

    Args:
        **overrides: Field names (e.g. ``congress_api_key``) to force.

    Returns:
        Validated Settings

    Raises:
        ConfigurationError: If the API key is missing or a value is invalid.
    """
    explicit = {}
    for name, value in overrides.items():
        if value is None:
            continue
        field = Settings.model_fields.get(name)
        explicit[field.alias if field is not None and field.alias else name] = value
    try:
        return Settings(**explicit)
    except ValidationError as e:
        problems = []
        for error in e.errors():
            field = error["loc"][0] if error["loc"] else "settings"
            if error["type"] == "missing" and field in ("CONGRESS_API_KEY", "congress_api_key"):
                problems.append("CONGRESS_API_KEY is not set")
            else:
                message = str(error["msg"])
                problems.append(message.removeprefix("Value error, "))
        raise ConfigurationError("; ".join(problems)) from e
