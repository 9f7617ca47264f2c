"""Configuration management for the survey client."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from survey_client.errors import ConfigurationError

DEFAULT_API_BASE_URL = "http://localhost:3030"
DEFAULT_HOME = Path.home() / ".survey-client"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SURVEY_CLIENT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_base_url: str = Field(default=DEFAULT_API_BASE_URL, description="Backend origin every endpoint is joined to")
    login_route: str = Field(default="/login", description="Route shown after the session is cleared")
    home: Path = Field(default=DEFAULT_HOME, description="Directory holding client state")
    session_file: Path = Field(default=Path("session.json"), description="Session storage file, relative to home")
    log_level: str = Field(default="INFO", description="Log level")

    @field_validator("api_base_url")
    @classmethod
    def _check_origin(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"invalid api base url: {value!r}")
        return value

    def resolve_session_file(self) -> Path:
        path = self.session_file.expanduser()
        if path.is_absolute():
            return path
        return self.home.expanduser() / path


def load_settings(**overrides: Any) -> Settings:
    """Load settings from the environment, applying explicit overrides.

    Raises:
        ConfigurationError: if any setting fails validation, such as an API
            base URL that is not an http(s) origin.
    """
    updates = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**updates)
    except ValidationError as exc:
        raise ConfigurationError("; ".join(error["msg"] for error in exc.errors())) from exc
