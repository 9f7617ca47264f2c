from pathlib import Path

import pytest
from pydantic import ValidationError

from survey_client.config import DEFAULT_API_BASE_URL, Settings, load_settings
from survey_client.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("API_BASE_URL", "LOGIN_ROUTE", "HOME", "SESSION_FILE", "LOG_LEVEL"):
        monkeypatch.delenv(f"SURVEY_CLIENT_{name}", raising=False)


def test_defaults() -> None:
    settings = load_settings()
    assert settings.api_base_url == DEFAULT_API_BASE_URL
    assert settings.login_route == "/login"
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SURVEY_CLIENT_API_BASE_URL", "https://surveys.example.com/api/")
    monkeypatch.setenv("SURVEY_CLIENT_HOME", str(tmp_path / "home"))

    settings = load_settings()

    assert settings.api_base_url == "https://surveys.example.com/api"
    assert settings.resolve_session_file() == tmp_path / "home" / "session.json"


def test_explicit_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SURVEY_CLIENT_API_BASE_URL", "https://surveys.example.com")
    settings = load_settings(api_base_url="http://127.0.0.1:9000", log_level=None)
    assert settings.api_base_url == "http://127.0.0.1:9000"
    assert settings.log_level == "INFO"


def test_absolute_session_file(tmp_path: Path) -> None:
    target = tmp_path / "elsewhere.json"
    assert load_settings(session_file=target).resolve_session_file() == target


@pytest.mark.parametrize("url", ["localhost:3030", "ftp://example.com", "http://"])
def test_invalid_base_url(url: str) -> None:
    with pytest.raises(ConfigurationError):
        load_settings(api_base_url=url)


def test_settings_validator_rejects_non_http_origin() -> None:
    with pytest.raises(ValidationError):
        Settings(api_base_url="ftp://example.com")


def test_invalid_origin_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SURVEY_CLIENT_API_BASE_URL", "localhost:3030")
    with pytest.raises(ConfigurationError, match="invalid api base url"):
        load_settings()
