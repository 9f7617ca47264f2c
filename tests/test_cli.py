from __future__ import annotations

import importlib
import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from survey_client.client import ApiClient

cli_module = importlib.import_module("survey_client.cli")


class FakeBackend:
    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def respond(self, method: str, path: str, status: int, body: object) -> None:
        self.routes[(method, path)] = httpx.Response(status, json=body)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.routes.get((request.method, request.url.path))
        if response is None:
            return httpx.Response(404, json={"error": "not found"})
        return response


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> FakeBackend:
    fake = FakeBackend()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SURVEY_CLIENT_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("SURVEY_CLIENT_API_BASE_URL", "http://backend.test")

    def _fake_build_client(settings, storage):
        return ApiClient(settings.api_base_url, storage, transport=httpx.MockTransport(fake))

    monkeypatch.setattr(cli_module, "build_client", _fake_build_client)
    return fake


def _session(tmp_path: Path) -> dict[str, str]:
    path = tmp_path / "home" / "session.json"
    if not path.exists():
        return {}
    return json.loads(path.read_text(encoding="utf-8"))


def test_login_stores_session(backend: FakeBackend, tmp_path: Path) -> None:
    backend.respond("POST", "/login", 200, {"token": "tok-1", "user": {"id": 5, "email": "ana@example.com"}})

    result = CliRunner().invoke(cli_module.app, ["login", "--email", "ana@example.com", "--password", "pw"])

    assert result.exit_code == 0, result.output
    assert "ana@example.com" in result.output
    session = _session(tmp_path)
    assert session["userId"] == "5"
    assert session["token"] == "tok-1"
    assert json.loads(session["user"])["email"] == "ana@example.com"


def test_login_rejected(backend: FakeBackend, tmp_path: Path) -> None:
    backend.respond("POST", "/login", 401, {"error": "invalid credentials"})

    result = CliRunner().invoke(cli_module.app, ["login", "--email", "a@b.com", "--password", "x"])

    assert result.exit_code == 1
    assert "invalid credentials" in result.output
    assert _session(tmp_path) == {}


def test_call_sends_user_id_after_login(backend: FakeBackend) -> None:
    backend.respond("POST", "/login", 200, {"token": "tok-1", "user": {"id": 5}})
    backend.respond("GET", "/student/surveys/3", 200, {"id": 3, "title": "Feedback"})
    runner = CliRunner()

    runner.invoke(cli_module.app, ["login", "--email", "a@b.com", "--password", "x"])
    result = runner.invoke(cli_module.app, ["call", "survey_by_id", "--param", "survey_id=3"])

    assert result.exit_code == 0, result.output
    assert "Feedback" in result.output
    assert backend.requests[-1].headers["X-User-ID"] == "5"


def test_call_with_body(backend: FakeBackend) -> None:
    backend.respond("POST", "/admin/subjects", 201, {"id": 8})

    result = CliRunner().invoke(
        cli_module.app,
        ["call", "create_subject", "--body", '{"name": "Math", "code": "MAT1", "professor_id": 2}'],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(backend.requests[-1].content) == {"name": "Math", "code": "MAT1", "professor_id": 2}


def test_call_failure_exits_nonzero(backend: FakeBackend) -> None:
    result = CliRunner().invoke(cli_module.app, ["call", "all_users"])

    assert result.exit_code == 1
    assert "not found" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["call", "drop_tables"],
        ["call", "activate_semester"],
    ],
)
def test_call_rejects_bad_arguments(backend: FakeBackend, args: list[str]) -> None:
    result = CliRunner().invoke(cli_module.app, args)

    assert result.exit_code == 1
    assert backend.requests == []


def test_whoami_and_logout(backend: FakeBackend, tmp_path: Path) -> None:
    runner = CliRunner()
    assert runner.invoke(cli_module.app, ["whoami"]).exit_code == 1

    backend.respond("POST", "/login", 200, {"token": "tok-1", "user": {"id": 5, "first_name": "Ana"}})
    runner.invoke(cli_module.app, ["login", "--email", "a@b.com", "--password", "x"])
    whoami = runner.invoke(cli_module.app, ["whoami"])
    assert whoami.exit_code == 0
    assert "Ana" in whoami.output

    logout = runner.invoke(cli_module.app, ["logout"])
    assert logout.exit_code == 0
    assert "/login" in logout.output
    assert _session(tmp_path) == {}


def test_endpoints_lists_table(backend: FakeBackend) -> None:
    result = CliRunner().invoke(cli_module.app, ["endpoints"])

    assert result.exit_code == 0
    assert "activate_semester" in result.output


def test_invalid_base_url_exits(backend: FakeBackend) -> None:
    result = CliRunner().invoke(cli_module.app, ["--base-url", "not-a-url", "endpoints"])

    assert result.exit_code == 1
    assert "invalid api base url" in result.output


def test_call_rejects_body_for_bodyless_endpoint(backend: FakeBackend) -> None:
    result = CliRunner().invoke(cli_module.app, ["call", "all_users", "--body", '{"x": 1}'])

    assert result.exit_code == 2
    assert backend.requests == []
