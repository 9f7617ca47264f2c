"""Command line entry point for the survey client."""

import asyncio
import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, NoReturn, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from survey_client.bootstrap import build_client, build_session_environment, build_storage
from survey_client.client import ApiClient
from survey_client.config import Settings, load_settings
from survey_client.endpoints import ENDPOINTS, get_endpoint
from survey_client.errors import SurveyClientError
from survey_client.logging_utils import configure_logging
from survey_client.result import Result
from survey_client.session import SessionEnvironment, get_current_user, is_authenticated, logout, remember
from survey_client.storage import FileStorage

console = Console()

app = typer.Typer(
    name="survey-client",
    help="Talk to the survey backend from the terminal.",
    add_completion=False,
)


class ConsoleNavigator:
    """Navigator that reports redirects on the terminal."""

    def go(self, route: str) -> None:
        console.print(f"redirect -> {route}", markup=False)


@dataclass
class CliState:
    settings: Settings
    storage: FileStorage
    env: SessionEnvironment


def _state(ctx: typer.Context) -> CliState:
    state: CliState = ctx.obj
    return state


def _exit_with_error(message: str) -> NoReturn:
    console.print(f"error: {message}", markup=False)
    raise typer.Exit(1)


def _print_result(result: Result[Any]) -> None:
    console.print_json(data=result.to_dict())
    if not result.success:
        raise typer.Exit(1)


def _with_client(state: CliState, action: Callable[[ApiClient], Awaitable[Result[Any]]]) -> Result[Any]:
    async def _run() -> Result[Any]:
        async with build_client(state.settings, state.storage) as client:
            return await action(client)

    return asyncio.run(_run())


def _parse_params(raw: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for item in raw:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {item!r}", param_hint="--param")
        params[key] = value
    return params


@app.callback()
def main_callback(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override the backend origin"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override the log level"),
) -> None:
    try:
        settings = load_settings(api_base_url=base_url, log_level=log_level)
    except SurveyClientError as exc:
        _exit_with_error(str(exc))
    configure_logging(profile="cli", level=settings.log_level)
    storage = build_storage(settings)
    env = build_session_environment(settings, storage, ConsoleNavigator())
    ctx.obj = CliState(settings=settings, storage=storage, env=env)
    logger.debug("cli.start base_url={} session_file={}", settings.api_base_url, storage.file_path)


@app.command()
def login(
    ctx: typer.Context,
    email: str = typer.Option(..., "--email", "-e", help="Account email"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True, help="Account password"),
) -> None:
    """Authenticate and store the session."""
    state = _state(ctx)
    result = _with_client(state, lambda client: client.login(email, password))
    if not result.success:
        _exit_with_error(result.error or "login failed")

    data = result.data if isinstance(result.data, dict) else {}
    user = data.get("user", data)
    if not isinstance(user, dict):
        _exit_with_error("login response did not contain a user object")
    profile = remember(state.env, user, str(data.get("token") or ""))
    console.print(f"logged in as {profile.email or profile.id}", markup=False)


@app.command("logout")
def logout_command(ctx: typer.Context) -> None:
    """Clear the stored session."""
    logout(_state(ctx).env)


@app.command()
def whoami(ctx: typer.Context) -> None:
    """Show the stored user profile."""
    env = _state(ctx).env
    if not is_authenticated(env):
        _exit_with_error("not logged in")
    user = get_current_user(env)
    if user is None:
        _exit_with_error("stored session was invalid and has been cleared")
    console.print_json(data=user.model_dump(mode="json", exclude_none=True))


@app.command("endpoints")
def list_endpoints() -> None:
    """List every endpoint the client knows."""
    table = Table()
    table.add_column("name", no_wrap=True)
    table.add_column("method", no_wrap=True)
    table.add_column("path")
    table.add_column("summary")
    for endpoint in ENDPOINTS.values():
        table.add_row(endpoint.name, endpoint.method, endpoint.path, endpoint.summary)
    console.print(table)


@app.command()
def call(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Endpoint name, see `endpoints`"),
    param: list[str] = typer.Option([], "--param", help="Path parameter as key=value"),
    body: Optional[str] = typer.Option(None, "--body", help="JSON request body"),
) -> None:
    """Call one endpoint and print its result."""
    state = _state(ctx)
    params = _parse_params(param)
    payload: Any = None
    if body is not None:
        try:
            payload = json.loads(body)
        except json.JSONDecodeError as exc:
            raise typer.BadParameter(f"invalid JSON: {exc}", param_hint="--body") from exc

    try:
        endpoint = get_endpoint(name)
        endpoint.build_path(**params)
    except SurveyClientError as exc:
        _exit_with_error(str(exc))
    if body is not None and not endpoint.has_body:
        raise typer.BadParameter(f"{endpoint.name} does not take a request body", param_hint="--body")

    _print_result(_with_client(state, lambda client: client.call(endpoint, payload, **params)))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
