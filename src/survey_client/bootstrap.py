"""Application bootstrap helpers."""

from __future__ import annotations

import httpx

from survey_client.client import ApiClient
from survey_client.config import Settings
from survey_client.session import Navigator, SessionEnvironment
from survey_client.storage import FileStorage, SessionStorage


def build_storage(settings: Settings) -> FileStorage:
    """Open the session file configured for this process."""

    return FileStorage(settings.resolve_session_file())


def build_client(
    settings: Settings,
    storage: SessionStorage | None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ApiClient:
    """Build the API client once at start-up; callers own and close it."""

    return ApiClient(settings.api_base_url, storage, transport=transport)


def build_session_environment(
    settings: Settings,
    storage: SessionStorage | None,
    navigator: Navigator | None,
) -> SessionEnvironment:
    return SessionEnvironment(storage=storage, navigator=navigator, login_route=settings.login_route)
