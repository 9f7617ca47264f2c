"""Session helpers over injected storage and navigation capabilities."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from loguru import logger

from survey_client.errors import SessionUnavailableError
from survey_client.models import UserProfile
from survey_client.storage import SessionStorage

USER_ID_KEY = "userId"
USER_KEY = "user"
TOKEN_KEY = "token"
SESSION_KEYS = (USER_KEY, USER_ID_KEY, TOKEN_KEY)


@runtime_checkable
class Navigator(Protocol):
    """Moves the active view to another route."""

    def go(self, route: str) -> None: ...


@dataclass
class RecordingNavigator:
    """Navigator that only remembers where it was sent."""

    history: list[str] = field(default_factory=list)

    def go(self, route: str) -> None:
        self.history.append(route)

    @property
    def current(self) -> str | None:
        return self.history[-1] if self.history else None


@dataclass(frozen=True)
class SessionEnvironment:
    """Capabilities available to the session helpers.

    ``None`` for either capability means the environment does not provide it.
    """

    storage: SessionStorage | None = None
    navigator: Navigator | None = None
    login_route: str = "/login"


def is_authenticated(env: SessionEnvironment) -> bool:
    """Return True when both the token and the cached user are stored."""
    if env.storage is None:
        return False
    return env.storage.get_item(TOKEN_KEY) is not None and env.storage.get_item(USER_KEY) is not None


def get_current_user(env: SessionEnvironment) -> UserProfile | None:
    """Return the cached user profile.

    A profile that cannot be deserialized ends the session: all session keys
    are cleared, the view is sent to the login route and None is returned.
    """
    if env.storage is None:
        return None
    raw = env.storage.get_item(USER_KEY)
    if not raw:
        return None

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError:
        payload = None
    if not isinstance(payload, dict):
        logger.warning("session.user.corrupt clearing session")
        logout(env)
        return None
    # Field types are not enforced on cached profiles.
    return UserProfile.model_construct(**payload)


def logout(env: SessionEnvironment) -> None:
    """Clear every session key and redirect to the login route."""
    if env.storage is None:
        return
    for key in SESSION_KEYS:
        env.storage.remove_item(key)
    logger.info("session.logout route={}", env.login_route)
    if env.navigator is not None:
        env.navigator.go(env.login_route)


def remember(env: SessionEnvironment, user: UserProfile | Mapping[str, Any], token: str) -> UserProfile:
    """Store a freshly authenticated session.

    Raises:
        SessionUnavailableError: if the environment has no storage.
    """
    if env.storage is None:
        raise SessionUnavailableError("session storage is not available")

    if isinstance(user, UserProfile):
        profile = user
        payload = profile.model_dump(mode="json", exclude_none=True)
    else:
        payload = dict(user)
        profile = UserProfile.model_construct(**payload)
    env.storage.set_item(USER_KEY, json.dumps(payload, ensure_ascii=False))
    env.storage.set_item(TOKEN_KEY, token)
    if profile.id is not None:
        env.storage.set_item(USER_ID_KEY, str(profile.id))
    else:
        env.storage.remove_item(USER_ID_KEY)
    logger.info("session.remember user_id={}", profile.id)
    return profile
