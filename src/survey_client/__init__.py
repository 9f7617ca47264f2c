"""survey-client - typed client for the survey backend."""

from .client import ApiClient
from .result import Result
from .session import SessionEnvironment, get_current_user, is_authenticated, logout, remember

__version__ = "0.1.0"

__all__ = [
    "ApiClient",
    "Result",
    "SessionEnvironment",
    "get_current_user",
    "is_authenticated",
    "logout",
    "remember",
]
