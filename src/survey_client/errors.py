"""Application-level exception types for the survey client."""

from __future__ import annotations


class SurveyClientError(Exception):
    """Base exception for the survey client."""


class ConfigurationError(SurveyClientError):
    """Raised when settings fail startup validation."""


class UnknownEndpointError(SurveyClientError):
    """Raised when an endpoint name is not in the endpoint table."""


class MissingPathParameterError(SurveyClientError):
    """Raised when a path template parameter was not supplied."""


class SessionUnavailableError(SurveyClientError):
    """Raised when a session write is attempted without storage access."""
