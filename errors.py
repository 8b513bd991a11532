"""
Error taxonomy for the event log server.

Request-level failures derive from `AppError` and carry the HTTP status they
are rendered with (see `app.create_app`). `ConfigurationError` is raised at
startup only and never reaches a request.
"""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Required environment configuration is missing or malformed."""


class AppError(Exception):
    """Base class for failures that terminate the current request."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """An event submission is missing its type or details."""

    status_code = 400


class NotAuthenticatedError(AppError):
    status_code = 401


class TokenExchangeError(AppError):
    """The provider did not hand out an access token for the grant."""

    status_code = 401


class CsrfValidationError(AppError):
    """The callback `state` does not match the nonce stored in the session."""

    status_code = 403


class IdentityFetchError(AppError):
    """The provider's user endpoint did not return a usable identity."""

    status_code = 500


class SessionStoreError(AppError):
    status_code = 500
