"""
Application configuration.

All secrets are sourced from environment variables (a local `.env` file is
loaded by `app.main`). This module validates presence of required settings
and exposes a single `load_settings()` entrypoint.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from errors import ConfigurationError

REQUIRED_VARS = ("GITHUB_CLIENT_ID", "GITHUB_CLIENT_SECRET", "SESSION_SECRET", "PORT")


def _env(name: str, default: str | None = None) -> str | None:
    val = os.environ.get(name)
    if val is None:
        return default
    val = val.strip()
    return val or default


def _env_bool(name: str, default: bool) -> bool:
    val = _env(name)
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class AppSettings:
    """Everything the server needs to start."""

    github_client_id: str
    github_client_secret: str
    session_secret: str
    port: int
    host: str = "127.0.0.1"
    oauth_scope: str = "user:email"
    redirect_uri: str | None = None
    http_timeout: float = 10.0
    cookie_secure: bool = False
    session_dir: str = ".flask_session"


def load_settings() -> AppSettings:
    """
    Load settings from environment variables.

    Required:
      - GITHUB_CLIENT_ID
      - GITHUB_CLIENT_SECRET
      - SESSION_SECRET
      - PORT

    Optional:
      - HOST (default: 127.0.0.1)
      - GITHUB_OAUTH_SCOPE (default: 'user:email')
      - GITHUB_REDIRECT_URI (default: not sent to GitHub)
      - OAUTH_HTTP_TIMEOUT (seconds, default: 10)
      - SESSION_COOKIE_SECURE (default: false)
      - SESSION_DIR (default: ./.flask_session)
    """

    missing = [name for name in REQUIRED_VARS if not _env(name)]
    if missing:
        raise ConfigurationError(
            "Missing required environment variables: "
            + ", ".join(missing)
            + ". Set them in your environment or a .env file before starting the server."
        )

    port_raw = _env("PORT") or ""
    try:
        port = int(port_raw)
    except ValueError:
        raise ConfigurationError(f"PORT must be an integer, got {port_raw!r}.") from None
    if not 0 < port < 65536:
        raise ConfigurationError(f"PORT must be between 1 and 65535, got {port}.")

    timeout_raw = _env("OAUTH_HTTP_TIMEOUT", "10") or "10"
    try:
        http_timeout = float(timeout_raw)
    except ValueError:
        raise ConfigurationError(f"OAUTH_HTTP_TIMEOUT must be a number, got {timeout_raw!r}.") from None
    if http_timeout <= 0:
        raise ConfigurationError("OAUTH_HTTP_TIMEOUT must be positive.")

    return AppSettings(
        github_client_id=_env("GITHUB_CLIENT_ID") or "",
        github_client_secret=_env("GITHUB_CLIENT_SECRET") or "",
        session_secret=_env("SESSION_SECRET") or "",
        port=port,
        host=_env("HOST", "127.0.0.1") or "127.0.0.1",
        oauth_scope=_env("GITHUB_OAUTH_SCOPE", "user:email") or "user:email",
        redirect_uri=_env("GITHUB_REDIRECT_URI"),
        http_timeout=http_timeout,
        cookie_secure=_env_bool("SESSION_COOKIE_SECURE", False),
        session_dir=_env("SESSION_DIR") or os.path.join(os.getcwd(), ".flask_session"),
    )
