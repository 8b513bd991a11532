"""
Flask web app for the GitHub Event Log.

Visitors sign in with GitHub (OAuth2 Authorization Code Flow, see `auth/`)
and append entries to a shared event log that anyone can read (see
`events/`). Sessions are server-side (filesystem) via Flask-Session; events
live in process memory unless another `EventStore` is injected.
"""

from __future__ import annotations

import logging
import os
import sys

from cachelib import FileSystemCache
from dotenv import load_dotenv
from flask import Flask, render_template
from flask_session import Session
from werkzeug.middleware.proxy_fix import ProxyFix

from app_config import AppSettings, load_settings
from auth.config import init_auth
from auth.github import GitHubOAuthClient
from auth.routes import auth_bp
from auth.session import current_session
from errors import AppError, ConfigurationError, NotAuthenticatedError
from events.routes import events_bp
from events.store import EventStore, InMemoryEventStore

logger = logging.getLogger(__name__)


def create_app(
    settings: AppSettings,
    event_store: EventStore | None = None,
    oauth_client: GitHubOAuthClient | None = None,
) -> Flask:
    app = Flask(__name__)

    # Respect proxy headers so url_for(..., _external=True) matches the public URL.
    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)  # type: ignore[assignment]

    # ---- Sessions ----
    # Server-side sessions (filesystem). Adequate for a single-instance server.
    app.secret_key = settings.session_secret
    app.config.update(
        SESSION_TYPE="cachelib",
        SESSION_CACHELIB=FileSystemCache(cache_dir=settings.session_dir),
        SESSION_PERMANENT=False,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        SESSION_COOKIE_SECURE=settings.cookie_secure,
    )
    os.makedirs(settings.session_dir, exist_ok=True)
    Session(app)

    # ---- Authentication ----
    init_auth(app, settings, oauth_client)
    app.register_blueprint(auth_bp)

    # ---- Events ----
    app.config["EVENT_STORE"] = event_store if event_store is not None else InMemoryEventStore()
    app.register_blueprint(events_bp)

    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        if isinstance(err, NotAuthenticatedError):
            return render_template("unauthorized.html"), err.status_code
        return err.message, err.status_code, {"Content-Type": "text/plain; charset=utf-8"}

    @app.get("/")
    def index():
        return render_template("index.html", user=current_session().user)

    return app


def log_level(raw: str | None) -> int:
    """Map a LOG_LEVEL value to a logging level; unknown names fall back to INFO."""
    level = logging.getLevelName((raw or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def main() -> None:
    load_dotenv()
    raw_level = os.environ.get("LOG_LEVEL")
    logging.basicConfig(
        level=log_level(raw_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if raw_level and not isinstance(logging.getLevelName(raw_level.strip().upper()), int):
        logger.warning("Unknown LOG_LEVEL %r, using INFO", raw_level)

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error("%s", e)
        sys.exit(1)

    app = create_app(settings)
    logger.info("Server is running on http://%s:%s", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
