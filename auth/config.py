"""
Authentication wiring.

Exposes a single `init_auth(app, settings)` entrypoint that attaches the
GitHub OAuth client to `app.config`, and `get_oauth_client()` for routes.
"""

from __future__ import annotations

from flask import Flask, current_app

from app_config import AppSettings

from .github import GitHubOAuthClient


def init_auth(app: Flask, settings: AppSettings, client: GitHubOAuthClient | None = None) -> GitHubOAuthClient:
    """
    Attach the OAuth client to Flask `app.config`.

    Returns the client for convenience. Pass `client` to substitute a
    preconfigured one (tests use this to stub the provider).
    """

    client = client or GitHubOAuthClient.from_settings(settings)
    app.config["OAUTH_CLIENT"] = client
    return client


def get_oauth_client() -> GitHubOAuthClient:
    client = current_app.config.get("OAUTH_CLIENT")
    if not isinstance(client, GitHubOAuthClient):
        raise RuntimeError("OAuth client not initialized. Call auth.config.init_auth(app, settings) at startup.")
    return client
