"""
GitHub OAuth helpers.

Wraps the two provider endpoints used by the Authorization Code Flow: the
token endpoint (code -> access token) and the user endpoint (access token ->
identity). Each call is a single attempt bounded by a timeout.
"""

from __future__ import annotations

import logging
import secrets
from typing import Any
from urllib.parse import urlencode

import requests

from app_config import AppSettings
from errors import IdentityFetchError, TokenExchangeError

from .session import SessionUser

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
TOKEN_URL = "https://github.com/login/oauth/access_token"
USER_URL = "https://api.github.com/user"


def new_state_token() -> str:
    """Generate a cryptographically secure state token for CSRF protection."""

    return secrets.token_urlsafe(32)


class GitHubOAuthClient:
    """Confidential OAuth client for a GitHub OAuth App."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        scope: str = "user:email",
        redirect_uri: str | None = None,
        timeout: float = 10.0,
        http: requests.Session | None = None,
    ):
        self.client_id = client_id
        self._client_secret = client_secret
        self.scope = scope
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self._http = http or requests.Session()

    @staticmethod
    def from_settings(settings: AppSettings, http: requests.Session | None = None) -> "GitHubOAuthClient":
        return GitHubOAuthClient(
            client_id=settings.github_client_id,
            client_secret=settings.github_client_secret,
            scope=settings.oauth_scope,
            redirect_uri=settings.redirect_uri,
            timeout=settings.http_timeout,
            http=http,
        )

    def authorization_url(self, state: str) -> str:
        """Build the URL the browser is sent to in order to grant access."""

        params = {"client_id": self.client_id, "scope": self.scope, "state": state}
        if self.redirect_uri:
            params["redirect_uri"] = self.redirect_uri
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    def exchange_code(self, code: str, state: str) -> str:
        """Trade an authorization code for an access token."""

        payload = {
            "client_id": self.client_id,
            "client_secret": self._client_secret,
            "code": code,
            "state": state,
        }
        try:
            resp = self._http.post(
                TOKEN_URL,
                json=payload,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            data = resp.json()
        except requests.RequestException as e:
            logger.warning("GitHub token endpoint unreachable: %s", e)
            raise TokenExchangeError("Failed to get access token from GitHub") from e
        except ValueError as e:
            logger.warning("GitHub token endpoint returned a non-JSON body")
            raise TokenExchangeError("Failed to get access token from GitHub") from e

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            # GitHub answers 200 with {"error": ...} for bad or reused codes.
            error = data.get("error") if isinstance(data, dict) else None
            logger.warning("GitHub refused the token exchange: %s", error or "no access_token")
            raise TokenExchangeError("Failed to get access token from GitHub")
        return token

    def fetch_user(self, access_token: str) -> SessionUser:
        """Fetch the identity behind an access token."""

        try:
            resp = self._http.get(
                USER_URL,
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Accept": "application/vnd.github+json",
                },
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data: Any = resp.json()
        except requests.RequestException as e:
            logger.warning("GitHub user endpoint failed: %s", e)
            raise IdentityFetchError("Failed to retrieve user information from GitHub") from e
        except ValueError as e:
            logger.warning("GitHub user endpoint returned a non-JSON body")
            raise IdentityFetchError("Failed to retrieve user information from GitHub") from e

        if not isinstance(data, dict) or not data.get("login"):
            raise IdentityFetchError("Failed to retrieve user information from GitHub")

        return SessionUser(
            login=data["login"],
            id=data.get("id"),
            avatar_url=data.get("avatar_url") or "",
        )
