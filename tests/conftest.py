"""Shared fixtures: settings, a stubbed GitHub and a test client."""

from unittest.mock import Mock
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from app import create_app
from app_config import AppSettings
from auth.github import GitHubOAuthClient
from events.store import InMemoryEventStore


def make_response(json_data=None, status_code=200, json_error=None):
    """A stand-in for requests.Response."""
    resp = Mock(spec=requests.Response)
    resp.status_code = status_code
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = json_data
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    return resp


def state_from_location(location):
    return parse_qs(urlparse(location).query)["state"][0]


@pytest.fixture
def settings(tmp_path):
    return AppSettings(
        github_client_id="client-123",
        github_client_secret="secret-456",
        session_secret="session-secret",
        port=3000,
        session_dir=str(tmp_path / "sessions"),
    )


@pytest.fixture
def http():
    """requests.Session stub; GitHub accepts every code by default."""
    http = Mock(spec=requests.Session)
    http.post.return_value = make_response({"access_token": "gho_token", "token_type": "bearer"})
    http.get.return_value = make_response(
        {"login": "octocat", "id": 583231, "avatar_url": "https://avatars.githubusercontent.com/u/583231"}
    )
    return http


@pytest.fixture
def oauth_client(settings, http):
    return GitHubOAuthClient.from_settings(settings, http=http)


@pytest.fixture
def store():
    return InMemoryEventStore()


@pytest.fixture
def app(settings, store, oauth_client):
    app = create_app(settings, event_store=store, oauth_client=oauth_client)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Run the full sign-in round trip against the stubbed provider."""

    def _login(code="good-code"):
        start = client.get("/auth/github")
        state = state_from_location(start.headers["Location"])
        return client.get("/auth/github/callback", query_string={"code": code, "state": state})

    return _login
