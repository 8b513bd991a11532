"""Tests for environment configuration and startup."""

import logging
from unittest.mock import patch

import pytest

import app as app_module
from app_config import load_settings
from errors import ConfigurationError

REQUIRED = {
    "GITHUB_CLIENT_ID": "client-123",
    "GITHUB_CLIENT_SECRET": "secret-456",
    "SESSION_SECRET": "session-secret",
    "PORT": "3000",
}
OPTIONAL = (
    "HOST",
    "GITHUB_OAUTH_SCOPE",
    "GITHUB_REDIRECT_URI",
    "OAUTH_HTTP_TIMEOUT",
    "SESSION_COOKIE_SECURE",
    "SESSION_DIR",
)


@pytest.fixture
def env(monkeypatch, tmp_path):
    for name in OPTIONAL:
        monkeypatch.delenv(name, raising=False)
    for name, value in REQUIRED.items():
        monkeypatch.setenv(name, value)
    monkeypatch.setenv("SESSION_DIR", str(tmp_path / "sessions"))
    return monkeypatch


class TestLoadSettings:
    """load_settings()"""

    def test_required_values(self, env):
        settings = load_settings()
        assert settings.github_client_id == "client-123"
        assert settings.github_client_secret == "secret-456"
        assert settings.session_secret == "session-secret"
        assert settings.port == 3000

    def test_defaults(self, env):
        settings = load_settings()
        assert settings.host == "127.0.0.1"
        assert settings.oauth_scope == "user:email"
        assert settings.redirect_uri is None
        assert settings.http_timeout == 10.0
        assert settings.cookie_secure is False

    def test_optional_overrides(self, env):
        env.setenv("GITHUB_OAUTH_SCOPE", "read:user")
        env.setenv("OAUTH_HTTP_TIMEOUT", "2.5")
        env.setenv("SESSION_COOKIE_SECURE", "true")
        settings = load_settings()
        assert settings.oauth_scope == "read:user"
        assert settings.http_timeout == 2.5
        assert settings.cookie_secure is True

    @pytest.mark.parametrize("name", sorted(REQUIRED))
    def test_missing_required(self, env, name):
        env.delenv(name)
        with pytest.raises(ConfigurationError, match=name):
            load_settings()

    def test_blank_counts_as_missing(self, env):
        env.setenv("SESSION_SECRET", "   ")
        with pytest.raises(ConfigurationError, match="SESSION_SECRET"):
            load_settings()

    @pytest.mark.parametrize("port", ["http", "0", "70000"])
    def test_bad_port(self, env, port):
        env.setenv("PORT", port)
        with pytest.raises(ConfigurationError, match="PORT"):
            load_settings()

    def test_bad_timeout(self, env):
        env.setenv("OAUTH_HTTP_TIMEOUT", "-1")
        with pytest.raises(ConfigurationError):
            load_settings()


class TestMain:
    """app.main()"""

    def test_exits_without_client_id(self, env):
        env.delenv("GITHUB_CLIENT_ID")
        with patch.object(app_module, "load_dotenv"), patch("flask.Flask.run") as run:
            with pytest.raises(SystemExit) as exc:
                app_module.main()
        assert exc.value.code != 0
        run.assert_not_called()

    def test_starts_server(self, env):
        with patch.object(app_module, "load_dotenv"), patch("flask.Flask.run") as run:
            app_module.main()
        run.assert_called_once_with(host="127.0.0.1", port=3000)


class TestLogLevel:
    """app.log_level()"""

    @pytest.mark.parametrize(
        "raw, expected",
        [(None, logging.INFO), ("debug", logging.DEBUG), (" WARNING ", logging.WARNING), ("verbose", logging.INFO)],
    )
    def test_levels(self, raw, expected):
        assert app_module.log_level(raw) == expected

    def test_unknown_level_does_not_stop_startup(self, env):
        env.setenv("LOG_LEVEL", "verbose")
        with patch.object(app_module, "load_dotenv"), patch("flask.Flask.run") as run:
            app_module.main()
        run.assert_called_once()


def test_sessions_stored_in_filesystem_cache(settings):
    from cachelib import FileSystemCache

    app = app_module.create_app(settings)
    assert app.config["SESSION_TYPE"] == "cachelib"
    assert isinstance(app.config["SESSION_CACHELIB"], FileSystemCache)
