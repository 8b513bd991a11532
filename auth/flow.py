"""
The Authorization Code Flow as two operations over a session.

    ANONYMOUS --initiate--> STATE_ISSUED --handle_callback--> AUTHENTICATED

Any failure in `handle_callback` leaves the session without a user; the
browser has to start again from `initiate`.
"""

from __future__ import annotations

import logging

from errors import CsrfValidationError, TokenExchangeError

from .github import GitHubOAuthClient, new_state_token
from .session import SessionUser, SessionView

logger = logging.getLogger(__name__)


def initiate(client: GitHubOAuthClient, sess: SessionView) -> str:
    """Issue a fresh state nonce and return the GitHub authorize URL."""

    state = new_state_token()
    sess.issue_state(state)
    return client.authorization_url(state)


def handle_callback(
    client: GitHubOAuthClient,
    sess: SessionView,
    code: str | None,
    state: str | None,
    error: str | None = None,
    error_description: str | None = None,
) -> SessionUser:
    """
    Validate the callback, exchange the code and store the identity.

    Raises:
      - CsrfValidationError: `state` is missing or not the issued nonce.
        The session is left untouched.
      - TokenExchangeError: no access token could be obtained.
      - IdentityFetchError: the token did not resolve to a GitHub login.
    """

    expected = sess.oauth_state
    if not state or not expected or state != expected:
        logger.warning("OAuth callback rejected: state mismatch")
        raise CsrfValidationError("Invalid state parameter. Possible CSRF attack.")

    # A nonce is good for exactly one callback, and the previous identity
    # does not survive a sign-in attempt that fails past this point.
    sess.consume_state()
    sess.clear_user()

    if error:
        logger.info("GitHub authorization was not granted: %s", error)
        raise TokenExchangeError(f"GitHub authorization failed: {error_description or error}")
    if not code:
        raise TokenExchangeError("Missing authorization code.")

    token = client.exchange_code(code, state)
    user = client.fetch_user(token)
    sess.set_user(user)
    logger.info("User %s signed in", user.login)
    return user
