"""
Auth routes (GitHub OAuth).

Endpoints:
  - GET  /auth/github
  - GET  /auth/github/callback
  - GET  /logout

Failures raised by the flow are `errors.AppError`s and are rendered by the
app-wide error handler with their status code.
"""

from __future__ import annotations

import logging

from flask import Blueprint, redirect, request, url_for

from . import flow
from .config import get_oauth_client
from .session import current_session

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


@auth_bp.get("/auth/github")
def login():
    """Start the login flow by redirecting the user to GitHub."""

    return redirect(flow.initiate(get_oauth_client(), current_session()))


@auth_bp.get("/auth/github/callback")
def callback():
    """Handle the OAuth2 redirect from GitHub and sign the user in."""

    flow.handle_callback(
        get_oauth_client(),
        current_session(),
        code=request.args.get("code"),
        state=request.args.get("state"),
        error=request.args.get("error"),
        error_description=request.args.get("error_description"),
    )
    return redirect(url_for("index"))


@auth_bp.get("/logout")
def logout():
    sess = current_session()
    user = sess.user
    sess.destroy()
    if user:
        logger.info("User %s signed out", user.login)
    return redirect(url_for("index"))
