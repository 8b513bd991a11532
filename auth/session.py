"""
Typed view over the per-request session.

Flask-Session keeps the data server-side and hands each request a dict-like
`flask.session`. Route code goes through `SessionView` instead of touching
the raw keys.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import asdict, dataclass
from typing import Any

from flask import session

from errors import SessionStoreError

STATE_KEY = "oauth_state"
USER_KEY = "user"


@dataclass(frozen=True)
class SessionUser:
    """The GitHub identity stored once sign-in completes."""

    login: str
    id: int | None
    avatar_url: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Any) -> "SessionUser | None":
        if not isinstance(data, dict) or not data.get("login"):
            return None
        return SessionUser(
            login=data["login"],
            id=data.get("id"),
            avatar_url=data.get("avatar_url") or "",
        )


class SessionView:
    """Accessors for the keys this app keeps in a session mapping."""

    def __init__(self, store: MutableMapping[str, Any]):
        self._store = store

    @property
    def oauth_state(self) -> str | None:
        return self._store.get(STATE_KEY)

    def issue_state(self, state: str) -> None:
        """Remember the nonce of a new authorization attempt, replacing any older one."""
        self._store[STATE_KEY] = state

    def consume_state(self) -> str | None:
        return self._store.pop(STATE_KEY, None)

    @property
    def user(self) -> SessionUser | None:
        return SessionUser.from_dict(self._store.get(USER_KEY))

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def clear_user(self) -> None:
        self._store.pop(USER_KEY, None)

    def set_user(self, user: SessionUser) -> None:
        self._store[USER_KEY] = user.to_dict()

    def destroy(self) -> None:
        """Drop everything stored for this browser."""
        try:
            self._store.clear()
        except RuntimeError as e:
            # Flask's NullSession raises when no usable session backend is configured.
            raise SessionStoreError("Could not log out.") from e


def current_session() -> SessionView:
    return SessionView(session)
