"""
Route decorators for authentication.

- `login_required`: user must be signed in with GitHub; otherwise 401.
"""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

from errors import NotAuthenticatedError

from .session import current_session

F = TypeVar("F", bound=Callable[..., object])


def login_required(fn: F) -> F:
    """Reject anonymous requests with 401."""

    @wraps(fn)
    def wrapper(*args, **kwargs):  # type: ignore[no-untyped-def]
        if current_session().is_authenticated:
            return fn(*args, **kwargs)
        raise NotAuthenticatedError("Please login first.")

    return wrapper  # type: ignore[return-value]
