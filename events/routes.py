"""
Event routes.

Endpoints:
  - GET  /events      public list of every logged event
  - POST /events      append an event (form or JSON body: type, details)
  - GET  /new-event   submission form, signed-in users only
"""

from __future__ import annotations

from flask import Blueprint, current_app, redirect, render_template, request, url_for

from auth.decorators import login_required
from auth.session import current_session

from .store import EventStore

events_bp = Blueprint("events", __name__)


def get_event_store() -> EventStore:
    store = current_app.config.get("EVENT_STORE")
    if not isinstance(store, EventStore):
        raise RuntimeError("Event store not initialized. Pass one to create_app() or let it build the default.")
    return store


def client_ip() -> str:
    """Best-effort client address: first X-Forwarded-For hop, else the peer address."""
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or ""


@events_bp.get("/events")
def list_events():
    return render_template("events.html", events=get_event_store().list())


@events_bp.post("/events")
def create_event():
    data = request.get_json(silent=True) if request.is_json else None
    if not isinstance(data, dict):
        data = request.form

    user = current_session().user
    get_event_store().append(
        data.get("type"),
        data.get("details"),
        user=user.login if user else None,
        ip=client_ip(),
    )
    return redirect(url_for("events.list_events"))


@events_bp.get("/new-event")
@login_required
def new_event():
    return render_template("new_event.html")
