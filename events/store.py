"""
Event storage.

`EventStore` is the interface the routes depend on. `InMemoryEventStore` is
the default implementation: an append-only list that lives as long as the
process does.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone

from errors import ValidationError

logger = logging.getLogger(__name__)


def _iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class EventRecord:
    """A single logged event."""

    timestamp: str
    type: str
    user: str | None
    ip: str
    details: str


def validate_event(event_type: object, details: object) -> tuple[str, str]:
    """Return the trimmed type and details, or raise ValidationError."""

    event_type = event_type.strip() if isinstance(event_type, str) else ""
    details = details.strip() if isinstance(details, str) else ""
    if not event_type or not details:
        raise ValidationError("Missing event type or details")
    return event_type, details


class EventStore(ABC):
    @abstractmethod
    def append(self, event_type: str, details: str, user: str | None = None, ip: str = "") -> EventRecord:
        """Validate and append one event; returns the stored record."""

    @abstractmethod
    def list(self) -> list[EventRecord]:
        """All events, oldest first."""


class InMemoryEventStore(EventStore):
    """Process-lifetime event log. Emptied on restart."""

    def __init__(self):
        self._events: list[EventRecord] = []
        self._last: datetime | None = None
        self._lock = threading.Lock()

    def append(self, event_type: str, details: str, user: str | None = None, ip: str = "") -> EventRecord:
        event_type, details = validate_event(event_type, details)
        with self._lock:
            now = datetime.now(timezone.utc)
            # Wall clock may step backwards; keep timestamps non-decreasing.
            if self._last is not None and now < self._last:
                now = self._last
            self._last = now
            record = EventRecord(
                timestamp=_iso(now),
                type=event_type,
                user=user,
                ip=ip or "",
                details=details,
            )
            self._events.append(record)
        logger.debug("Logged event %s by %s", record.type, record.user or "anonymous")
        return record

    def list(self) -> list[EventRecord]:
        with self._lock:
            return self._events[:]
