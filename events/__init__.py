"""
Event log package: the event store and the routes that read and append to it.
"""

from .store import EventRecord, EventStore, InMemoryEventStore

__all__ = ["EventRecord", "EventStore", "InMemoryEventStore"]
