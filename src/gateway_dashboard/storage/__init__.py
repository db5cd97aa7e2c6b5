"""
Module: storage
Description: Package initialization for the persistence layer.

This package contains the dashboard's client-local storage:
- persistent: Key/value backends (JSON file, memory) and PersistenceFailure
- event_store: Bounded webhook delivery history built on a key/value backend
"""

from .event_store import EventStore
from .persistent import JsonFileStore, MemoryStore, PersistenceFailure, PersistentStore

__all__ = [
    "EventStore",
    "JsonFileStore",
    "MemoryStore",
    "PersistenceFailure",
    "PersistentStore",
]
