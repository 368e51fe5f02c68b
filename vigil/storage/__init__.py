"""Persistence adapter for session state."""

from vigil.storage.base import KeyValueStore
from vigil.storage.keys import StorageKeys
from vigil.storage.memory import MemoryStore
from vigil.storage.session_storage import SessionStorage
from vigil.storage.sqlite import SqliteStore

__all__ = ["KeyValueStore", "MemoryStore", "SessionStorage", "SqliteStore", "StorageKeys"]
