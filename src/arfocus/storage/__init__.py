"""Session log persistence for arfocus.

Public API:
    SessionStore -- Abstract base class
    StorageError -- Raised when a write fails
    JsonFileSessionStore -- JSON file implementation
"""

from arfocus.storage.base import DEFAULT_STORAGE_KEY, SessionStore, StorageError
from arfocus.storage.json_store import JsonFileSessionStore

__all__ = ["DEFAULT_STORAGE_KEY", "JsonFileSessionStore", "SessionStore", "StorageError"]
