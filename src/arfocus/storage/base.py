"""Abstract base class for session log storage.

A store holds the whole ordered session log (newest first) under a
single fixed key. Implementations must treat missing or malformed data
as an empty log and never raise from ``load()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from arfocus.domain.models import SessionLog

DEFAULT_STORAGE_KEY = "arfocus.sessions.v1"


class SessionStore(ABC):
    """Durable key-value storage for the session log."""

    def __init__(self, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    @abstractmethod
    def load(self) -> list[SessionLog]:
        """Return the persisted log, or an empty list if missing or malformed."""
        ...

    @abstractmethod
    def save(self, sessions: Sequence[SessionLog]) -> None:
        """Replace the persisted log with ``sessions``.

        Raises:
            StorageError: If the write fails.
        """
        ...


class StorageError(Exception):
    """Raised when the session log cannot be written."""
