"""JSON file backed session store."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from arfocus.domain.models import SessionLog
from arfocus.storage.base import DEFAULT_STORAGE_KEY, SessionStore, StorageError

logger = logging.getLogger(__name__)

_SESSIONS = TypeAdapter(list[SessionLog])


class JsonFileSessionStore(SessionStore):
    """Keeps the session log in a JSON object file, one entry per key.

    Other keys in the file are preserved on write. Writes go through a
    temporary file and ``os.replace`` so a crash never leaves a
    half-written log behind.
    """

    def __init__(self, path: Path | str, key: str = DEFAULT_STORAGE_KEY) -> None:
        super().__init__(key=key)
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[SessionLog]:
        document = self._read_document()
        raw = document.get(self._key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Stored sessions under %r are not a list, ignoring", self._key)
            return []
        sessions: list[SessionLog] = []
        skipped = 0
        for item in raw:
            try:
                sessions.append(SessionLog.model_validate(item))
            except ValidationError as e:
                skipped += 1
                logger.debug("Malformed session entry under %r: %s", self._key, e)
        if skipped:
            logger.warning(
                "Skipped %d malformed of %d stored sessions under %r", skipped, len(raw), self._key,
            )
        return sessions

    def save(self, sessions: Sequence[SessionLog]) -> None:
        document = self._read_document()
        document[self._key] = _SESSIONS.dump_python(list(sessions), mode="json", by_alias=True)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write session log to {self._path}: {e}") from e
        logger.debug("Persisted %d sessions to %s", len(sessions), self._path)

    def _read_document(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Cannot read session log %s: %s", self._path, e)
            return {}
        if not isinstance(document, dict):
            logger.warning("Session log %s is not a JSON object, ignoring", self._path)
            return {}
        return document
