"""Session lifecycle and the capped session log."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from arfocus.core.clock import IntervalClock
from arfocus.core.score import ScoreEngine
from arfocus.domain.models import MODES, Mode, SaveResult, SessionLog
from arfocus.storage.base import SessionStore, StorageError

logger = logging.getLogger(__name__)

MAX_LOG_ENTRIES = 300


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _check_mode(mode: str) -> Mode:
    if mode not in MODES:
        raise ValueError(f"Unknown mode {mode!r}, expected one of {', '.join(MODES)}")
    return mode


class SessionRecorder:
    """Opens, discards and saves sessions over a clock and a score engine.

    The log is kept newest first and loaded from the store once, at
    construction. After a save the in-memory log is authoritative even
    if the store write failed; the next successful save rewrites it in
    full.
    """

    def __init__(
        self,
        clock: IntervalClock,
        score: ScoreEngine,
        store: SessionStore,
        mode: Mode = "alpha",
        max_entries: int = MAX_LOG_ENTRIES,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        self._clock = clock
        self._score = score
        self._store = store
        self._mode: Mode = _check_mode(mode)
        self._max_entries = max_entries
        self._now = now
        self._started_at: datetime | None = None
        self._hp_start = score.hp
        self._sessions: list[SessionLog] = store.load()[:max_entries]
        logger.info("Loaded %d saved sessions", len(self._sessions))

    @property
    def sessions(self) -> list[SessionLog]:
        """The full session log, newest first."""
        return list(self._sessions)

    @property
    def session_open(self) -> bool:
        return self._started_at is not None

    @property
    def started_at(self) -> datetime | None:
        return self._started_at

    @property
    def hp_start(self) -> float:
        return self._hp_start

    @property
    def mode(self) -> Mode:
        return self._mode

    def set_mode(self, mode: Mode) -> None:
        """Set the tag recorded with the next saved session.

        Raises:
            ValueError: If ``mode`` is not one of ``MODES``.
        """
        self._mode = _check_mode(mode)

    def start(self) -> None:
        """Start (or resume) the clock, opening a session if none is open."""
        if self._started_at is None:
            self._started_at = self._now()
            self._hp_start = self._score.hp
            logger.info("Session opened at %s (HP %.1f)", self._started_at.isoformat(), self._hp_start)
        self._clock.start()

    def pause(self) -> None:
        self._clock.pause()

    def reset(self) -> None:
        """Discard the open session without logging it."""
        self._clock.reset()
        self._score.reset()
        self._started_at = None

    def save(self) -> SaveResult:
        """Close the current session, log it, persist the log and reset."""
        self._clock.pause()
        ended_at = self._now()
        if self._started_at is None:
            logger.info("Saving a session that was never started, using save time as its start")
            started_at = ended_at
            hp_start = self._score.hp
        else:
            started_at = self._started_at
            hp_start = self._hp_start

        entry = SessionLog(
            id=str(int(ended_at.timestamp() * 1000)),
            started_at=started_at,
            ended_at=ended_at,
            duration_sec=self._score.ticks,
            work_minutes=self._clock.work_minutes,
            break_minutes=self._clock.break_minutes,
            focus_sec=self._score.focus_sec,
            distract_sec=self._score.distract_sec,
            hp_start=hp_start,
            hp_end=self._score.hp,
            mode=self._mode,
        )
        self._sessions = [entry, *self._sessions][: self._max_entries]

        persisted = True
        try:
            self._store.save(self._sessions)
        except StorageError as e:
            persisted = False
            logger.warning("Session %s kept in memory only: %s", entry.id, e)

        logger.info(
            "Saved session %s: %ds focused, %ds distracted, HP %.1f -> %.1f",
            entry.id, entry.focus_sec, entry.distract_sec, entry.hp_start, entry.hp_end,
        )
        self.reset()
        return SaveResult(entry=entry, persisted=persisted)
