"""The focus timer: shared state record for the tick and presence drivers.

``FocusTimer`` wires the debouncer, clock, score engine and recorder
together and is the only object the drivers and presentation layers
talk to. Every method is synchronous, so one call is one atomic update
on the event loop thread: ``tick()`` advances the clock and scores the
same second, and ``offer_sample()`` updates the streak and the state
together.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from arfocus.config.settings import Settings
from arfocus.core.clock import IntervalClock
from arfocus.core.debouncer import AttentionDebouncer
from arfocus.core.recorder import SessionRecorder, utc_now
from arfocus.core.score import ScoreEngine
from arfocus.domain.models import (
    AttentionState,
    ClockPhase,
    FocusSnapshot,
    Mode,
    PresenceSample,
    SaveResult,
    SessionLog,
)
from arfocus.storage.base import SessionStore

logger = logging.getLogger(__name__)


class FocusTimer:
    """Commands and observable state of one focus timer."""

    def __init__(
        self,
        store: SessionStore,
        work_minutes: int = 25,
        break_minutes: int = 5,
        mode: Mode = "alpha",
        grace_ms: float = 1500.0,
        focus_reward_per_sec: float = 0.06,
        distract_penalty_per_sec: float = 0.5,
        max_entries: int = 300,
        camera_enabled: bool = True,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        self._debouncer = AttentionDebouncer(grace_ms=grace_ms)
        self._clock = IntervalClock(work_minutes=work_minutes, break_minutes=break_minutes)
        self._score = ScoreEngine(
            focus_reward_per_sec=focus_reward_per_sec,
            distract_penalty_per_sec=distract_penalty_per_sec,
        )
        self._recorder = SessionRecorder(
            clock=self._clock,
            score=self._score,
            store=store,
            mode=mode,
            max_entries=max_entries,
            now=now,
        )
        self._camera_enabled = camera_enabled

    @classmethod
    def from_settings(cls, settings: Settings, store: SessionStore) -> FocusTimer:
        return cls(
            store=store,
            work_minutes=settings.timer.work_minutes,
            break_minutes=settings.timer.break_minutes,
            mode=settings.timer.mode,
            grace_ms=settings.attention.grace_ms,
            focus_reward_per_sec=settings.scoring.focus_reward_per_sec,
            distract_penalty_per_sec=settings.scoring.distract_penalty_per_sec,
            max_entries=settings.storage.max_entries,
            camera_enabled=settings.capture.camera_enabled,
        )

    # -- observable state ---------------------------------------------------

    @property
    def seconds_left(self) -> int:
        return self._clock.seconds_left

    @property
    def phase(self) -> ClockPhase:
        return self._clock.phase

    @property
    def hp(self) -> float:
        return self._score.hp

    @property
    def attention(self) -> AttentionState:
        return self._debouncer.state

    @property
    def focus_sec(self) -> int:
        return self._score.focus_sec

    @property
    def distract_sec(self) -> int:
        return self._score.distract_sec

    @property
    def is_running(self) -> bool:
        return self._clock.is_running

    @property
    def camera_enabled(self) -> bool:
        return self._camera_enabled

    @property
    def mode(self) -> Mode:
        return self._recorder.mode

    @property
    def work_minutes(self) -> int:
        return self._clock.work_minutes

    @property
    def break_minutes(self) -> int:
        return self._clock.break_minutes

    @property
    def sessions(self) -> list[SessionLog]:
        """The full session log, newest first, for export."""
        return self._recorder.sessions

    def snapshot(self) -> FocusSnapshot:
        return FocusSnapshot(
            phase=self._clock.phase,
            seconds_left=self._clock.seconds_left,
            phase_total_seconds=self._clock.phase_total_seconds,
            is_running=self._clock.is_running,
            hp=self._score.hp,
            attention=self._debouncer.state,
            focus_sec=self._score.focus_sec,
            distract_sec=self._score.distract_sec,
            work_minutes=self._clock.work_minutes,
            break_minutes=self._clock.break_minutes,
            mode=self._recorder.mode,
            camera_enabled=self._camera_enabled,
            session_open=self._recorder.session_open,
        )

    # -- commands -------------------------------------------------------------

    def start(self) -> None:
        self._recorder.start()

    def pause(self) -> None:
        self._recorder.pause()

    def reset(self) -> None:
        self._recorder.reset()
        logger.info("Timer reset")

    def save(self) -> SaveResult:
        return self._recorder.save()

    def set_work_minutes(self, minutes: float) -> int:
        return self._clock.set_work_minutes(minutes)

    def set_break_minutes(self, minutes: float) -> int:
        return self._clock.set_break_minutes(minutes)

    def set_mode(self, mode: Mode) -> None:
        self._recorder.set_mode(mode)

    def set_camera_enabled(self, enabled: bool) -> None:
        """Flip the camera flag. Either way the attention signal restarts from UNKNOWN."""
        if enabled == self._camera_enabled:
            return
        self._camera_enabled = enabled
        self._debouncer.reset()
        logger.info("Camera %s", "enabled" if enabled else "disabled")

    # -- driver entry points ---------------------------------------------------

    def tick(self) -> bool:
        """One 1 Hz step: advance the clock and score the same second.

        Returns True if the clock switched phase. No-op while paused.
        """
        if not self._clock.is_running:
            return False
        attention = self._debouncer.state
        flipped = self._clock.tick()
        self._score.apply(attention)
        return flipped

    def offer_sample(self, sample: PresenceSample) -> AttentionState:
        """Feed one presence sample. Ignored while the camera is disabled."""
        if not self._camera_enabled:
            return self._debouncer.state
        return self._debouncer.observe(sample)

    def mark_unavailable(self, timestamp_ms: float | None = None) -> AttentionState:
        return self._debouncer.mark_unavailable(timestamp_ms)
