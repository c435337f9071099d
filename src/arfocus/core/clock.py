"""Two-phase work/break countdown clock."""

from __future__ import annotations

import logging

from arfocus.config.settings import BREAK_MINUTES_RANGE, WORK_MINUTES_RANGE, clamp_minutes
from arfocus.domain.models import ClockPhase

logger = logging.getLogger(__name__)


class IntervalClock:
    """Counts down the current phase once per tick and flips on expiry.

    Minute settings are clamped on the way in. Changing the length of
    the phase the clock is sitting in takes effect immediately only while
    the clock is stopped; a running countdown is never rewritten.
    """

    def __init__(self, work_minutes: int = 25, break_minutes: int = 5) -> None:
        self._work_minutes = clamp_minutes(work_minutes, WORK_MINUTES_RANGE)
        self._break_minutes = clamp_minutes(break_minutes, BREAK_MINUTES_RANGE)
        self._phase = ClockPhase.WORK
        self._seconds_left = self._work_minutes * 60
        self._running = False

    @property
    def phase(self) -> ClockPhase:
        return self._phase

    @property
    def seconds_left(self) -> int:
        return self._seconds_left

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def work_minutes(self) -> int:
        return self._work_minutes

    @property
    def break_minutes(self) -> int:
        return self._break_minutes

    @property
    def phase_total_seconds(self) -> int:
        return self._phase_seconds(self._phase)

    @property
    def progress(self) -> float:
        """Fraction of the current phase already elapsed (0-1)."""
        total = self.phase_total_seconds
        return (total - self._seconds_left) / total

    def start(self) -> None:
        if not self._running:
            self._running = True
            logger.debug("Clock started in %s phase, %ds left", self._phase.value, self._seconds_left)

    def pause(self) -> None:
        if self._running:
            self._running = False
            logger.debug("Clock paused in %s phase, %ds left", self._phase.value, self._seconds_left)

    def reset(self) -> None:
        self._running = False
        self._phase = ClockPhase.WORK
        self._seconds_left = self._work_minutes * 60

    def tick(self) -> bool:
        """Advance one second. Returns True if the phase flipped.

        Does nothing while stopped.
        """
        if not self._running:
            return False
        if self._seconds_left <= 1:
            self._phase = self._phase.other
            self._seconds_left = self._phase_seconds(self._phase)
            logger.info("Phase changed to %s (%ds)", self._phase.value, self._seconds_left)
            return True
        self._seconds_left -= 1
        return False

    def set_work_minutes(self, minutes: float) -> int:
        """Set the work length (clamped to 5-120). Returns the applied value."""
        self._work_minutes = clamp_minutes(minutes, WORK_MINUTES_RANGE)
        if not self._running and self._phase is ClockPhase.WORK:
            self._seconds_left = self._work_minutes * 60
        return self._work_minutes

    def set_break_minutes(self, minutes: float) -> int:
        """Set the break length (clamped to 3-60). Returns the applied value."""
        self._break_minutes = clamp_minutes(minutes, BREAK_MINUTES_RANGE)
        if not self._running and self._phase is ClockPhase.BREAK:
            self._seconds_left = self._break_minutes * 60
        return self._break_minutes

    def _phase_seconds(self, phase: ClockPhase) -> int:
        minutes = self._work_minutes if phase is ClockPhase.WORK else self._break_minutes
        return minutes * 60
