"""Turns noisy presence samples into a stable attention state.

Focus is declared on the first present sample. Distraction is only
declared once consecutive absent samples have covered more than the
grace period, so blinks and quick head turns never register.
"""

from __future__ import annotations

import logging

from arfocus.domain.models import AttentionState, PresenceSample

logger = logging.getLogger(__name__)

DEFAULT_GRACE_MS = 1500.0


class AttentionDebouncer:
    """Asymmetric debounce over presence samples.

    Elapsed time between samples comes from the sample timestamps, so a
    slow classifier still accrues the right amount of absence.
    """

    def __init__(self, grace_ms: float = DEFAULT_GRACE_MS) -> None:
        self._grace_ms = grace_ms
        self._state = AttentionState.UNKNOWN
        self._streak_ms = 0.0
        self._last_ts: float | None = None

    @property
    def state(self) -> AttentionState:
        return self._state

    @property
    def streak_ms(self) -> float:
        """Milliseconds of consecutive absence since the last present sample."""
        return self._streak_ms

    @property
    def grace_ms(self) -> float:
        return self._grace_ms

    def observe(self, sample: PresenceSample) -> AttentionState:
        """Apply one presence sample and return the resulting state."""
        elapsed = self._elapsed_since_last(sample.timestamp_ms)
        previous = self._state

        if sample.present:
            self._streak_ms = 0.0
            self._state = AttentionState.FOCUSED
        else:
            self._streak_ms += elapsed
            if self._streak_ms > self._grace_ms:
                self._state = AttentionState.DISTRACTED

        if self._state is not previous:
            logger.debug(
                "Attention %s -> %s (streak %.0fms)",
                previous.value, self._state.value, self._streak_ms,
            )
        return self._state

    def mark_unavailable(self, timestamp_ms: float | None = None) -> AttentionState:
        """Record that no classification was possible for this sample slot.

        The absence streak is left as-is; only the reported state changes.
        """
        if timestamp_ms is not None:
            self._elapsed_since_last(timestamp_ms)
        if self._state is not AttentionState.UNKNOWN:
            logger.debug("Attention %s -> unknown (classifier unavailable)", self._state.value)
        self._state = AttentionState.UNKNOWN
        return self._state

    def reset(self) -> None:
        self._state = AttentionState.UNKNOWN
        self._streak_ms = 0.0
        self._last_ts = None

    def _elapsed_since_last(self, timestamp_ms: float) -> float:
        if self._last_ts is None:
            elapsed = 0.0
        else:
            # Clock skew between sources must never shrink the streak.
            elapsed = max(0.0, timestamp_ms - self._last_ts)
        self._last_ts = timestamp_ms
        return elapsed
