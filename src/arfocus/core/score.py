"""Per-tick HP scoring from the current attention state."""

from __future__ import annotations

import logging

from arfocus.domain.models import AttentionState

logger = logging.getLogger(__name__)

HP_MIN = 0.0
HP_MAX = 100.0
DEFAULT_FOCUS_REWARD_PER_SEC = 0.06
DEFAULT_DISTRACT_PENALTY_PER_SEC = 0.5


def clamp_hp(value: float) -> float:
    return max(HP_MIN, min(HP_MAX, value))


class ScoreEngine:
    """Accumulates HP and focused/distracted seconds, one tick at a time.

    UNKNOWN scores exactly like DISTRACTED: classifier downtime is not
    rewarded.
    """

    def __init__(
        self,
        focus_reward_per_sec: float = DEFAULT_FOCUS_REWARD_PER_SEC,
        distract_penalty_per_sec: float = DEFAULT_DISTRACT_PENALTY_PER_SEC,
    ) -> None:
        self._focus_reward = focus_reward_per_sec
        self._distract_penalty = distract_penalty_per_sec
        self._hp = HP_MAX
        self._focus_sec = 0
        self._distract_sec = 0

    @property
    def hp(self) -> float:
        return self._hp

    @property
    def focus_sec(self) -> int:
        return self._focus_sec

    @property
    def distract_sec(self) -> int:
        return self._distract_sec

    @property
    def ticks(self) -> int:
        return self._focus_sec + self._distract_sec

    def apply(self, attention: AttentionState) -> float:
        """Score one second of ``attention`` and return the new HP."""
        if attention is AttentionState.FOCUSED:
            self._hp = clamp_hp(self._hp + self._focus_reward)
            self._focus_sec += 1
        else:
            self._hp = clamp_hp(self._hp - self._distract_penalty)
            self._distract_sec += 1
        return self._hp

    def reset(self) -> None:
        self._hp = HP_MAX
        self._focus_sec = 0
        self._distract_sec = 0
