"""Focus timer state machines.

Public API:
    AttentionDebouncer -- Presence samples to attention state
    IntervalClock -- Work/break countdown
    ScoreEngine -- Per-tick HP scoring
    SessionRecorder -- Session lifecycle and capped log
    FocusTimer -- Facade combining all of the above
"""

from arfocus.core.clock import IntervalClock
from arfocus.core.debouncer import AttentionDebouncer
from arfocus.core.recorder import SessionRecorder
from arfocus.core.score import ScoreEngine
from arfocus.core.timer import FocusTimer

__all__ = [
    "AttentionDebouncer",
    "FocusTimer",
    "IntervalClock",
    "ScoreEngine",
    "SessionRecorder",
]
