"""Domain models for arfocus.

This package contains the core data structures, enumerations, and value
objects used throughout the system. All models use Pydantic v2 for
validation and serialization.
"""

from arfocus.domain.models import (
    SESSION_LOG_COLUMNS,
    AttentionState,
    CapturedFrame,
    ClockPhase,
    FocusSnapshot,
    MODES,
    Mode,
    PresenceSample,
    SaveResult,
    SessionLog,
)

__all__ = [
    "SESSION_LOG_COLUMNS",
    "AttentionState",
    "CapturedFrame",
    "ClockPhase",
    "FocusSnapshot",
    "MODES",
    "Mode",
    "PresenceSample",
    "SaveResult",
    "SessionLog",
]
