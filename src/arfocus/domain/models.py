"""Core domain models for the arfocus system.

These models represent the data flowing through the focus timer:
captured camera frames, presence samples produced by the classifier,
the debounced attention state, the interval clock phase, read-only
snapshots for presentation layers, and the immutable session log entry.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Literal, get_args

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class AttentionState(str, enum.Enum):
    """Debounced attention signal read by the scoring tick."""

    FOCUSED = "focused"  # Face seen on the latest sample
    DISTRACTED = "distracted"  # Absent for longer than the grace period
    UNKNOWN = "unknown"  # No reliable signal (classifier unavailable or never sampled)


class ClockPhase(str, enum.Enum):
    """Which half of the work/break cycle the interval clock is in."""

    WORK = "work"
    BREAK = "break"

    @property
    def other(self) -> ClockPhase:
        return ClockPhase.BREAK if self is ClockPhase.WORK else ClockPhase.WORK


Mode = Literal["alpha", "beta"]
MODES: tuple[str, ...] = get_args(Mode)

SESSION_LOG_COLUMNS: tuple[str, ...] = (
    "id",
    "startedAt",
    "endedAt",
    "durationSec",
    "workMinutes",
    "breakMinutes",
    "focusSec",
    "distractSec",
    "hpStart",
    "hpEnd",
    "mode",
)


# ---------------------------------------------------------------------------
# Vision / Capture Models
# ---------------------------------------------------------------------------


class CapturedFrame(BaseModel):
    """A single frame captured from the webcam.

    Contains the raw image data as a numpy array along with metadata
    about when and from which device it was captured.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    image: np.ndarray = Field(description="Raw image data as BGR numpy array (OpenCV format)")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the frame was captured")
    frame_number: int = Field(ge=0, description="Sequential frame counter")
    source_device: str = Field(default="webcam", description="Identifier for the capture device")


class PresenceSample(BaseModel):
    """One classifier verdict on whether a face is in front of the camera.

    ``timestamp_ms`` is a monotonic millisecond reading; only differences
    between consecutive samples are meaningful.
    """

    model_config = ConfigDict(frozen=True)

    present: bool
    timestamp_ms: float = Field(ge=0.0)


# ---------------------------------------------------------------------------
# Session Models
# ---------------------------------------------------------------------------


class SessionLog(BaseModel):
    """An immutable record of one saved focus session.

    Serialized with camelCase keys so persisted logs and exported tables
    share the same column names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    started_at: datetime = Field(alias="startedAt")
    ended_at: datetime = Field(alias="endedAt")
    duration_sec: int = Field(ge=0, alias="durationSec")
    work_minutes: int = Field(alias="workMinutes")
    break_minutes: int = Field(alias="breakMinutes")
    focus_sec: int = Field(ge=0, alias="focusSec")
    distract_sec: int = Field(ge=0, alias="distractSec")
    hp_start: float = Field(ge=0.0, le=100.0, alias="hpStart")
    hp_end: float = Field(ge=0.0, le=100.0, alias="hpEnd")
    mode: Mode = "alpha"

    @model_validator(mode="after")
    def _check_duration(self) -> SessionLog:
        if self.duration_sec != self.focus_sec + self.distract_sec:
            raise ValueError("durationSec must equal focusSec + distractSec")
        return self

    def to_row(self) -> list[object]:
        """Values in export column order."""
        data = self.model_dump(mode="json", by_alias=True)
        return [data[column] for column in SESSION_LOG_COLUMNS]


class FocusSnapshot(BaseModel):
    """Read-only view of the timer state for presentation layers."""

    model_config = ConfigDict(frozen=True)

    phase: ClockPhase
    seconds_left: int = Field(ge=0)
    phase_total_seconds: int = Field(gt=0)
    is_running: bool
    hp: float = Field(ge=0.0, le=100.0)
    attention: AttentionState
    focus_sec: int = Field(ge=0)
    distract_sec: int = Field(ge=0)
    work_minutes: int
    break_minutes: int
    mode: Mode
    camera_enabled: bool
    session_open: bool

    @property
    def progress(self) -> float:
        """Fraction of the current phase already elapsed (0-1)."""
        return (self.phase_total_seconds - self.seconds_left) / self.phase_total_seconds


class SaveResult(BaseModel):
    """Outcome of saving a session."""

    model_config = ConfigDict(frozen=True)

    entry: SessionLog
    persisted: bool = Field(description="False when the store write failed; the in-memory log still has the entry")
