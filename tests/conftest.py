"""Shared test fixtures for the arfocus test suite.

Provides common fixtures used across unit tests: sample frames, an
in-memory session store, a controllable wall clock, and mock capture
and classifier collaborators.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import numpy as np
import pytest

from arfocus.core.timer import FocusTimer
from arfocus.domain.models import CapturedFrame, SessionLog
from arfocus.storage.base import SessionStore, StorageError


class InMemorySessionStore(SessionStore):
    """SessionStore that keeps the log in a list and can be told to fail."""

    def __init__(self, initial: Sequence[SessionLog] = ()) -> None:
        super().__init__()
        self.saved: list[SessionLog] = list(initial)
        self.save_calls = 0
        self.fail_writes = False

    def load(self) -> list[SessionLog]:
        return list(self.saved)

    def save(self, sessions: Sequence[SessionLog]) -> None:
        self.save_calls += 1
        if self.fail_writes:
            raise StorageError("disk full")
        self.saved = list(sessions)


class FakeClock:
    """Wall clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


# ---------------------------------------------------------------------------
# Frame Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_image() -> np.ndarray:
    """A minimal 100x100 black image for testing."""
    return np.zeros((100, 100, 3), dtype=np.uint8)


@pytest.fixture
def sample_frame(sample_image: np.ndarray) -> CapturedFrame:
    """A CapturedFrame with a sample image."""
    return CapturedFrame(
        image=sample_image,
        timestamp=datetime(2025, 1, 1, 12, 0, 0),
        frame_number=0,
        source_device="test",
    )


# ---------------------------------------------------------------------------
# Timer / Storage Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def memory_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def make_session():
    """Factory for SessionLog entries with sensible defaults."""

    def _make(
        id: str = "1735732800000",
        started_at: datetime = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
        focus_sec: int = 60,
        distract_sec: int = 30,
        **overrides,
    ) -> SessionLog:
        fields = dict(
            id=id,
            started_at=started_at,
            ended_at=started_at + timedelta(seconds=focus_sec + distract_sec),
            duration_sec=focus_sec + distract_sec,
            work_minutes=25,
            break_minutes=5,
            focus_sec=focus_sec,
            distract_sec=distract_sec,
            hp_start=100.0,
            hp_end=88.6,
            mode="alpha",
        )
        fields.update(overrides)
        return SessionLog(**fields)

    return _make


@pytest.fixture
def timer(memory_store: InMemorySessionStore, fake_clock: FakeClock) -> FocusTimer:
    """A FocusTimer on default settings with an in-memory store."""
    return FocusTimer(store=memory_store, now=fake_clock)


# ---------------------------------------------------------------------------
# Mock Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_capture_source(sample_frame: CapturedFrame) -> AsyncMock:
    """A mock CaptureSource that always returns ``sample_frame``."""
    mock = AsyncMock()
    mock.is_open = True
    mock.capture_frame.return_value = sample_frame
    mock.__aenter__.return_value = mock
    return mock


@pytest.fixture
def mock_classifier() -> MagicMock:
    """A ready PresenceClassifier mock reporting a face by default."""
    mock = MagicMock()
    mock.is_ready = True
    mock.load = AsyncMock()
    mock.sample = AsyncMock(return_value=True)
    return mock
