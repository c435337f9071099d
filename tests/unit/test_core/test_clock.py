"""Tests for the IntervalClock."""

from __future__ import annotations

import pytest

from arfocus.core.clock import IntervalClock
from arfocus.domain.models import ClockPhase


@pytest.fixture
def clock() -> IntervalClock:
    return IntervalClock(work_minutes=25, break_minutes=5)


class TestClockInit:
    def test_defaults(self, clock: IntervalClock) -> None:
        assert clock.phase is ClockPhase.WORK
        assert clock.seconds_left == 1500
        assert clock.is_running is False
        assert clock.progress == 0

    def test_out_of_range_minutes_are_clamped(self) -> None:
        clock = IntervalClock(work_minutes=1, break_minutes=500)
        assert clock.work_minutes == 5
        assert clock.break_minutes == 60
        assert clock.seconds_left == 300


class TestTick:
    def test_tick_while_stopped_does_nothing(self, clock: IntervalClock) -> None:
        assert clock.tick() is False
        assert clock.seconds_left == 1500

    def test_tick_decrements(self, clock: IntervalClock) -> None:
        clock.start()
        clock.tick()
        assert clock.seconds_left == 1499
        assert clock.progress == pytest.approx(1 / 1500)

    def test_full_work_phase_flips_to_break(self, clock: IntervalClock) -> None:
        clock.start()
        flips = [clock.tick() for _ in range(1500)]
        assert flips.count(True) == 1
        assert flips[-1] is True
        assert clock.phase is ClockPhase.BREAK
        assert clock.seconds_left == 300

    def test_break_flips_back_to_work(self, clock: IntervalClock) -> None:
        clock.start()
        for _ in range(1500 + 300):
            clock.tick()
        assert clock.phase is ClockPhase.WORK
        assert clock.seconds_left == 1500

    def test_never_shows_zero(self, clock: IntervalClock) -> None:
        clock.start()
        for _ in range(3600):
            clock.tick()
            assert clock.seconds_left > 0


class TestLifecycle:
    def test_start_is_idempotent(self, clock: IntervalClock) -> None:
        clock.start()
        clock.tick()
        clock.start()
        assert clock.is_running
        assert clock.seconds_left == 1499

    def test_pause_preserves_phase_and_seconds(self, clock: IntervalClock) -> None:
        clock.start()
        for _ in range(1510):
            clock.tick()
        clock.pause()
        assert clock.is_running is False
        assert clock.phase is ClockPhase.BREAK
        assert clock.seconds_left == 290
        clock.tick()
        assert clock.seconds_left == 290

    def test_reset_goes_back_to_fresh_work(self, clock: IntervalClock) -> None:
        clock.start()
        for _ in range(1510):
            clock.tick()
        clock.set_work_minutes(50)
        clock.reset()
        assert clock.is_running is False
        assert clock.phase is ClockPhase.WORK
        assert clock.seconds_left == 3000


class TestConfiguration:
    def test_work_change_while_stopped_reloads(self, clock: IntervalClock) -> None:
        assert clock.set_work_minutes(45) == 45
        assert clock.seconds_left == 2700

    def test_work_change_while_running_keeps_countdown(self, clock: IntervalClock) -> None:
        clock.start()
        clock.tick()
        clock.set_work_minutes(45)
        assert clock.seconds_left == 1499
        assert clock.phase_total_seconds == 2700

    def test_break_change_in_work_phase_does_not_reload(self, clock: IntervalClock) -> None:
        clock.set_break_minutes(10)
        assert clock.seconds_left == 1500

    def test_break_change_while_paused_in_break_reloads(self, clock: IntervalClock) -> None:
        clock.start()
        for _ in range(1505):
            clock.tick()
        clock.pause()
        clock.set_break_minutes(10)
        assert clock.seconds_left == 600

    def test_new_lengths_apply_on_next_phase(self, clock: IntervalClock) -> None:
        clock.start()
        clock.set_break_minutes(7)
        for _ in range(1500):
            clock.tick()
        assert clock.seconds_left == 420

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, 5), (4, 5), (5, 5), (120, 120), (121, 120), (-10, 5)],
    )
    def test_work_bounds(self, clock: IntervalClock, value: int, expected: int) -> None:
        assert clock.set_work_minutes(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2, 3), (3, 3), (60, 60), (61, 60)],
    )
    def test_break_bounds(self, clock: IntervalClock, value: int, expected: int) -> None:
        assert clock.set_break_minutes(value) == expected
