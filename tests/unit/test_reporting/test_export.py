"""Tests for reporting helpers."""

from __future__ import annotations

import csv
import io
from datetime import datetime, timedelta, timezone

import pytest

from arfocus.domain.models import SESSION_LOG_COLUMNS
from arfocus.reporting.export import daily_totals, format_mmss, sessions_to_csv, write_csv


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0, "00:00"), (59, "00:59"), (60, "01:00"), (1500, "25:00"), (3725, "62:05"), (-3, "00:00"), (9.9, "00:09")],
)
def test_format_mmss(seconds: float, expected: str) -> None:
    assert format_mmss(seconds) == expected


class TestCsvExport:
    def test_header_only_for_empty_log(self) -> None:
        assert sessions_to_csv([]) == ",".join(SESSION_LOG_COLUMNS) + "\n"

    def test_column_order(self, make_session) -> None:
        text = sessions_to_csv([make_session(id="42", mode="beta")])
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[0] == [
            "id", "startedAt", "endedAt", "durationSec", "workMinutes", "breakMinutes",
            "focusSec", "distractSec", "hpStart", "hpEnd", "mode",
        ]
        assert rows[1][0] == "42"
        assert rows[1][3:8] == ["90", "25", "5", "60", "30"]
        assert rows[1][-1] == "beta"

    def test_write_csv_counts_rows(self, make_session) -> None:
        buf = io.StringIO()
        assert write_csv([make_session(id="1"), make_session(id="2")], buf) == 2
        assert len(buf.getvalue().splitlines()) == 3


class TestDailyTotals:
    def test_groups_by_start_date(self, make_session) -> None:
        day = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)
        sessions = [
            make_session(id="1", started_at=day, focus_sec=600, distract_sec=120),
            make_session(id="2", started_at=day + timedelta(hours=5), focus_sec=300, distract_sec=60),
            make_session(id="3", started_at=day + timedelta(days=1), focus_sec=60, distract_sec=0),
        ]
        totals = daily_totals(sessions)
        assert [t.date for t in totals] == ["2025-01-01", "2025-01-02"]
        assert totals[0].focus_minutes == pytest.approx(15.0)
        assert totals[0].distract_minutes == pytest.approx(3.0)
        assert totals[1].focus_minutes == pytest.approx(1.0)

    def test_keeps_most_recent_days(self, make_session) -> None:
        start = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
        sessions = [make_session(id=str(i), started_at=start + timedelta(days=i)) for i in range(10)]
        totals = daily_totals(sessions, days=7)
        assert len(totals) == 7
        assert totals[0].date == "2025-01-04"
        assert totals[-1].date == "2025-01-10"

    def test_empty(self) -> None:
        assert daily_totals([]) == []
