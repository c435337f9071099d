"""Formatting helpers for presenting and exporting the session log."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Sequence
from typing import TextIO

from pydantic import BaseModel

from arfocus.domain.models import SESSION_LOG_COLUMNS, SessionLog


class DailyTotal(BaseModel):
    """Focused and distracted minutes summed over one calendar day."""

    date: str
    focus_minutes: float = 0.0
    distract_minutes: float = 0.0


def format_mmss(total_seconds: float) -> str:
    """Format a second count as ``MM:SS``; minutes are not wrapped at 60."""
    total = max(0, int(total_seconds))
    return f"{total // 60:02d}:{total % 60:02d}"


def write_csv(sessions: Iterable[SessionLog], out: TextIO) -> int:
    """Write ``sessions`` as CSV with a header row. Returns the row count."""
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(SESSION_LOG_COLUMNS)
    count = 0
    for session in sessions:
        writer.writerow(session.to_row())
        count += 1
    return count


def sessions_to_csv(sessions: Iterable[SessionLog]) -> str:
    buf = io.StringIO()
    write_csv(sessions, buf)
    return buf.getvalue()


def daily_totals(sessions: Sequence[SessionLog], days: int = 7) -> list[DailyTotal]:
    """Per-day focus and distraction minutes for the most recent ``days`` days.

    Days are keyed by the UTC date the session started on and only days
    that have sessions appear. Result is sorted oldest first.
    """
    by_day: dict[str, DailyTotal] = {}
    for session in sessions:
        key = session.started_at.date().isoformat()
        total = by_day.setdefault(key, DailyTotal(date=key))
        total.focus_minutes += session.focus_sec / 60
        total.distract_minutes += session.distract_sec / 60
    keys = sorted(by_day)[-days:] if days > 0 else []
    return [by_day[k] for k in keys]
