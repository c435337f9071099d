"""Reporting helpers: time formatting, CSV export and daily totals."""

from arfocus.reporting.export import (
    DailyTotal,
    daily_totals,
    format_mmss,
    sessions_to_csv,
    write_csv,
)

__all__ = ["DailyTotal", "daily_totals", "format_mmss", "sessions_to_csv", "write_csv"]
