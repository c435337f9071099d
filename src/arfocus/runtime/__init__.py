"""Asyncio drivers for arfocus.

Public API:
    FocusLoop -- Runs the 1 Hz tick driver and the presence driver
"""

from arfocus.runtime.loop import FocusLoop

__all__ = ["FocusLoop"]
