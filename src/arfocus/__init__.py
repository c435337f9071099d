"""arfocus -- Camera-assisted focus timer.

This package runs a work/break interval clock, infers whether the user
is present from periodic face-detection samples, and turns presence or
absence into a health-point (HP) score that grows slowly while focused
and drains quickly while distracted. Completed sessions are appended to
a capped, locally persisted log for later review and export.
"""

__version__ = "0.1.0"
