"""Face presence detection for arfocus.

Public API:
    PresenceClassifier -- Abstract base class
    ClassifierError -- Raised when detection is unavailable
    HaarPresenceClassifier -- OpenCV Haar cascade implementation
"""

from arfocus.detection.base import ClassifierError, PresenceClassifier

__all__ = ["PresenceClassifier", "ClassifierError", "HaarPresenceClassifier"]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "HaarPresenceClassifier":
        from arfocus.detection.haar import HaarPresenceClassifier
        return HaarPresenceClassifier
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
