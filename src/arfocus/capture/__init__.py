"""Camera capture module for arfocus.

Public API:
    CaptureSource -- Abstract base class
    CaptureError -- Raised on device or read failures
    WebcamCapture -- OpenCV webcam implementation
"""

from arfocus.capture.base import CaptureError, CaptureSource

__all__ = ["CaptureSource", "CaptureError", "WebcamCapture"]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "WebcamCapture":
        from arfocus.capture.webcam import WebcamCapture
        return WebcamCapture
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
