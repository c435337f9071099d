"""Abstract base class for camera frame sources.

All capture implementations must conform to this interface, so the
presence driver can run against a real webcam or a synthetic source in
tests without changing the rest of the pipeline.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from arfocus.domain.models import CapturedFrame

logger = logging.getLogger(__name__)


class CaptureSource(ABC):
    """Abstract interface for capturing frames from a camera.

    Implementations handle device initialization, frame capture and
    cleanup. Use it as an async context manager so the device is always
    released, including when the presence driver is cancelled.

    Example usage::

        async with WebcamCapture(device_index=0) as capture:
            frame = await capture.capture_frame()
    """

    def __init__(self) -> None:
        self._frame_counter: int = 0
        self._is_open: bool = False

    @property
    def is_open(self) -> bool:
        """Whether the capture device is currently open and ready."""
        return self._is_open

    @abstractmethod
    async def open(self) -> None:
        """Open and initialize the capture device.

        Raises:
            CaptureError: If the device cannot be opened.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release the capture device. Safe to call multiple times."""
        ...

    @abstractmethod
    async def capture_frame(self) -> CapturedFrame:
        """Capture a single frame from the source.

        Raises:
            CaptureError: If frame capture fails.
        """
        ...

    async def __aenter__(self) -> CaptureSource:
        """Async context manager entry -- opens the capture device."""
        await self.open()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        """Async context manager exit -- closes the capture device."""
        await self.close()


class CaptureError(Exception):
    """Raised when the camera cannot be opened or a frame cannot be read."""
