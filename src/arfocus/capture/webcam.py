"""OpenCV webcam frame source."""

from __future__ import annotations

import asyncio
import logging
import threading
from datetime import datetime

import cv2
import numpy as np

from arfocus.capture.base import CaptureError, CaptureSource
from arfocus.domain.models import CapturedFrame

logger = logging.getLogger(__name__)


class WebcamCapture(CaptureSource):
    """Reads frames from a local camera through ``cv2.VideoCapture``.

    Every device call runs in the default executor so the tick driver on
    the event loop is never blocked by the camera. A cancelled
    ``capture_frame`` cannot stop a read already running in a worker
    thread, so reads and the final release share a lock: ``close()``
    waits for an in-flight read before releasing the device.
    """

    def __init__(
        self,
        device_index: int = 0,
        resolution: tuple[int, int] | None = (640, 480),
    ) -> None:
        super().__init__()
        self._device_index = device_index
        self._resolution = resolution
        self._cap: cv2.VideoCapture | None = None
        self._device_lock = threading.Lock()

    @property
    def source_name(self) -> str:
        return f"webcam:{self._device_index}"

    async def open(self) -> None:
        loop = asyncio.get_running_loop()
        cap, (width, height) = await loop.run_in_executor(None, self._open_device)
        self._cap = cap
        self._is_open = True
        logger.info("Opened %s at %dx%d", self.source_name, width, height)

    async def close(self) -> None:
        cap, self._cap = self._cap, None
        self._is_open = False
        if cap is None:
            return
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._release_device, cap)
        logger.info("Released %s", self.source_name)

    async def capture_frame(self) -> CapturedFrame:
        cap = self._cap
        if not self._is_open or cap is None:
            raise CaptureError("Webcam is not open")
        loop = asyncio.get_running_loop()
        image = await loop.run_in_executor(None, self._read_device, cap)
        self._frame_counter += 1
        return CapturedFrame(
            image=image,
            timestamp=datetime.now(),
            frame_number=self._frame_counter,
            source_device=self.source_name,
        )

    # -- worker thread side --------------------------------------------------

    def _open_device(self) -> tuple[cv2.VideoCapture, tuple[int, int]]:
        cap = cv2.VideoCapture(self._device_index)
        if not cap.isOpened():
            cap.release()
            raise CaptureError(f"Failed to open webcam device {self._device_index}")
        if self._resolution:
            width, height = self._resolution
            cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        actual = (int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)), int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)))
        return cap, actual

    def _read_device(self, cap: cv2.VideoCapture) -> np.ndarray:
        with self._device_lock:
            ok, image = cap.read()
        if not ok or image is None:
            raise CaptureError("Failed to read frame from webcam")
        return image

    def _release_device(self, cap: cv2.VideoCapture) -> None:
        with self._device_lock:
            cap.release()
