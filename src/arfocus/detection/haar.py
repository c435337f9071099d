"""Face presence classifier built on OpenCV Haar cascades."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import cv2
import numpy as np

from arfocus.detection.base import ClassifierError, PresenceClassifier
from arfocus.domain.models import CapturedFrame

logger = logging.getLogger(__name__)

DEFAULT_CASCADE = "haarcascade_frontalface_default.xml"


class HaarPresenceClassifier(PresenceClassifier):
    """Reports presence when at least one frontal face is detected.

    Detection runs in the default executor; a single face is enough,
    extra faces carry no additional meaning.
    """

    def __init__(
        self,
        cascade_path: str | Path | None = None,
        scale_factor: float = 1.1,
        min_neighbors: int = 5,
        min_face_size: int = 60,
    ) -> None:
        super().__init__()
        self._cascade_path = Path(cascade_path) if cascade_path else Path(cv2.data.haarcascades) / DEFAULT_CASCADE
        self._scale_factor = scale_factor
        self._min_neighbors = min_neighbors
        self._min_face_size = min_face_size
        self._cascade: cv2.CascadeClassifier | None = None

    async def load(self) -> None:
        loop = asyncio.get_running_loop()
        try:
            cascade = await loop.run_in_executor(
                None, cv2.CascadeClassifier, str(self._cascade_path)
            )
        except (AttributeError, cv2.error) as e:
            # AttributeError: OpenCV build without the objdetect module.
            raise ClassifierError(f"Failed to load face cascade from {self._cascade_path}: {e}") from e
        if cascade.empty():
            raise ClassifierError(f"Failed to load face cascade from {self._cascade_path}")
        self._cascade = cascade
        self._ready = True
        logger.info("Loaded face cascade %s", self._cascade_path.name)

    async def sample(self, frame: CapturedFrame) -> bool:
        if not self._ready or self._cascade is None:
            raise ClassifierError("Face cascade is not loaded")
        loop = asyncio.get_running_loop()
        try:
            count = await loop.run_in_executor(None, self._count_faces, frame.image)
        except cv2.error as e:
            raise ClassifierError(f"Face detection failed: {e}") from e
        return count > 0

    def _count_faces(self, image: np.ndarray) -> int:
        """Synchronous detection (runs in thread pool)."""
        gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY) if image.ndim == 3 else image
        gray = cv2.equalizeHist(gray)
        faces = self._cascade.detectMultiScale(
            gray,
            scaleFactor=self._scale_factor,
            minNeighbors=self._min_neighbors,
            minSize=(self._min_face_size, self._min_face_size),
        )
        return len(faces)
