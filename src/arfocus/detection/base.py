"""Abstract base class for face presence classifiers.

A presence classifier answers one question per frame: is there a face
in front of the camera? It is treated as slow and unreliable; callers
map any failure to an "unavailable" sample instead of crashing.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from arfocus.domain.models import CapturedFrame

logger = logging.getLogger(__name__)


class PresenceClassifier(ABC):
    """Abstract interface for presence detection backends."""

    def __init__(self) -> None:
        self._ready = False

    @property
    def is_ready(self) -> bool:
        """Whether the model is loaded and ``sample()`` can be called."""
        return self._ready

    @abstractmethod
    async def load(self) -> None:
        """Load the detection model.

        Raises:
            ClassifierError: If the model cannot be loaded.
        """
        ...

    @abstractmethod
    async def sample(self, frame: CapturedFrame) -> bool:
        """Return True if a face is present in ``frame``.

        Raises:
            ClassifierError: If the classifier is not ready or detection fails.
        """
        ...


class ClassifierError(Exception):
    """Raised when the presence classifier is unavailable or fails."""
