"""Tests for the Haar cascade presence classifier."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from arfocus.detection.base import ClassifierError, PresenceClassifier
from arfocus.detection.haar import HaarPresenceClassifier
from arfocus.domain.models import CapturedFrame


def fake_cascade(faces: list[tuple[int, int, int, int]], empty: bool = False) -> MagicMock:
    cascade = MagicMock()
    cascade.empty.return_value = empty
    cascade.detectMultiScale.return_value = np.array(faces, dtype=np.int32).reshape(-1, 4)
    return cascade


class TestPresenceClassifierInterface:
    def test_cannot_instantiate_abstract_class(self) -> None:
        with pytest.raises(TypeError):
            PresenceClassifier()  # type: ignore[abstract]


class TestHaarPresenceClassifier:
    def test_default_cascade_is_bundled_frontal_face(self) -> None:
        classifier = HaarPresenceClassifier()
        assert classifier._cascade_path.name == "haarcascade_frontalface_default.xml"
        assert classifier.is_ready is False

    def test_custom_cascade_path(self) -> None:
        classifier = HaarPresenceClassifier(cascade_path="/models/face.xml")
        assert classifier._cascade_path == Path("/models/face.xml")

    @pytest.mark.asyncio
    async def test_load_failure_raises(self) -> None:
        with patch("arfocus.detection.haar.cv2.CascadeClassifier", return_value=fake_cascade([], empty=True)):
            classifier = HaarPresenceClassifier(cascade_path="/missing.xml")
            with pytest.raises(ClassifierError, match="Failed to load"):
                await classifier.load()
        assert classifier.is_ready is False

    @pytest.mark.asyncio
    async def test_sample_before_load_raises(self, sample_frame: CapturedFrame) -> None:
        with pytest.raises(ClassifierError, match="not loaded"):
            await HaarPresenceClassifier().sample(sample_frame)

    @pytest.mark.asyncio
    async def test_face_present(self, sample_frame: CapturedFrame) -> None:
        cascade = fake_cascade([(10, 10, 60, 60)])
        with patch("arfocus.detection.haar.cv2.CascadeClassifier", return_value=cascade):
            classifier = HaarPresenceClassifier(min_face_size=40)
            await classifier.load()
        assert classifier.is_ready
        assert await classifier.sample(sample_frame) is True
        _, kwargs = cascade.detectMultiScale.call_args
        assert kwargs["minSize"] == (40, 40)

    @pytest.mark.asyncio
    async def test_multiple_faces_still_present(self, sample_frame: CapturedFrame) -> None:
        cascade = fake_cascade([(0, 0, 60, 60), (30, 30, 60, 60)])
        with patch("arfocus.detection.haar.cv2.CascadeClassifier", return_value=cascade):
            classifier = HaarPresenceClassifier()
            await classifier.load()
        assert await classifier.sample(sample_frame) is True

    @pytest.mark.asyncio
    async def test_no_face(self, sample_frame: CapturedFrame) -> None:
        with patch("arfocus.detection.haar.cv2.CascadeClassifier", return_value=fake_cascade([])):
            classifier = HaarPresenceClassifier()
            await classifier.load()
        assert await classifier.sample(sample_frame) is False

    @pytest.mark.asyncio
    async def test_grayscale_frame_accepted(self) -> None:
        frame = CapturedFrame(image=np.zeros((80, 80), dtype=np.uint8), frame_number=1)
        with patch("arfocus.detection.haar.cv2.CascadeClassifier", return_value=fake_cascade([])):
            classifier = HaarPresenceClassifier()
            await classifier.load()
        assert await classifier.sample(frame) is False

    @pytest.mark.asyncio
    async def test_opencv_error_becomes_classifier_error(self, sample_frame: CapturedFrame) -> None:
        import cv2

        cascade = fake_cascade([])
        cascade.detectMultiScale.side_effect = cv2.error("bad frame")
        with patch("arfocus.detection.haar.cv2.CascadeClassifier", return_value=cascade):
            classifier = HaarPresenceClassifier()
            await classifier.load()
        with pytest.raises(ClassifierError, match="Face detection failed"):
            await classifier.sample(sample_frame)

    @pytest.mark.asyncio
    async def test_missing_cascade_support_becomes_classifier_error(self) -> None:
        with patch(
            "arfocus.detection.haar.cv2.CascadeClassifier",
            side_effect=AttributeError("module 'cv2' has no attribute 'CascadeClassifier'"),
        ):
            classifier = HaarPresenceClassifier(cascade_path="/models/face.xml")
            with pytest.raises(ClassifierError, match="Failed to load"):
                await classifier.load()
        assert classifier.is_ready is False

    @pytest.mark.asyncio
    async def test_opencv_load_error_becomes_classifier_error(self) -> None:
        import cv2

        with patch("arfocus.detection.haar.cv2.CascadeClassifier", side_effect=cv2.error("bad xml")):
            classifier = HaarPresenceClassifier(cascade_path="/models/face.xml")
            with pytest.raises(ClassifierError, match="Failed to load"):
                await classifier.load()
