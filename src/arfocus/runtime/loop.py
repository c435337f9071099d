"""The runtime loop that drives a FocusTimer from real time and a camera.

Two asyncio tasks share the timer:

- the tick driver calls ``FocusTimer.tick()`` once per second, keeping a
  fixed schedule so slow iterations do not drift the clock;
- the presence driver reads frames as fast as the camera allows and
  classifies at most one every ``sample_interval_ms``.

Both run on one event loop thread and only touch the timer through its
synchronous methods, so no locking is needed.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

from arfocus.capture.base import CaptureError, CaptureSource
from arfocus.core.timer import FocusTimer
from arfocus.detection.base import ClassifierError, PresenceClassifier
from arfocus.domain.models import CapturedFrame, FocusSnapshot, PresenceSample

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


async def _finish(task: asyncio.Task | None) -> None:
    """Cancel ``task`` if still pending and log any error it ended with."""
    if task is None:
        return
    if not task.done():
        task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
    except Exception:
        logger.exception("Driver task %s failed", task.get_name())


class FocusLoop:
    """Runs the tick and presence drivers for one FocusTimer."""

    def __init__(
        self,
        timer: FocusTimer,
        capture: CaptureSource | None,
        classifier: PresenceClassifier | None,
        tick_interval: float = 1.0,
        sample_interval_ms: float = 200.0,
        frame_interval: float = 1 / 30,
        on_tick: Callable[[FocusSnapshot, bool], None] | None = None,
        clock_ms: Callable[[], float] = monotonic_ms,
    ) -> None:
        self._timer = timer
        self._capture = capture
        self._classifier = classifier
        self._tick_interval = tick_interval
        self._sample_interval_ms = sample_interval_ms
        self._frame_interval = frame_interval
        self._on_tick = on_tick
        self._clock_ms = clock_ms
        self._last_sample_ms: float | None = None
        self._tick_task: asyncio.Task | None = None
        self._presence_task: asyncio.Task | None = None
        self._stopped = asyncio.Event()

    @property
    def timer(self) -> FocusTimer:
        return self._timer

    @property
    def is_running(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    @property
    def presence_active(self) -> bool:
        return self._presence_task is not None and not self._presence_task.done()

    async def run(self, duration: float | None = None) -> FocusSnapshot:
        """Run both drivers until ``stop()`` is called or ``duration`` seconds pass."""
        self._stopped.clear()
        self._tick_task = asyncio.create_task(self._run_ticks(), name="arfocus-tick")
        if self._timer.camera_enabled:
            self._start_presence()
        else:
            self._timer.mark_unavailable()

        logger.info("Focus loop started")
        try:
            await asyncio.wait_for(self._stopped.wait(), timeout=duration)
        except asyncio.TimeoutError:
            logger.info("Focus loop reached its %.0fs duration", duration)
        finally:
            await self._shutdown()
        return self._timer.snapshot()

    def stop(self) -> None:
        """Signal the loop to stop."""
        self._stopped.set()

    async def set_camera_enabled(self, enabled: bool) -> None:
        """Enable or disable the camera, starting or cancelling the presence driver."""
        self._timer.set_camera_enabled(enabled)
        if enabled and self.is_running and not self.presence_active:
            self._start_presence()
        elif not enabled:
            await self._cancel_presence()

    # -- tick driver ---------------------------------------------------------

    async def _run_ticks(self) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time() + self._tick_interval
        while True:
            await asyncio.sleep(max(0.0, next_at - loop.time()))
            next_at += self._tick_interval
            self.tick_once()

    def tick_once(self) -> bool:
        """Run one tick and notify the listener. Returns True on phase change."""
        if not self._timer.is_running:
            return False
        flipped = self._timer.tick()
        if self._on_tick is not None:
            try:
                self._on_tick(self._timer.snapshot(), flipped)
            except Exception:
                logger.exception("Tick listener failed")
        return flipped

    # -- presence driver -----------------------------------------------------

    def _start_presence(self) -> None:
        self._last_sample_ms = None
        self._presence_task = asyncio.create_task(self._run_presence(), name="arfocus-presence")

    async def _cancel_presence(self) -> None:
        task, self._presence_task = self._presence_task, None
        await _finish(task)
        self._timer.mark_unavailable()

    async def _run_presence(self) -> None:
        if self._capture is None or self._classifier is None:
            logger.warning("No camera or classifier configured, attention stays unknown")
            self._timer.mark_unavailable()
            return

        if not self._classifier.is_ready:
            try:
                await self._classifier.load()
            except ClassifierError as e:
                # Keep going: every sample will be reported as unavailable.
                logger.warning("Presence classifier unavailable: %s", e)
            except Exception:
                logger.warning("Presence classifier failed to load", exc_info=True)

        try:
            async with self._capture:
                while True:
                    try:
                        frame = await self._capture.capture_frame()
                    except CaptureError as e:
                        logger.debug("Frame not ready: %s", e)
                        frame = None
                    await self.process_frame(frame)
                    await asyncio.sleep(self._frame_interval)
        except CaptureError as e:
            logger.warning("Camera unavailable, attention stays unknown: %s", e)
        finally:
            self._timer.mark_unavailable()

    async def process_frame(self, frame: CapturedFrame | None) -> bool:
        """Classify ``frame`` if a sample is due. Returns True if it was sampled.

        ``None`` stands for "video not ready" and counts as an
        unavailable sample once due.
        """
        now_ms = self._clock_ms()
        if self._last_sample_ms is not None and now_ms - self._last_sample_ms <= self._sample_interval_ms:
            return False
        self._last_sample_ms = now_ms

        if frame is None or self._classifier is None or not self._classifier.is_ready:
            self._timer.mark_unavailable(now_ms)
            return True

        try:
            present = await self._classifier.sample(frame)
        except Exception as e:
            logger.debug("Classification failed: %s", e)
            self._timer.mark_unavailable(now_ms)
            return True

        self._timer.offer_sample(PresenceSample(present=present, timestamp_ms=now_ms))
        return True

    async def _shutdown(self) -> None:
        await self._cancel_presence()
        task, self._tick_task = self._tick_task, None
        await _finish(task)
        logger.info("Focus loop stopped")
