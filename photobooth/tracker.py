# photobooth/tracker.py
"""
Face tracking for face-aware framing.

FaceTracker smooths the raw detector box with an exponential moving average.
FaceTrackingLoop polls an injected detector on a fixed cadence:
- at most one detection in flight (busy ticks are dropped, not queued)
- ticks are skipped until the frame source has a decoded frame of known size
- detector errors are logged and never touch the smoothed box
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Protocol, Set, Tuple

from photobooth.models import Box

logger = logging.getLogger(__name__)

SMOOTH_ALPHA = 0.35
TRACK_INTERVAL = 0.2  # seconds between detection ticks


class FaceDetector(Protocol):
    async def detect(self, frame: Any) -> Optional[Box]:
        ...


class FrameSource(Protocol):
    @property
    def ready(self) -> bool:
        ...

    @property
    def frame_size(self) -> Optional[Tuple[int, int]]:
        ...

    @property
    def latest_frame(self) -> Any:
        ...


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


class FaceTracker:
    """Holds the latest raw detection and its EMA-smoothed counterpart."""

    def __init__(self, alpha: float = SMOOTH_ALPHA):
        self.alpha = float(alpha)
        self.latest: Optional[Box] = None
        self.smoothed: Optional[Box] = None

    def observe(self, detection: Optional[Box]) -> Optional[Box]:
        """
        Feed one detector result.

        None clears the latest box only; the smoothed box is kept as-is until
        a fresh detection arrives or reset() is called.
        """
        if detection is None:
            self.latest = None
            return self.smoothed

        self.latest = detection
        if self.smoothed is None:
            self.smoothed = detection
            return self.smoothed

        s, a = self.smoothed, self.alpha
        self.smoothed = Box(
            x=_lerp(s.x, detection.x, a),
            y=_lerp(s.y, detection.y, a),
            w=_lerp(s.w, detection.w, a),
            h=_lerp(s.h, detection.h, a),
        )
        return self.smoothed

    def current(self) -> Optional[Box]:
        """Box to frame the next capture with: smoothed if available, else latest."""
        return self.smoothed if self.smoothed is not None else self.latest

    def reset(self) -> None:
        self.latest = None
        self.smoothed = None


class FaceTrackingLoop:
    """Drives a FaceTracker from a detector and frame source on a fixed interval."""

    def __init__(
        self,
        detector: FaceDetector,
        source: FrameSource,
        tracker: Optional[FaceTracker] = None,
        interval: float = TRACK_INTERVAL,
        enabled: bool = True,
    ):
        self.detector = detector
        self.source = source
        self.tracker = tracker if tracker is not None else FaceTracker()
        self.interval = float(interval)
        self._enabled = bool(enabled)
        self._busy = False
        self._generation = 0
        self._run = False
        self._task: Optional[asyncio.Task] = None
        self._inflight: Set[asyncio.Task] = set()

    # ---- tracking toggle ----
    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def busy(self) -> bool:
        return self._busy

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        # Re-enabling must start cold, not blend into stale geometry
        self._enabled = False
        self._generation += 1
        self.tracker.reset()

    def toggle(self) -> bool:
        if self._enabled:
            self.disable()
        else:
            self.enable()
        return self._enabled

    # ---- polling ----
    async def tick(self) -> bool:
        """
        Run one detection cycle.

        Returns:
            True if the detector was called, False if the tick was skipped.
        """
        if not self._enabled or self._busy:
            return False
        if not self.source.ready:
            return False
        size = self.source.frame_size
        if not size or not size[0] or not size[1]:
            return False

        self._busy = True
        generation = self._generation
        try:
            box = await self.detector.detect(self.source.latest_frame)
            if generation != self._generation:
                # tracking was switched off (and maybe on again) while the request was in flight
                return True
            self.tracker.observe(box)
            logger.debug(f"[tracker] detection={box} smoothed={self.tracker.smoothed}")
        except Exception:
            logger.warning("[tracker] face detect failed", exc_info=True)
        finally:
            self._busy = False
        return True

    async def run(self) -> None:
        """Fire a tick every `interval` seconds until stop() is called."""
        self._run = True
        logger.debug(f"[tracker] polling every {self.interval}s")
        while self._run:
            task = asyncio.create_task(self.tick())
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)
            await asyncio.sleep(self.interval)

    # ---- lifecycle ----
    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self) -> None:
        self._run = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        for task in list(self._inflight):
            task.cancel()
        self._inflight.clear()
