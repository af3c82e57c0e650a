"""Per-frame callback scheduling.

The wheel never loops on its own: each animation step asks the scheduler
for exactly one next frame. Cancelling the pending handle is how a spin is
torn down when the host view goes away.
"""

from typing import Any, Callable, Dict, Optional, Protocol
import asyncio
import itertools
import logging

from prizewheel.animation.clock import ManualClock

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameScheduler(Protocol):
    def request_frame(self, callback: FrameCallback) -> Any: ...

    def cancel_frame(self, handle: Any) -> None: ...


class AsyncioFrameScheduler:
    """Schedules frames on the running asyncio loop at a fixed rate."""

    def __init__(self, fps: int = 60, loop: Optional[asyncio.AbstractEventLoop] = None):
        if fps <= 0:
            raise ValueError("fps must be positive")
        self._interval = 1.0 / fps
        self._loop = loop

    @property
    def interval(self) -> float:
        return self._interval

    def request_frame(self, callback: FrameCallback) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(self._interval, callback)

    def cancel_frame(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


class ManualFrameScheduler:
    """Frame queue driven by hand.

    Each run_next() advances the optional ManualClock by frame_ms and runs
    the oldest pending callback, which lets tests and offline rendering
    replay a spin frame by frame without real time passing.
    """

    def __init__(self, clock: Optional[ManualClock] = None, frame_ms: float = 1000.0 / 60):
        self._clock = clock
        self._frame_ms = frame_ms
        self._pending: Dict[int, FrameCallback] = {}
        self._ids = itertools.count(1)
        self.frames_run = 0

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def run_next(self) -> bool:
        """Run the oldest pending frame. Returns False when nothing was queued."""
        if not self._pending:
            return False
        handle = min(self._pending)
        callback = self._pending.pop(handle)
        if self._clock is not None:
            self._clock.advance(self._frame_ms)
        callback()
        self.frames_run += 1
        return True

    def run_until_idle(self, max_frames: int = 100_000) -> int:
        """Run frames until the queue drains. Returns the number of frames run."""
        count = 0
        while count < max_frames and self.run_next():
            count += 1
        if self._pending:
            logger.warning(f"Frame queue still busy after {max_frames} frames")
        return count
