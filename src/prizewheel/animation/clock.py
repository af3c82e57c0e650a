"""Time sources for the wheel animation (milliseconds)."""

from typing import Protocol
import time


class Clock(Protocol):
    def now_ms(self) -> float: ...


class MonotonicClock:
    """Wall clock backed by time.monotonic()."""

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0


class ManualClock:
    """Clock that only moves when told to. Used for tests and offline rendering."""

    def __init__(self, start_ms: float = 0.0):
        self._now = start_ms

    def now_ms(self) -> float:
        return self._now

    def advance(self, delta_ms: float) -> float:
        if delta_ms < 0:
            raise ValueError("Clock cannot run backwards")
        self._now += delta_ms
        return self._now

    def set(self, now_ms: float) -> None:
        self._now = now_ms
