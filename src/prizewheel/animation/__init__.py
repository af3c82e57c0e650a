"""Animation module for the prize wheel."""

from prizewheel.animation.easing import Easing, get_easing, interpolate
from prizewheel.animation.clock import Clock, MonotonicClock, ManualClock
from prizewheel.animation.scheduler import (
    FrameScheduler,
    AsyncioFrameScheduler,
    ManualFrameScheduler,
)
from prizewheel.animation.spin import SpinAnimation

__all__ = [
    # Easing
    "Easing",
    "get_easing",
    "interpolate",
    # Time
    "Clock",
    "MonotonicClock",
    "ManualClock",
    # Scheduling
    "FrameScheduler",
    "AsyncioFrameScheduler",
    "ManualFrameScheduler",
    # Spin
    "SpinAnimation",
]
