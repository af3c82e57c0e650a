"""Spin animation: eased rotation from a start angle to a target angle."""

from dataclasses import dataclass
import logging

from prizewheel.animation.easing import Easing, EasingFunc, clamp01, get_easing

logger = logging.getLogger(__name__)


@dataclass
class SpinAnimation:
    """One spin's timing.

    Attributes:
        start_angle: Wheel angle when the spin began (radians)
        target_angle: Exact angle the wheel must end on (radians)
        start_ms: Clock time the spin began
        duration_ms: Fixed wall-clock length of the spin
        easing: Curve applied to normalized time
    """

    start_angle: float
    target_angle: float
    start_ms: float
    duration_ms: float = 5000.0
    easing: Easing | str = Easing.EASE_OUT_QUART

    def __post_init__(self) -> None:
        if self.duration_ms <= 0:
            raise ValueError("Spin duration must be positive")
        self._ease: EasingFunc = get_easing(self.easing)

    @property
    def delta(self) -> float:
        return self.target_angle - self.start_angle

    def progress(self, now_ms: float) -> float:
        """Normalized elapsed time, clamped to [0, 1]."""
        return clamp01((now_ms - self.start_ms) / self.duration_ms)

    def angle_at(self, now_ms: float) -> float:
        t = self.progress(now_ms)
        if t >= 1.0:
            # exact target, no float drift
            return self.target_angle
        return self.start_angle + self.delta * self._ease(t)

    def is_complete(self, now_ms: float) -> bool:
        return self.progress(now_ms) >= 1.0
