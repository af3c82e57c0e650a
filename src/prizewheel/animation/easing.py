"""Easing curves for the spin animation.

All functions take a normalized time t (0.0 to 1.0) and return a normalized
progress value with f(0) == 0 and f(1) == 1. The ease-out family is what the
wheel uses: velocity falls monotonically so the wheel settles instead of
stopping dead.
"""

from enum import Enum, auto
from typing import Callable
import math


class Easing(Enum):
    """Available easing curves."""

    LINEAR = auto()
    EASE_OUT_QUAD = auto()
    EASE_OUT_CUBIC = auto()
    EASE_OUT_QUART = auto()
    EASE_OUT_QUINT = auto()
    EASE_OUT_SINE = auto()
    EASE_OUT_EXPO = auto()
    EASE_OUT_CIRC = auto()
    EASE_IN_OUT_CUBIC = auto()


EasingFunc = Callable[[float], float]


def linear(t: float) -> float:
    return t


def ease_out_quad(t: float) -> float:
    return 1 - (1 - t) * (1 - t)


def ease_out_cubic(t: float) -> float:
    return 1 - pow(1 - t, 3)


def ease_out_quart(t: float) -> float:
    """Default spin curve: 1 - (1 - t)^4."""
    return 1 - pow(1 - t, 4)


def ease_out_quint(t: float) -> float:
    return 1 - pow(1 - t, 5)


def ease_out_sine(t: float) -> float:
    return math.sin((t * math.pi) / 2)


def ease_out_expo(t: float) -> float:
    # 2^-10 is not exactly zero, so pin the end point
    return 1 if t == 1 else 1 - pow(2, -10 * t)


def ease_out_circ(t: float) -> float:
    return math.sqrt(1 - pow(t - 1, 2))


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return 1 - pow(-2 * t + 2, 3) / 2


_EASING_FUNCTIONS: dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,
    Easing.EASE_OUT_QUAD: ease_out_quad,
    Easing.EASE_OUT_CUBIC: ease_out_cubic,
    Easing.EASE_OUT_QUART: ease_out_quart,
    Easing.EASE_OUT_QUINT: ease_out_quint,
    Easing.EASE_OUT_SINE: ease_out_sine,
    Easing.EASE_OUT_EXPO: ease_out_expo,
    Easing.EASE_OUT_CIRC: ease_out_circ,
    Easing.EASE_IN_OUT_CUBIC: ease_in_out_cubic,
}


def get_easing(easing: Easing | str) -> EasingFunc:
    """Get an easing function by enum or name.

    Args:
        easing: Easing enum value or string name (e.g., "ease_out_quart")

    Raises:
        ValueError: If easing name is not recognized
    """
    if isinstance(easing, str):
        try:
            easing = Easing[easing.upper()]
        except KeyError:
            raise ValueError(f"Unknown easing function: {easing}") from None

    func = _EASING_FUNCTIONS.get(easing)
    if func is None:
        raise ValueError(f"No function registered for: {easing}")

    return func


def clamp01(t: float) -> float:
    return max(0.0, min(1.0, t))


def interpolate(start: float, end: float, t: float, easing: Easing | str = Easing.LINEAR) -> float:
    """Interpolate between two values; t is clamped to [0, 1] before easing."""
    easing_func = get_easing(easing)
    return start + (end - start) * easing_func(clamp01(t))
