"""Equal-angle wheel geometry.

Angles are radians measured clockwise from 3 o'clock (screen coordinates,
y pointing down), so the top of the wheel is 3*pi/2. Wedge size comes from
the prize count only; weights never change the layout.
"""

from typing import Optional, Sequence, Tuple
import math

from prizewheel.wheel.models import PrizeOption, Segment

TAU = 2 * math.pi
POINTER_TOP = 3 * math.pi / 2


def compute_segments(options: Sequence[PrizeOption]) -> Tuple[Segment, ...]:
    """Lay out one wedge of 2*pi/n per prize, in list order."""
    count = len(options)
    if count == 0:
        return ()

    span = TAU / count
    return tuple(
        Segment(
            index=i,
            option=option,
            start_angle=i * span,
            end_angle=(i + 1) * span,
        )
        for i, option in enumerate(options)
    )


def normalize_angle(angle: float) -> float:
    """Map an angle into [0, 2*pi)."""
    result = math.fmod(angle, TAU)
    if result < 0:
        result += TAU
    # fmod of a value a hair below a multiple of tau can round up to tau
    if result >= TAU:
        result = 0.0
    return result


def angular_distance(a: float, b: float) -> float:
    """Smallest absolute difference between two angles, in [0, pi]."""
    diff = normalize_angle(a - b)
    return min(diff, TAU - diff)


def compute_target_rotation(
    current_angle: float,
    mid_angle: float,
    pointer_angle: float,
    full_turns: int,
) -> float:
    """Absolute wheel angle that parks mid_angle under the pointer.

    The wheel only ever turns forward: the result is current_angle plus
    full_turns whole revolutions plus the forward offset (in [0, 2*pi))
    that brings current_angle + mid_angle onto pointer_angle.
    """
    if full_turns < 0:
        raise ValueError("full_turns must be non-negative")
    offset = normalize_angle(pointer_angle - mid_angle - current_angle)
    return current_angle + TAU * full_turns + offset


def segment_at_angle(segments: Sequence[Segment], wheel_angle: float, screen_angle: float) -> Optional[Segment]:
    """Segment drawn at screen_angle when the wheel is rotated by wheel_angle."""
    if not segments:
        return None
    local = normalize_angle(screen_angle - wheel_angle)
    span = TAU / len(segments)
    index = min(int(local / span), len(segments) - 1)
    return segments[index]


def segment_at_pointer(segments: Sequence[Segment], wheel_angle: float, pointer_angle: float = POINTER_TOP) -> Optional[Segment]:
    return segment_at_angle(segments, wheel_angle, pointer_angle)

