import math

import pytest

from prizewheel.wheel.layout import (
    POINTER_TOP,
    TAU,
    angular_distance,
    compute_segments,
    compute_target_rotation,
    normalize_angle,
    segment_at_pointer,
)

from conftest import make_options


def test_segments_are_equal_regardless_of_weight():
    segments = compute_segments(make_options(("A", 1), ("B", 99)))
    assert len(segments) == 2
    for segment in segments:
        assert segment.span == pytest.approx(math.pi)
    assert segments[0].start_angle == 0
    assert segments[1].end_angle == pytest.approx(TAU)


def test_segments_tile_the_circle_in_order():
    options = make_options(*[(f"P{i}", i + 1) for i in range(7)])
    segments = compute_segments(options)
    assert [s.option.name for s in segments] == [o.name for o in options]
    for previous, current in zip(segments, segments[1:]):
        assert current.start_angle == pytest.approx(previous.end_angle)
    assert sum(s.span for s in segments) == pytest.approx(TAU)


def test_single_prize_covers_full_circle():
    (segment,) = compute_segments(make_options(("Only", 1)))
    assert segment.span == pytest.approx(TAU)
    assert segment.mid_angle == pytest.approx(math.pi)


def test_empty_layout():
    assert compute_segments([]) == ()


@pytest.mark.parametrize("angle", [-0.1, 0.0, TAU, 3 * TAU + 1.0, -5 * TAU])
def test_normalize_angle_range(angle):
    result = normalize_angle(angle)
    assert 0 <= result < TAU
    assert angular_distance(result, angle) < 1e-9


def test_target_from_rest_matches_pointer():
    segments = compute_segments(make_options(("A", 1), ("B", 1)))
    target = compute_target_rotation(0.0, segments[0].mid_angle, POINTER_TOP, 5)
    # 5 turns plus (3pi/2 - pi/2)
    assert target == pytest.approx(5 * TAU + math.pi)
    assert segment_at_pointer(segments, target).option.name == "A"


@pytest.mark.parametrize("current", [0.0, 1.0, 7.5, 40.0, -2.0])
def test_target_always_turns_forward(current):
    target = compute_target_rotation(current, 2.0, POINTER_TOP, 5)
    assert 5 * TAU <= target - current < 6 * TAU
    assert angular_distance(target + 2.0, POINTER_TOP) < 1e-9


def test_negative_turns_rejected():
    with pytest.raises(ValueError):
        compute_target_rotation(0.0, 1.0, POINTER_TOP, -1)


def test_segment_at_pointer_follows_rotation():
    segments = compute_segments(make_options(("A", 1), ("B", 1), ("C", 1), ("D", 1)))
    # unrotated, 12 o'clock (3pi/2) is in the last quarter
    assert segment_at_pointer(segments, 0.0).option.name == "D"
    # a quarter turn clockwise brings C under the pointer
    assert segment_at_pointer(segments, math.pi / 2).option.name == "C"
    assert segment_at_pointer((), 0.0) is None
