import math

import numpy as np
import pytest
from PIL import Image

from prizewheel.config.settings import StyleSettings
from prizewheel.graphics.primitives import contrast_color, draw_pie_slice, new_buffer, parse_color
from prizewheel.graphics.renderer import WheelRenderer
from prizewheel.graphics.text import wrap_label
from prizewheel.wheel.layout import compute_segments
from prizewheel.wheel.models import PrizeImage, PrizeOption, PrizeStyle

from conftest import make_options

PURPLE = (109, 40, 217)


def char_measure(text):
    return len(text) * 6


def test_long_label_wraps_to_two_lines_without_loss():
    label = "SUPER MEGA BONUS PRIZE PACKAGE DELUXE"
    lines = wrap_label(label, 90, char_measure, max_lines=2)
    assert len(lines) == 2
    assert " ".join(lines) == label
    assert lines[0] == "SUPER MEGA"


def test_short_label_stays_on_one_line():
    assert wrap_label("BRINDE", 90, char_measure) == ["BRINDE"]
    assert wrap_label("DESCONTO 10%", 90, char_measure) == ["DESCONTO 10%"]


def test_single_long_word_is_not_truncated():
    word = "SUPERCALIFRAGILISTIC"
    assert wrap_label(word, 30, char_measure) == [word]


def test_wrap_respects_line_cap():
    lines = wrap_label("A B C D E F G H", 6, char_measure, max_lines=3)
    assert lines == ["A", "B", "C D E F G H"]


def test_parse_color_forms():
    assert parse_color("#6d28d9") == PURPLE
    assert parse_color("#fff") == (255, 255, 255)
    assert parse_color([1, 2, 3]) == (1, 2, 3)
    with pytest.raises(ValueError):
        parse_color("purple")


def test_contrast_color_picks_readable_text():
    assert contrast_color((255, 255, 255)) == (45, 0, 79)
    assert contrast_color(PURPLE) == (255, 255, 255)


def test_pie_slice_wraps_past_zero():
    buffer = new_buffer(40, 40)
    # wedge from 3pi/2 to 5pi/2 covers the right half of the disc
    draw_pie_slice(buffer, 20, 20, 15, 3 * math.pi / 2, 5 * math.pi / 2, (255, 0, 0))
    assert tuple(buffer[20, 30]) == (255, 0, 0)
    assert tuple(buffer[20, 9]) == (0, 0, 0)


def test_empty_wheel_renders_rim_hub_and_pointer():
    style = StyleSettings()
    renderer = WheelRenderer(style)
    buffer = renderer.new_frame(100, 100)
    renderer.render(buffer, (), 0.0)

    assert tuple(buffer[50, 50]) == style.accent_color
    assert tuple(buffer[1, 50]) == style.pointer_color
    assert tuple(buffer[20, 50]) == style.background_color


def test_wedges_follow_rotation():
    renderer = WheelRenderer(StyleSettings())
    segments = compute_segments(make_options(("A", 1), ("B", 1)))

    buffer = renderer.new_frame(100, 100)
    renderer.render(buffer, segments, 0.0)
    # A spans [0, pi): the lower half on screen
    assert tuple(buffer[65, 50]) == PURPLE
    assert tuple(buffer[35, 50]) == (255, 255, 255)

    renderer.render(buffer, segments, math.pi)
    assert tuple(buffer[35, 50]) == PURPLE
    assert tuple(buffer[65, 50]) == (255, 255, 255)


def test_prize_style_overrides_palette():
    renderer = WheelRenderer(StyleSettings())
    option = PrizeOption(
        id="gold", name="GOLD", weight=1,
        style=PrizeStyle.create(background_color="#ffd700", text_color="#000000"),
    )
    (segment,) = compute_segments([option])
    assert renderer.slice_color(segment) == (255, 215, 0)
    assert renderer.text_color(segment) == (0, 0, 0)


def test_palette_alternates_by_index():
    renderer = WheelRenderer(StyleSettings())
    segments = compute_segments(make_options(("A", 1), ("B", 1), ("C", 1)))
    colors = [renderer.slice_color(s) for s in segments]
    assert colors == [PURPLE, (255, 255, 255), PURPLE]
    assert renderer.text_color(segments[0]) == (255, 255, 255)
    assert renderer.text_color(segments[1]) == (45, 0, 79)


def test_label_width_scales_with_wedge():
    renderer = WheelRenderer(StyleSettings())
    geo = renderer.geometry(300, 300)
    two = compute_segments(make_options(("A", 1), ("B", 1)))
    eight = compute_segments(make_options(*[(f"P{i}", 1) for i in range(8)]))
    assert renderer.label_width(two[0], geo) == pytest.approx(4 * renderer.label_width(eight[0], geo))


def test_label_sprite_is_rgba_and_cached():
    renderer = WheelRenderer(StyleSettings())
    geo = renderer.geometry(200, 200)
    (segment,) = compute_segments(make_options(("SUPER MEGA BONUS PRIZE PACKAGE DELUXE", 1)))
    sprite = renderer.label_sprite(segment, geo)
    assert sprite.ndim == 3 and sprite.shape[2] == 4
    assert np.any(sprite[:, :, 3] > 0)
    assert renderer.label_sprite(segment, geo) is sprite


def test_wrap_keeps_inner_spacing_of_single_line_labels():
    assert wrap_label("BIG  PRIZE", 90, char_measure) == ["BIG  PRIZE"]
    assert wrap_label("  BIG  PRIZE ", 90, char_measure) == ["BIG  PRIZE"]


def test_long_label_wraps_inside_narrow_wedge():
    renderer = WheelRenderer(StyleSettings())
    geo = renderer.geometry(300, 300)
    label = "SUPER MEGA BONUS PRIZE PACKAGE DELUXE"
    segments = compute_segments(make_options(*[(label if i == 0 else f"P{i}", 1) for i in range(10)]))

    lines = renderer.label_lines(segments[0], geo)
    assert len(lines) == 2
    assert " ".join(lines) == label
    assert renderer.label_lines(segments[1], geo) == ["P1"]


def test_clear_cache_drops_label_sprites():
    renderer = WheelRenderer(StyleSettings())
    geo = renderer.geometry(200, 200)
    segments = compute_segments(make_options(("A", 1), ("B", 1)))
    for segment in segments:
        renderer.label_sprite(segment, geo)
    assert renderer.cached_labels == 2

    renderer.clear_cache()
    assert renderer.cached_labels == 0


GREEN = (0, 255, 0)


def solid_image(width, height, color=GREEN):
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :, :3] = color
    pixels[:, :, 3] = 255
    return pixels


def green_box(buffer):
    """(center x, center y, width, height) of the pure green pixels."""
    mask = (buffer[:, :, 1] > 200) & (buffer[:, :, 0] < 60) & (buffer[:, :, 2] < 60)
    ys, xs = np.nonzero(mask)
    assert len(xs) > 0
    return xs.mean(), ys.mean(), xs.max() - xs.min() + 1, ys.max() - ys.min() + 1


def render_image_wedge(image):
    renderer = WheelRenderer(StyleSettings())
    option = PrizeOption(id="img", name="IMAGE", weight=1, image=image)
    buffer = renderer.new_frame(200, 200)
    renderer.render(buffer, compute_segments([option]), 0.0)
    return buffer


def test_image_wedge_replaces_label():
    buffer = render_image_wedge(PrizeImage(pixels=solid_image(16, 6), landscape=True))
    x, y, _, _ = green_box(buffer)
    # single wedge: content sits at mid angle pi, left of centre
    geo = WheelRenderer(StyleSettings()).geometry(200, 200)
    assert x == pytest.approx(geo.cx - geo.content_radius, abs=1.5)
    assert y == pytest.approx(geo.cy, abs=1.5)


def test_image_orientation_follows_landscape_flag():
    _, _, width, height = green_box(render_image_wedge(PrizeImage(pixels=solid_image(16, 6), landscape=True)))
    assert width > height

    _, _, width, height = green_box(render_image_wedge(PrizeImage(pixels=solid_image(16, 6), landscape=False)))
    assert height > width


def test_image_offset_applies_in_rotated_frame():
    base_x, base_y, _, _ = green_box(render_image_wedge(PrizeImage(pixels=solid_image(8, 8), landscape=True)))
    moved_x, moved_y, _, _ = green_box(
        render_image_wedge(PrizeImage(pixels=solid_image(8, 8), offset_x=10, landscape=True))
    )
    # the image is turned half a circle at mid angle pi, so +x points left on screen
    assert moved_x == pytest.approx(base_x - 10, abs=1.5)
    assert moved_y == pytest.approx(base_y, abs=1.5)


def test_prize_image_from_path_shrinks_and_adds_alpha(tmp_path):
    path = tmp_path / "star.png"
    Image.new("RGB", (40, 20), (255, 215, 0)).save(path)

    image = PrizeImage.from_path(path, max_size=8, offset_y=-2)
    assert (image.width, image.height) == (8, 4)
    assert image.pixels.shape == (4, 8, 4)
    assert np.allclose(image.pixels[2, 4], (255, 215, 0, 255), atol=2)
    assert image.offset_y == -2
    assert not image.landscape
