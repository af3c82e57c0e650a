"""Wheel frame renderer.

Draws one complete frame of the wheel at a given rotation: wedges, radial
dividers, borders, per-wedge content (wrapped text or an image), the centre
hub and the fixed pointer. Rotation only moves the wedges and their
content; the pointer stays put.
"""

from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple
import logging
import math

import numpy as np

from prizewheel.config.settings import StyleSettings
from prizewheel.graphics.primitives import (
    Buffer,
    Color,
    PolarGrid,
    contrast_color,
    draw_circle,
    draw_image_centered,
    draw_line,
    draw_pie_slice,
    draw_polygon,
    fill,
    new_buffer,
    polar_grid,
)
from prizewheel.graphics.text import (
    font_measure,
    is_bold,
    load_font,
    render_lines,
    rotate_sprite,
    wrap_label,
)

if TYPE_CHECKING:
    from prizewheel.wheel.models import PrizeOption, Segment

logger = logging.getLogger(__name__)

POINTER_TOP = 3 * math.pi / 2


class WheelGeometry:
    """Pixel radii for a given canvas size and style."""

    def __init__(self, width: int, height: int, style: StyleSettings, margin: int = 5):
        self.cx = width / 2
        self.cy = height / 2
        self.outer_radius = max(1.0, min(width, height) / 2 - margin)
        self.inner_radius = self.outer_radius * style.inner_radius / 100
        self.content_radius = self.outer_radius * style.text_distance / 100
        self.hub_radius = self.outer_radius * style.hub_radius / 100
        self.pointer_length = self.outer_radius * style.pointer_size / 100
        self.margin = margin

    def point(self, radius: float, angle: float) -> Tuple[float, float]:
        return self.cx + radius * math.cos(angle), self.cy + radius * math.sin(angle)


class WheelRenderer:
    """Draws the wheel into numpy frame buffers.

    The renderer keeps small caches (polar grid per canvas size, label
    sprites per prize) but no animation state; the wheel angle is passed
    in on every call.
    """

    def __init__(self, style: Optional[StyleSettings] = None, margin: int = 5):
        self.style = style or StyleSettings()
        self.margin = margin
        self._grid_key: Optional[Tuple[int, int]] = None
        self._grid: Optional[PolarGrid] = None
        self._label_cache: Dict[tuple, np.ndarray] = {}

    @property
    def cached_labels(self) -> int:
        return len(self._label_cache)

    def clear_cache(self) -> None:
        """Drop cached label sprites, e.g. when the prize list changes."""
        self._label_cache.clear()

    def new_frame(self, width: int, height: int) -> Buffer:
        return new_buffer(width, height, self.style.background_color)

    def geometry(self, width: int, height: int) -> WheelGeometry:
        return WheelGeometry(width, height, self.style, self.margin)

    def _polar_grid(self, buffer: Buffer, geo: WheelGeometry) -> PolarGrid:
        key = buffer.shape[:2]
        if self._grid is None or self._grid_key != key:
            self._grid = polar_grid(buffer, geo.cx, geo.cy)
            self._grid_key = key
        return self._grid

    # Colors

    def slice_color(self, segment: "Segment") -> Color:
        option_style = segment.option.style
        if option_style is not None and option_style.background_color is not None:
            return option_style.background_color
        palette = self.style.slice_colors
        return tuple(palette[segment.index % len(palette)])  # type: ignore[return-value]

    def text_color(self, segment: "Segment") -> Color:
        option_style = segment.option.style
        if option_style is not None and option_style.text_color is not None:
            return option_style.text_color
        return contrast_color(
            self.slice_color(segment),
            light=self.style.light_text_color,
            dark=self.style.dark_text_color,
        )

    # Frame

    def render(
        self,
        buffer: Buffer,
        segments: Sequence["Segment"],
        angle: float,
        pointer_angle: float = POINTER_TOP,
    ) -> Buffer:
        """Draw a complete frame with the wheel rotated by angle radians.

        With no segments only the rim, hub and pointer are drawn.
        """
        h, w = buffer.shape[:2]
        geo = self.geometry(w, h)
        grid = self._polar_grid(buffer, geo)

        fill(buffer, self.style.background_color)

        for segment in segments:
            draw_pie_slice(
                buffer, geo.cx, geo.cy, geo.outer_radius,
                angle + segment.start_angle, angle + segment.end_angle,
                self.slice_color(segment),
                inner_radius=geo.inner_radius,
                grid=grid,
            )

        self._draw_radial_lines(buffer, geo, segments, angle)

        for segment in segments:
            self._draw_content(buffer, geo, segment, angle)

        self._draw_borders(buffer, geo, grid)
        self._draw_hub(buffer, geo, grid)
        self.draw_pointer(buffer, geo, pointer_angle)
        return buffer

    def _draw_radial_lines(self, buffer: Buffer, geo: WheelGeometry, segments: Sequence["Segment"], angle: float) -> None:
        width = self.style.radius_line_width
        if width <= 0 or not segments:
            return
        color = self.style.radius_line_color
        inside = geo.inner_radius + 1
        outside = geo.outer_radius - 1
        # start edge of each wedge; with n >= 1 these cover every boundary
        for segment in segments:
            edge = angle + segment.start_angle
            x1, y1 = geo.point(inside, edge)
            x2, y2 = geo.point(outside, edge)
            draw_line(buffer, int(round(x1)), int(round(y1)), int(round(x2)), int(round(y2)), color, width)

    def _draw_borders(self, buffer: Buffer, geo: WheelGeometry, grid: PolarGrid) -> None:
        style = self.style
        if style.outer_border_width > 0:
            draw_circle(
                buffer, geo.cx, geo.cy, geo.outer_radius, style.outer_border_color,
                filled=False, thickness=style.outer_border_width, grid=grid,
            )
        if style.inner_border_width > 0 and geo.inner_radius > 0:
            draw_circle(
                buffer, geo.cx, geo.cy, geo.inner_radius + style.inner_border_width,
                style.inner_border_color,
                filled=False, thickness=style.inner_border_width, grid=grid,
            )

    def _draw_hub(self, buffer: Buffer, geo: WheelGeometry, grid: PolarGrid) -> None:
        if geo.hub_radius <= 0:
            return
        draw_circle(buffer, geo.cx, geo.cy, geo.hub_radius, self.style.accent_color, grid=grid)
        draw_circle(
            buffer, geo.cx, geo.cy, geo.hub_radius, self.style.hub_border_color,
            filled=False, thickness=1, grid=grid,
        )

    def draw_pointer(self, buffer: Buffer, geo: WheelGeometry, pointer_angle: float) -> None:
        """Triangle at the rim pointing at the centre, independent of rotation."""
        length = geo.pointer_length
        half_width = length / 2
        base_radius = geo.outer_radius + geo.margin
        tip = geo.point(base_radius - length, pointer_angle)
        base_x, base_y = geo.point(base_radius, pointer_angle)
        # unit tangent at the pointer angle
        tx, ty = -math.sin(pointer_angle), math.cos(pointer_angle)
        left = (base_x + tx * half_width, base_y + ty * half_width)
        right = (base_x - tx * half_width, base_y - ty * half_width)
        draw_polygon(buffer, [tip, left, right], self.style.pointer_color)

    # Content

    def _draw_content(self, buffer: Buffer, geo: WheelGeometry, segment: "Segment", angle: float) -> None:
        mid = angle + segment.mid_angle
        cx, cy = geo.point(geo.content_radius, mid)

        image = segment.option.image
        if image is not None:
            rotation = mid + (0 if image.landscape else math.pi / 2)
            sprite = rotate_sprite(image.pixels, rotation)
            # offsets are in the image's own (rotated) frame
            ox = image.offset_x * math.cos(rotation) - image.offset_y * math.sin(rotation)
            oy = image.offset_x * math.sin(rotation) + image.offset_y * math.cos(rotation)
            draw_image_centered(buffer, sprite, cx + ox, cy + oy)
            return

        sprite = self.label_sprite(segment, geo)
        if sprite is None:
            return
        rotation = mid + (math.pi / 2 if self.style.perpendicular_text else 0)
        draw_image_centered(buffer, rotate_sprite(sprite, rotation), cx, cy)

    def label_width(self, segment: "Segment", geo: WheelGeometry) -> float:
        """Pixel width a label line may use inside this wedge."""
        factor = self.style.label_width_factor
        if self.style.perpendicular_text:
            return segment.span * geo.content_radius * factor
        return (geo.outer_radius - max(geo.inner_radius, geo.hub_radius)) * factor

    def label_lines(self, segment: "Segment", geo: WheelGeometry) -> List[str]:
        font = self._font_for(segment.option)
        return wrap_label(
            segment.option.name,
            self.label_width(segment, geo),
            font_measure(font),
            max_lines=self.style.max_label_lines,
        )

    def label_sprite(self, segment: "Segment", geo: WheelGeometry) -> Optional[np.ndarray]:
        """Unrotated RGBA sprite of the wrapped label, cached per prize and width."""
        option = segment.option
        if not option.name:
            return None
        color = self.text_color(segment)
        max_width = round(self.label_width(segment, geo), 1)
        key = (option.id, option.name, option.style, color, max_width)
        sprite = self._label_cache.get(key)
        if sprite is None:
            font = self._font_for(option)
            lines = self.label_lines(segment, geo)
            sprite = render_lines(lines, font, color, line_spacing=self.style.line_spacing)
            self._label_cache[key] = sprite
            if len(lines) > 1:
                logger.debug(f"Wrapped {option.name!r} into {len(lines)} lines")
        return sprite

    def _font_for(self, option: "PrizeOption"):
        style = self.style
        option_style = option.style
        size = style.font_size
        weight = style.font_weight
        family = style.font_family
        if option_style is not None:
            size = option_style.font_size or size
            weight = option_style.font_weight or weight
            family = option_style.font_family or family
        return load_font(size, is_bold(weight), family)
