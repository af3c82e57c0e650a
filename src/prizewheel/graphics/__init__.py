"""Graphics module for the prize wheel rendering pipeline.

WheelRenderer lives in prizewheel.graphics.renderer and is imported from
there directly.
"""

from prizewheel.graphics.primitives import (
    Color,
    new_buffer,
    parse_color,
    fill,
    draw_circle,
    draw_pie_slice,
    draw_line,
    draw_polygon,
    draw_image,
    contrast_color,
)
from prizewheel.graphics.text import load_font, wrap_label, render_lines, rotate_sprite
from prizewheel.graphics.surface import Surface, BufferSurface, ImageSurface

__all__ = [
    # Primitives
    "Color",
    "new_buffer",
    "parse_color",
    "fill",
    "draw_circle",
    "draw_pie_slice",
    "draw_line",
    "draw_polygon",
    "draw_image",
    "contrast_color",
    # Text
    "load_font",
    "wrap_label",
    "render_lines",
    "rotate_sprite",
    # Surfaces
    "Surface",
    "BufferSurface",
    "ImageSurface",
]
