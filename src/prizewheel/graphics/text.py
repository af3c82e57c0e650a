"""
Text utilities for wheel labels.

Fonts come from Pillow. Labels are measured in pixels, wrapped to the
width available inside a wedge, rendered to a small RGBA sprite, rotated
to the wedge's mid angle, and then blitted onto the frame.

Wrapping never truncates: a word that is wider than the line on its own
is kept whole and allowed to overflow, so the prize name is always shown
in full.
"""

from functools import lru_cache
from typing import Callable, List, Optional, Sequence
import logging
import math

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageDraw, ImageFont

from prizewheel.graphics.primitives import Color

logger = logging.getLogger(__name__)

MeasureFunc = Callable[[str], float]

# Font paths to try when no explicit path is configured
_REGULAR_FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/System/Library/Fonts/Helvetica.ttc",
]
_BOLD_FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/freefont/FreeSansBold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    "/System/Library/Fonts/Helvetica.ttc",
]


@lru_cache(maxsize=64)
def load_font(size: int, bold: bool = True, family: Optional[str] = None) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    """Get a font for label rendering, with caching.

    Args:
        size: Pixel size
        bold: Prefer a bold face
        family: Path or name of a TrueType font to try first
    """
    candidates: List[str] = []
    if family:
        candidates.append(family)
    candidates.extend(_BOLD_FONT_PATHS if bold else _REGULAR_FONT_PATHS)

    for path in candidates:
        try:
            return ImageFont.truetype(path, size)
        except (OSError, IOError):
            continue

    logger.debug(f"No TrueType font found, using Pillow default at {size}px")
    return ImageFont.load_default(size=size)


def is_bold(weight: Optional[str | int]) -> bool:
    if weight is None:
        return True
    if isinstance(weight, int):
        return weight >= 600
    text = str(weight).lower()
    if text.isdigit():
        return int(text) >= 600
    return text in ("bold", "bolder", "heavy", "black")


def font_measure(font) -> MeasureFunc:
    """Width-only measure function bound to a font."""
    return lambda text: font.getlength(text)


def wrap_label(
    text: str,
    max_width: float,
    measure: MeasureFunc,
    max_lines: int = 2,
) -> List[str]:
    """Greedy word wrap of a prize label.

    Words are packed onto each line while they fit max_width. The last
    allowed line takes every remaining word. Labels without whitespace,
    or that already fit, come back as a single line with their inner
    spacing untouched (only leading and trailing whitespace is dropped).
    When a label is broken over several lines, the words on each line
    are separated by single spaces.

    Returns:
        Lines whose words, joined, are exactly the label's words
    """
    if max_lines < 1:
        raise ValueError("max_lines must be at least 1")

    label = text.strip()
    words = label.split()
    if not words:
        return [text] if text else []
    if len(words) == 1 or measure(label) <= max_width:
        return [label]

    lines: List[str] = []
    index = 0
    while index < len(words):
        if len(lines) == max_lines - 1:
            lines.append(" ".join(words[index:]))
            break

        line = words[index]
        index += 1
        while index < len(words):
            candidate = f"{line} {words[index]}"
            if measure(candidate) > max_width:
                break
            line = candidate
            index += 1
        lines.append(line)

    return lines


def render_lines(
    lines: Sequence[str],
    font,
    color: Color,
    line_spacing: int = 3,
    padding: int = 2,
) -> NDArray[np.uint8]:
    """Render centred lines of text to a transparent RGBA sprite."""
    if not lines:
        return np.zeros((1, 1, 4), dtype=np.uint8)

    ascent, descent = font.getmetrics() if hasattr(font, "getmetrics") else (font.size, 0)
    line_height = ascent + descent
    widths = [int(math.ceil(font.getlength(line))) for line in lines]

    width = max(widths) + padding * 2
    height = line_height * len(lines) + line_spacing * (len(lines) - 1) + padding * 2

    sprite = Image.new("RGBA", (max(1, width), max(1, height)), (0, 0, 0, 0))
    draw = ImageDraw.Draw(sprite)
    y = padding
    for line, line_width in zip(lines, widths):
        x = (width - line_width) // 2
        draw.text((x, y), line, font=font, fill=(*color, 255))
        y += line_height + line_spacing

    return np.asarray(sprite, dtype=np.uint8).copy()


def rotate_sprite(sprite: NDArray[np.uint8], angle: float) -> NDArray[np.uint8]:
    """Rotate an RGBA sprite clockwise on screen by angle radians, growing the canvas to fit."""
    if sprite.shape[2] == 3:
        alpha = np.full(sprite.shape[:2] + (1,), 255, dtype=np.uint8)
        sprite = np.concatenate([sprite, alpha], axis=2)
    image = Image.fromarray(sprite)
    # PIL rotates counter-clockwise for positive degrees
    rotated = image.rotate(-math.degrees(angle), resample=Image.Resampling.BICUBIC, expand=True)
    return np.asarray(rotated, dtype=np.uint8).copy()
