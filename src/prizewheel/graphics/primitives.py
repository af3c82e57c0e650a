"""Basic drawing primitives for wheel frames.

Every function draws into a numpy buffer of shape (height, width, 3),
clipping silently at the edges.
"""

from typing import Optional, Sequence, Tuple, Union
import math
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Point = Tuple[float, float]
Buffer = NDArray[np.uint8]
PolarGrid = Tuple[NDArray[np.float64], NDArray[np.float64]]

TAU = 2 * math.pi


def new_buffer(width: int, height: int, color: Color = (0, 0, 0)) -> Buffer:
    """Allocate a frame buffer filled with color."""
    buffer = np.zeros((height, width, 3), dtype=np.uint8)
    buffer[:, :] = color
    return buffer


def parse_color(value: Union[str, Sequence[int]]) -> Color:
    """Accept '#rgb', '#rrggbb' or an RGB sequence and return an RGB tuple.

    Raises:
        ValueError: for anything else
    """
    if isinstance(value, str):
        text = value.strip().lstrip("#")
        if len(text) == 3:
            text = "".join(ch * 2 for ch in text)
        if len(text) != 6:
            raise ValueError(f"Invalid color: {value!r}")
        try:
            return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
        except ValueError:
            raise ValueError(f"Invalid color: {value!r}") from None

    components = tuple(int(c) for c in value)
    if len(components) != 3 or any(c < 0 or c > 255 for c in components):
        raise ValueError(f"Invalid color: {value!r}")
    return components  # type: ignore[return-value]


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def polar_grid(buffer: Buffer, cx: float, cy: float) -> PolarGrid:
    """Distance and angle (in [0, 2*pi), clockwise from 3 o'clock) of every pixel centre."""
    h, w = buffer.shape[:2]
    ys, xs = np.mgrid[0:h, 0:w]
    dx = xs + 0.5 - cx
    dy = ys + 0.5 - cy
    dist = np.hypot(dx, dy)
    angle = np.mod(np.arctan2(dy, dx), TAU)
    return dist, angle


def _grid_for(buffer: Buffer, cx: float, cy: float, grid: Optional[PolarGrid]) -> PolarGrid:
    if grid is not None and grid[0].shape == buffer.shape[:2]:
        return grid
    return polar_grid(buffer, cx, cy)


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    filled: bool = True,
    thickness: float = 1.0,
    grid: Optional[PolarGrid] = None,
) -> None:
    """Draw a disc, or a ring of the given thickness ending at radius.

    Args:
        buffer: Target numpy array (height, width, 3)
        cx, cy: Centre
        radius: Outer radius in pixels
        color: RGB color tuple
        filled: If True, fill the disc; if False, draw outline only
        thickness: Outline thickness, measured inwards from radius
        grid: Optional cached polar_grid() for this centre
    """
    if radius <= 0:
        return
    dist, _ = _grid_for(buffer, cx, cy, grid)
    if filled:
        mask = dist <= radius
    else:
        if thickness <= 0:
            return
        mask = (dist <= radius) & (dist > radius - thickness)
    buffer[mask] = color


def draw_pie_slice(
    buffer: Buffer,
    cx: float,
    cy: float,
    outer_radius: float,
    start_angle: float,
    end_angle: float,
    color: Color,
    inner_radius: float = 0.0,
    grid: Optional[PolarGrid] = None,
) -> None:
    """Fill the annular wedge between two angles (radians, clockwise).

    Angles may be unbounded; the wedge runs forward from start_angle to
    end_angle. A span of 2*pi or more fills the whole annulus.
    """
    span = end_angle - start_angle
    if span <= 0 or outer_radius <= 0:
        return

    dist, angle = _grid_for(buffer, cx, cy, grid)
    radial = (dist <= outer_radius) & (dist >= inner_radius)

    if span >= TAU:
        buffer[radial] = color
        return

    start = math.fmod(start_angle, TAU)
    if start < 0:
        start += TAU
    relative = np.mod(angle - start, TAU)
    buffer[radial & (relative < span)] = color


def draw_line(
    buffer: Buffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: Color,
    thickness: int = 1,
) -> None:
    """Draw a line using Bresenham's algorithm with a square brush."""
    if thickness <= 0:
        return
    h, w = buffer.shape[:2]

    x1, y1, x2, y2 = int(round(x1)), int(round(y1)), int(round(x2)), int(round(y2))
    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    x, y = x1, y1
    lo = -(thickness // 2)
    hi = (thickness + 1) // 2

    while True:
        bx1, by1 = max(0, x + lo), max(0, y + lo)
        bx2, by2 = min(w, x + hi), min(h, y + hi)
        if bx1 < bx2 and by1 < by2:
            buffer[by1:by2, bx1:bx2] = color

        if x == x2 and y == y2:
            break

        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def draw_polygon(buffer: Buffer, points: Sequence[Point], color: Color) -> None:
    """Fill a convex polygon given its vertices in either winding order."""
    if len(points) < 3:
        return
    h, w = buffer.shape[:2]

    xs_pts = [p[0] for p in points]
    ys_pts = [p[1] for p in points]
    x_lo = max(0, int(math.floor(min(xs_pts))))
    x_hi = min(w, int(math.ceil(max(xs_pts))) + 1)
    y_lo = max(0, int(math.floor(min(ys_pts))))
    y_hi = min(h, int(math.ceil(max(ys_pts))) + 1)
    if x_lo >= x_hi or y_lo >= y_hi:
        return

    ys, xs = np.mgrid[y_lo:y_hi, x_lo:x_hi]
    px = xs + 0.5
    py = ys + 0.5

    inside_pos = np.ones(px.shape, dtype=bool)
    inside_neg = np.ones(px.shape, dtype=bool)
    for i, (ax, ay) in enumerate(points):
        bx, by = points[(i + 1) % len(points)]
        cross = (bx - ax) * (py - ay) - (by - ay) * (px - ax)
        inside_pos &= cross >= 0
        inside_neg &= cross <= 0

    region = buffer[y_lo:y_hi, x_lo:x_hi]
    region[inside_pos | inside_neg] = color


def draw_image(
    buffer: Buffer,
    image: Buffer,
    x: int,
    y: int,
    alpha: float = 1.0,
) -> None:
    """Draw an image onto the buffer with optional alpha blending.

    Args:
        buffer: Target numpy array (height, width, 3)
        image: Source image array (height, width, 3 or 4)
        x: Top-left x coordinate
        y: Top-left y coordinate
        alpha: Global alpha multiplier (0.0 to 1.0)
    """
    buf_h, buf_w = buffer.shape[:2]
    img_h, img_w = image.shape[:2]

    src_x1 = max(0, -x)
    src_y1 = max(0, -y)
    src_x2 = min(img_w, buf_w - x)
    src_y2 = min(img_h, buf_h - y)

    dst_x1 = max(0, x)
    dst_y1 = max(0, y)
    dst_x2 = dst_x1 + (src_x2 - src_x1)
    dst_y2 = dst_y1 + (src_y2 - src_y1)

    if src_x2 <= src_x1 or src_y2 <= src_y1:
        return

    src_region = image[src_y1:src_y2, src_x1:src_x2]

    if alpha >= 1.0 and image.shape[2] == 3:
        buffer[dst_y1:dst_y2, dst_x1:dst_x2] = src_region
        return

    dst_region = buffer[dst_y1:dst_y2, dst_x1:dst_x2]

    if image.shape[2] == 4:
        img_alpha = (src_region[:, :, 3:4] / 255.0) * alpha
        src_rgb = src_region[:, :, :3]
    else:
        img_alpha = alpha
        src_rgb = src_region

    blended = (src_rgb * img_alpha + dst_region * (1 - img_alpha)).astype(np.uint8)
    buffer[dst_y1:dst_y2, dst_x1:dst_x2] = blended


def draw_image_centered(buffer: Buffer, image: Buffer, cx: float, cy: float, alpha: float = 1.0) -> None:
    """Draw an image with its centre at (cx, cy)."""
    img_h, img_w = image.shape[:2]
    draw_image(buffer, image, int(round(cx - img_w / 2)), int(round(cy - img_h / 2)), alpha)


def contrast_color(background: Color, light: Color = (255, 255, 255), dark: Color = (45, 0, 79)) -> Color:
    """Pick light or dark text for a background by perceived luminance."""
    r, g, b = background
    luminance = 0.299 * r + 0.587 * g + 0.114 * b
    return dark if luminance > 150 else light
