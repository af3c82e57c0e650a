"""Prize wheel data model.

PrizeOption is what the surrounding application hands in, Segment is the
derived equal-angle layout, SpinOutcome is what comes back out once a spin
has finished animating.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple, Union
import logging
import math

import numpy as np
from numpy.typing import NDArray

from prizewheel.core.errors import ConfigurationError
from prizewheel.graphics.primitives import Color, parse_color

logger = logging.getLogger(__name__)

ColorLike = Union[Color, str]


@dataclass(frozen=True)
class PrizeStyle:
    """Per-prize presentation overrides. Any field left as None uses the renderer default."""

    background_color: Optional[Color] = None
    text_color: Optional[Color] = None
    font_family: Optional[str] = None
    font_size: Optional[int] = None
    font_weight: Optional[str] = None

    @classmethod
    def create(
        cls,
        background_color: Optional[ColorLike] = None,
        text_color: Optional[ColorLike] = None,
        **kwargs: Any,
    ) -> "PrizeStyle":
        """Build a style, accepting '#rrggbb' strings for colors."""
        return cls(
            background_color=parse_color(background_color) if background_color is not None else None,
            text_color=parse_color(text_color) if text_color is not None else None,
            **kwargs,
        )


@dataclass(frozen=True, eq=False)
class PrizeImage:
    """Pre-loaded wedge image.

    Attributes:
        pixels: uint8 array (height, width, 3 or 4)
        offset_x: Horizontal nudge in pixels, applied before rotation
        offset_y: Vertical nudge in pixels, applied before rotation
        landscape: Landscape images sit along the radius; portrait images
            get an extra quarter turn so they stand upright in the wedge
    """

    pixels: NDArray[np.uint8]
    offset_x: int = 0
    offset_y: int = 0
    landscape: bool = False

    @classmethod
    def from_path(cls, path: Union[str, Path], max_size: Optional[int] = None, **kwargs: Any) -> "PrizeImage":
        """Load an image file with Pillow, optionally shrinking it to fit max_size."""
        from PIL import Image

        with Image.open(path) as img:
            img = img.convert("RGBA")
            if max_size is not None:
                img.thumbnail((max_size, max_size))
            pixels = np.asarray(img, dtype=np.uint8).copy()
        logger.debug(f"Loaded prize image {path} ({pixels.shape[1]}x{pixels.shape[0]})")
        return cls(pixels=pixels, **kwargs)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


@dataclass(frozen=True)
class PrizeOption:
    """One wedge on the wheel.

    weight is relative probability mass and is normalised at selection
    time; it has no influence on the wedge's size.
    """

    id: str
    name: str
    weight: float
    active: bool = True
    style: Optional[PrizeStyle] = None
    image: Optional[PrizeImage] = None


@dataclass(frozen=True)
class Segment:
    """Equal-angle wedge in the wheel's own frame (radians, before rotation)."""

    index: int
    option: PrizeOption
    start_angle: float
    end_angle: float

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def mid_angle(self) -> float:
        return self.start_angle + self.span / 2


@dataclass(frozen=True)
class SpinOutcome:
    """Result of one completed spin."""

    winning_prize: PrizeOption
    final_angle: float
    winner_index: int
    full_turns: int = 0

    @property
    def prize_name(self) -> str:
        return self.winning_prize.name

    def as_record(self, contact: str) -> Dict[str, str]:
        """Payload the surrounding application stores against the contact."""
        return {"email": contact, "prize": self.winning_prize.name}


def total_weight(options: Sequence[PrizeOption]) -> float:
    return float(sum(option.weight for option in options))


def validate_options(options: Sequence[PrizeOption]) -> Tuple[PrizeOption, ...]:
    """Check a prize list is usable by the engine and freeze it.

    Raises:
        ConfigurationError: list is empty, holds an inactive prize, has a
            negative or non-finite weight, or its weights sum to zero
    """
    snapshot = tuple(options)
    if not snapshot:
        raise ConfigurationError("Prize list is empty")

    for option in snapshot:
        if not option.active:
            raise ConfigurationError(f"Prize {option.name!r} is inactive; filter it out before configuring")
        if not math.isfinite(option.weight) or option.weight < 0:
            raise ConfigurationError(f"Prize {option.name!r} has invalid weight {option.weight!r}")

    if total_weight(snapshot) <= 0:
        raise ConfigurationError("All prize weights are zero")

    return snapshot

