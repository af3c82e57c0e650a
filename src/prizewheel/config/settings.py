"""
Prize wheel settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested values use a double underscore, e.g. PRIZEWHEEL_WHEEL__SPIN_DURATION_MS=4000
or PRIZEWHEEL_STYLE__PERPENDICULAR_TEXT=false.
"""

from functools import lru_cache
from pathlib import Path
import math
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from prizewheel.graphics.primitives import parse_color

RGB = Tuple[int, int, int]


def _to_rgb(value: Any) -> Any:
    if isinstance(value, (str, list, tuple)):
        return parse_color(value)
    return value


def _default_palette() -> List[RGB]:
    from prizewheel.wheel.defaults import DEFAULT_SLICE_COLORS

    return list(DEFAULT_SLICE_COLORS)


class WheelSettings(BaseModel):
    """Geometry and spin timing."""

    # Square canvas edge in pixels
    size: int = Field(default=300, ge=32, le=4096)
    # Gap between the wheel rim and the canvas edge
    margin: int = Field(default=5, ge=0)

    fps: int = Field(default=60, ge=1, le=240)
    spin_duration_ms: float = Field(default=5000.0, gt=0)
    min_full_turns: int = Field(default=5, ge=0)
    max_full_turns: int = Field(default=7, ge=0)
    easing: str = "ease_out_quart"

    # Fixed on-screen pointer angle; 3*pi/2 is 12 o'clock
    pointer_angle: float = 3 * math.pi / 2

    # Seed for the selection RNG; None means unseeded
    seed: Optional[int] = None

    @model_validator(mode="after")
    def _check_turns(self) -> "WheelSettings":
        if self.min_full_turns > self.max_full_turns:
            raise ValueError("min_full_turns must not exceed max_full_turns")
        return self

    @field_validator("easing")
    @classmethod
    def _check_easing(cls, value: str) -> str:
        from prizewheel.animation.easing import get_easing

        get_easing(value)
        return value.lower()


class StyleSettings(BaseModel):
    """Wheel appearance. Radii and distances are percentages of the wheel radius."""

    background_color: RGB = (255, 255, 255)

    outer_border_color: RGB = (221, 221, 221)
    outer_border_width: int = Field(default=2, ge=0, le=20)

    inner_radius: float = Field(default=0, ge=0, le=100)
    inner_border_color: RGB = (168, 85, 247)
    inner_border_width: int = Field(default=0, ge=0, le=20)

    radius_line_color: RGB = (221, 221, 221)
    radius_line_width: int = Field(default=1, ge=0, le=10)

    slice_colors: List[RGB] = Field(default_factory=_default_palette)
    light_text_color: RGB = (255, 255, 255)
    dark_text_color: RGB = (45, 0, 79)

    text_distance: float = Field(default=65, ge=0, le=100)
    font_family: Optional[str] = None
    font_size: int = Field(default=12, ge=6, le=72)
    font_weight: str = "bold"
    perpendicular_text: bool = True
    max_label_lines: int = Field(default=2, ge=1, le=4)
    line_spacing: int = Field(default=3, ge=0)
    # Fraction of the arc length at the text radius a label line may use
    label_width_factor: float = Field(default=0.7, gt=0, le=1)

    hub_radius: float = Field(default=12, ge=0, le=100)
    accent_color: RGB = (243, 198, 119)
    hub_border_color: RGB = (170, 170, 170)

    pointer_color: RGB = (255, 0, 0)
    pointer_size: float = Field(default=10, gt=0, le=50)

    @field_validator(
        "background_color",
        "outer_border_color",
        "inner_border_color",
        "radius_line_color",
        "light_text_color",
        "dark_text_color",
        "accent_color",
        "hub_border_color",
        "pointer_color",
        mode="before",
    )
    @classmethod
    def _parse_color(cls, value: Any) -> Any:
        return _to_rgb(value)

    @field_validator("slice_colors", mode="before")
    @classmethod
    def _parse_palette(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)) and value and not isinstance(value[0], int):
            return [_to_rgb(item) for item in value]
        return value

    @field_validator("slice_colors")
    @classmethod
    def _non_empty_palette(cls, value: List[RGB]) -> List[RGB]:
        if not value:
            raise ValueError("slice_colors needs at least one color")
        return value


class Settings(BaseSettings):
    """Main prize wheel settings."""

    model_config = SettingsConfigDict(
        env_prefix="PRIZEWHEEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Optional JSON file of prize records; defaults are used when unset
    prizes_file: Optional[Path] = None

    # Simulator window
    simulator_title: str = "Prize Wheel"
    simulator_scale: int = Field(default=2, ge=1, le=8)

    wheel: WheelSettings = Field(default_factory=WheelSettings)
    style: StyleSettings = Field(default_factory=StyleSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
