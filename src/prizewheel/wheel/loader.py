"""
Prize list loading.

Prize files are JSON: either a list of records or an object with a
"prizes" list. Each record looks like

    {"id": "pen", "name": "CANETA EXCLUSIVA", "probability": 20,
     "active": true, "background_color": "#6d28d9", "image": "pen.png"}

"weight" and "probability" are accepted interchangeably. Relative image
paths resolve against the prize file's directory.
"""

from pathlib import Path
from typing import Any, List, Optional, Sequence, Union
import json
import logging

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from prizewheel.core.errors import ConfigurationError
from prizewheel.graphics.primitives import Color, parse_color
from prizewheel.wheel.models import PrizeImage, PrizeOption, PrizeStyle

logger = logging.getLogger(__name__)


class PrizeRecord(BaseModel):
    """One prize as stored in a prize file."""

    id: Optional[str] = None
    name: str = Field(min_length=1)
    weight: float = Field(ge=0, validation_alias=AliasChoices("weight", "probability"))
    active: bool = True

    background_color: Optional[Color] = None
    text_color: Optional[Color] = None
    font_family: Optional[str] = None
    font_size: Optional[int] = Field(default=None, ge=6, le=72)
    font_weight: Optional[str] = None

    image: Optional[str] = None
    image_size: Optional[int] = Field(default=None, gt=0)
    image_offset_x: int = 0
    image_offset_y: int = 0
    image_landscape: bool = False

    @field_validator("background_color", "text_color", mode="before")
    @classmethod
    def _parse_color(cls, value: Any) -> Any:
        if isinstance(value, (str, list, tuple)):
            return parse_color(value)
        return value

    @field_validator("font_weight", mode="before")
    @classmethod
    def _weight_to_str(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    def has_style(self) -> bool:
        return any(
            v is not None
            for v in (self.background_color, self.text_color, self.font_family, self.font_size, self.font_weight)
        )

    def to_option(self, index: int, base_dir: Optional[Path] = None) -> PrizeOption:
        style = None
        if self.has_style():
            style = PrizeStyle(
                background_color=self.background_color,
                text_color=self.text_color,
                font_family=self.font_family,
                font_size=self.font_size,
                font_weight=self.font_weight,
            )

        image = None
        if self.image:
            path = Path(self.image)
            if base_dir is not None and not path.is_absolute():
                path = base_dir / path
            try:
                image = PrizeImage.from_path(
                    path,
                    max_size=self.image_size,
                    offset_x=self.image_offset_x,
                    offset_y=self.image_offset_y,
                    landscape=self.image_landscape,
                )
            except OSError as e:
                raise ConfigurationError(f"Cannot load image for prize {self.name!r}: {e}") from e

        return PrizeOption(
            id=self.id or f"prize-{index}",
            name=self.name,
            weight=self.weight,
            active=self.active,
            style=style,
            image=image,
        )


def prizes_from_records(
    records: Sequence[Union[dict, PrizeRecord]],
    base_dir: Optional[Path] = None,
    include_inactive: bool = False,
) -> List[PrizeOption]:
    """Turn raw records into PrizeOptions, dropping inactive ones unless asked.

    Raises:
        ConfigurationError: a record fails validation
    """
    options: List[PrizeOption] = []
    for index, raw in enumerate(records):
        try:
            record = raw if isinstance(raw, PrizeRecord) else PrizeRecord.model_validate(raw)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid prize record #{index}: {e}") from e
        if not record.active and not include_inactive:
            logger.debug(f"Skipping inactive prize {record.name!r}")
            continue
        options.append(record.to_option(index, base_dir))
    return options


def load_prizes(path: Union[str, Path], include_inactive: bool = False) -> List[PrizeOption]:
    """Read a JSON prize file.

    Raises:
        ConfigurationError: file missing, not JSON, or holds invalid records
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read prize file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Prize file {path} is not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("prizes")
    if not isinstance(data, list):
        raise ConfigurationError(f"Prize file {path} must hold a list of prizes")

    options = prizes_from_records(data, base_dir=path.parent, include_inactive=include_inactive)
    logger.info(f"Loaded {len(options)} prizes from {path}")
    return options
