"""Prize wheel domain: prizes, selection, layout and the spin engine."""

from prizewheel.wheel.models import (
    PrizeImage,
    PrizeOption,
    PrizeStyle,
    Segment,
    SpinOutcome,
    validate_options,
)
from prizewheel.wheel.selector import WeightedSelector, SequenceRandom
from prizewheel.wheel.layout import (
    POINTER_TOP,
    compute_segments,
    compute_target_rotation,
    segment_at_pointer,
)
from prizewheel.wheel.defaults import default_prizes
from prizewheel.wheel.loader import load_prizes, prizes_from_records
from prizewheel.wheel.engine import PrizeWheel

__all__ = [
    "PrizeImage",
    "PrizeOption",
    "PrizeStyle",
    "Segment",
    "SpinOutcome",
    "validate_options",
    "WeightedSelector",
    "SequenceRandom",
    "POINTER_TOP",
    "compute_segments",
    "compute_target_rotation",
    "segment_at_pointer",
    "default_prizes",
    "load_prizes",
    "prizes_from_records",
    "PrizeWheel",
]
