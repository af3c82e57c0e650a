"""Weighted-random prize selection.

Inverse-CDF sampling over the prize list in its given order: draw r in
[0, total), walk the cumulative weights, the first bucket whose upper edge
exceeds r wins. One random draw per selection.
"""

from typing import Protocol, Sequence, Tuple
import logging
import random

from prizewheel.core.errors import ConfigurationError
from prizewheel.wheel.models import PrizeOption, total_weight

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything with random() -> float in [0.0, 1.0). random.Random qualifies."""

    def random(self) -> float: ...


class SequenceRandom:
    """Deterministic RandomSource that replays a fixed list of draws, cycling."""

    def __init__(self, values: Sequence[float]):
        if not values:
            raise ValueError("SequenceRandom needs at least one value")
        self._values = list(values)
        self._index = 0

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


class WeightedSelector:
    """Picks one prize with probability weight / sum(weights)."""

    def __init__(self, random_source: RandomSource | None = None):
        self._random = random_source or random.Random()

    @property
    def random_source(self) -> RandomSource:
        return self._random

    def select(self, options: Sequence[PrizeOption]) -> Tuple[int, PrizeOption]:
        """Choose a winner.

        Args:
            options: Active prizes, non-negative weights, positive total

        Returns:
            (index into options, winning option)

        Raises:
            ConfigurationError: empty list, negative weight, or zero total
        """
        if not options:
            raise ConfigurationError("Cannot select from an empty prize list")
        if any(option.weight < 0 for option in options):
            raise ConfigurationError("Prize weights must be non-negative")

        total = total_weight(options)
        if total <= 0:
            raise ConfigurationError("All prize weights are zero")

        r = self._random.random() * total

        cumulative = 0.0
        for index, option in enumerate(options):
            cumulative += option.weight
            if r < cumulative:
                logger.debug(f"Selected {option.name!r} (r={r:.4f}, total={total:.4f})")
                return index, option

        # Float rounding can leave r == cumulative on the last bucket;
        # the last prize with weight owns the top of the range.
        for index in range(len(options) - 1, -1, -1):
            if options[index].weight > 0:
                return index, options[index]

        raise ConfigurationError("All prize weights are zero")
