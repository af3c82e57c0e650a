import pytest

from prizewheel.animation.clock import ManualClock
from prizewheel.animation.scheduler import ManualFrameScheduler
from prizewheel.config.settings import Settings, WheelSettings
from prizewheel.graphics.surface import BufferSurface
from prizewheel.wheel.engine import PrizeWheel
from prizewheel.wheel.models import PrizeOption
from prizewheel.wheel.selector import SequenceRandom

SIZE = 120


def make_options(*pairs):
    """(name, weight) pairs to options; ids are derived from the names."""
    return [PrizeOption(id=name.lower(), name=name, weight=weight) for name, weight in pairs]


@pytest.fixture
def settings():
    return Settings(wheel=WheelSettings(size=SIZE, spin_duration_ms=1000, min_full_turns=5, max_full_turns=7))


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scheduler(clock):
    return ManualFrameScheduler(clock, frame_ms=1000.0 / 60)


@pytest.fixture
def surface():
    return BufferSurface(SIZE, SIZE)


@pytest.fixture
def make_wheel(settings, clock, scheduler, surface):
    wheels = []

    def factory(draws=(0.25,), turns=(0.0,), **kwargs):
        kwargs.setdefault("surface", surface)
        wheel = PrizeWheel(
            settings=settings,
            random_source=SequenceRandom(draws),
            turns_source=SequenceRandom(turns),
            clock=clock,
            scheduler=scheduler,
            **kwargs,
        )
        wheels.append(wheel)
        return wheel

    yield factory

    for wheel in wheels:
        wheel.dispose()
