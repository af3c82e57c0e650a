import asyncio
import math

import pytest

from prizewheel.core.errors import ConfigurationError, RenderSurfaceError
from prizewheel.core.events import EventType
from prizewheel.core.state import WheelPhase
from prizewheel.graphics.surface import BufferSurface
from prizewheel.wheel.layout import POINTER_TOP, TAU, angular_distance, segment_at_pointer

from conftest import SIZE, make_options


@pytest.mark.asyncio
async def test_two_prize_spin_lands_on_a(make_wheel, scheduler):
    wheel = make_wheel(draws=[0.25])
    wheel.configure(make_options(("A", 1), ("B", 1)))

    future = wheel.spin()
    assert wheel.is_spinning
    scheduler.run_until_idle()
    outcome = await future

    assert outcome.winning_prize.name == "A"
    assert outcome.final_angle == wheel.current_angle
    # A's mid (pi/2) sits under the pointer at 12 o'clock
    assert angular_distance(outcome.final_angle + math.pi / 2, 3 * math.pi / 2) < 1e-6
    assert not wheel.is_spinning
    assert wheel.phase == WheelPhase.IDLE


@pytest.mark.asyncio
async def test_outcome_is_always_the_segment_under_the_pointer(make_wheel, scheduler):
    draws = [0.05, 0.93, 0.41, 0.67, 0.2, 0.88, 0.5]
    wheel = make_wheel(draws=draws, turns=[0.0, 0.5, 0.99])
    wheel.configure(make_options(("A", 5), ("B", 1), ("C", 3), ("D", 1), ("E", 10)))

    for _ in draws:
        future = wheel.spin()
        scheduler.run_until_idle()
        outcome = await future

        winner = wheel.segments[outcome.winner_index]
        assert winner.option == outcome.winning_prize
        assert angular_distance(outcome.final_angle + winner.mid_angle, POINTER_TOP) < 1e-6
        assert segment_at_pointer(wheel.segments, outcome.final_angle).option == outcome.winning_prize


@pytest.mark.asyncio
async def test_full_turns_come_from_configured_range(make_wheel, scheduler):
    wheel = make_wheel(draws=[0.25, 0.75], turns=[0.0, 0.99])
    wheel.configure(make_options(("A", 1), ("B", 1)))

    first = wheel.spin()
    scheduler.run_until_idle()
    low = await first
    start = wheel.current_angle
    second = wheel.spin()
    scheduler.run_until_idle()
    high = await second

    assert low.full_turns == 5
    assert high.full_turns == 7
    assert 7 * TAU <= high.final_angle - start < 8 * TAU


@pytest.mark.asyncio
async def test_spin_while_spinning_is_ignored(make_wheel, scheduler):
    wheel = make_wheel(draws=[0.1, 0.9])
    wheel.configure(make_options(("A", 1), ("B", 1)))
    completed = []
    wheel.on_complete(completed.append)

    first = wheel.spin()
    scheduler.run_next()
    second = wheel.spin()
    third = wheel.spin()
    assert second is first and third is first

    scheduler.run_until_idle()
    outcome = await first

    assert completed == [outcome]
    assert outcome.winning_prize.name == "A"
    history = wheel.event_bus.get_history(EventType.SPIN_COMPLETE)
    assert len(history) == 1
    assert len(wheel.event_bus.get_history(EventType.SPIN_IGNORED)) == 2


@pytest.mark.asyncio
async def test_spin_before_configure_rejected(make_wheel):
    wheel = make_wheel()
    with pytest.raises(ConfigurationError):
        wheel.spin()
    assert not wheel.is_spinning


@pytest.mark.parametrize(
    "options",
    [[], make_options(("A", 0)), make_options(("A", 0), ("B", 0))],
)
def test_configure_rejects_unusable_lists(make_wheel, options):
    wheel = make_wheel()
    with pytest.raises(ConfigurationError):
        wheel.configure(options)


def test_configure_rejects_inactive(make_wheel):
    from prizewheel.wheel.models import PrizeOption

    wheel = make_wheel()
    with pytest.raises(ConfigurationError):
        wheel.configure([PrizeOption(id="a", name="A", weight=1, active=False)])


def test_configure_draws_initial_frame(make_wheel, surface):
    wheel = make_wheel()
    wheel.configure(make_options(("A", 1), ("B", 1)))
    assert surface.frames_presented == 1
    assert wheel.frame.shape == (SIZE, SIZE, 3)
    assert wheel.event_bus.get_history(EventType.PRIZES_CONFIGURED)


def test_unavailable_surface_raises(make_wheel):
    wheel = make_wheel(surface=BufferSurface(SIZE, SIZE, available=False))
    with pytest.raises(RenderSurfaceError):
        wheel.configure(make_options(("A", 1)))


@pytest.mark.asyncio
async def test_surface_lost_mid_spin_still_completes(make_wheel, scheduler, surface):
    wheel = make_wheel()
    wheel.configure(make_options(("A", 1), ("B", 1)))
    future = wheel.spin()
    scheduler.run_next()
    surface.close()
    scheduler.run_until_idle()
    outcome = await future
    assert outcome.winning_prize.name == "A"


@pytest.mark.asyncio
async def test_reconfigure_mid_spin_keeps_running_prizes(make_wheel, scheduler):
    wheel = make_wheel(draws=[0.75])
    wheel.configure(make_options(("A", 1), ("B", 1)))
    future = wheel.spin()
    scheduler.run_next()

    wheel.configure(make_options(("X", 1), ("Y", 1), ("Z", 1)))
    scheduler.run_until_idle()
    outcome = await future

    assert outcome.winning_prize.name == "B"
    assert [o.name for o in wheel.options] == ["X", "Y", "Z"]


@pytest.mark.asyncio
async def test_dispose_cancels_spin(make_wheel, scheduler):
    wheel = make_wheel()
    wheel.configure(make_options(("A", 1), ("B", 1)))
    completed = []
    wheel.on_complete(completed.append)

    future = wheel.spin()
    scheduler.run_next()
    scheduler.run_next()
    wheel.dispose()

    assert future.cancelled()
    assert scheduler.pending == 0
    assert not wheel.is_spinning
    assert completed == []
    with pytest.raises(asyncio.CancelledError):
        await future

    wheel.dispose()
    assert len(wheel.event_bus.get_history(EventType.WHEEL_DISPOSED)) == 1


@pytest.mark.asyncio
async def test_render_failure_skips_frame(make_wheel, scheduler, monkeypatch):
    wheel = make_wheel()
    wheel.configure(make_options(("A", 1), ("B", 1)))
    future = wheel.spin()

    calls = {"n": 0}
    real_render = wheel.renderer.render

    def flaky(*args, **kwargs):
        calls["n"] += 1
        if calls["n"] == 2:
            raise RuntimeError("boom")
        return real_render(*args, **kwargs)

    monkeypatch.setattr(wheel.renderer, "render", flaky)
    scheduler.run_until_idle()
    outcome = await future

    assert outcome.winning_prize.name == "A"
    assert len(wheel.event_bus.get_history(EventType.FRAME_SKIPPED)) == 1


@pytest.mark.asyncio
async def test_unsubscribed_callback_not_called(make_wheel, scheduler):
    wheel = make_wheel()
    wheel.configure(make_options(("A", 1)))
    seen = []
    unsubscribe = wheel.on_complete(seen.append)
    unsubscribe()

    future = wheel.spin()
    scheduler.run_until_idle()
    await future
    assert seen == []


@pytest.mark.asyncio
async def test_outcome_record_payload(make_wheel, scheduler):
    wheel = make_wheel()
    wheel.configure(make_options(("CANETA EXCLUSIVA", 1)))
    future = wheel.spin()
    scheduler.run_until_idle()
    outcome = await future
    assert outcome.as_record("someone@example.com") == {
        "email": "someone@example.com",
        "prize": "CANETA EXCLUSIVA",
    }


class CountingRandom:
    def __init__(self, value=0.25):
        self.value = value
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.value


def test_spin_outside_event_loop_draws_nothing(settings, clock, scheduler, surface):
    from prizewheel.wheel.engine import PrizeWheel

    prizes, turns = CountingRandom(), CountingRandom()
    wheel = PrizeWheel(
        surface=surface, settings=settings, random_source=prizes, turns_source=turns,
        clock=clock, scheduler=scheduler,
    )
    wheel.configure(make_options(("A", 1), ("B", 1)))

    with pytest.raises(RuntimeError):
        wheel.spin()

    assert prizes.calls == 0
    assert turns.calls == 0
    assert not wheel.is_spinning
    assert scheduler.pending == 0
    wheel.dispose()


def test_reconfigure_drops_stale_label_sprites(make_wheel):
    wheel = make_wheel()
    wheel.configure(make_options(("A", 1), ("B", 1)))
    assert wheel.renderer.cached_labels == 2

    for name in ("X", "Y", "Z"):
        wheel.configure(make_options((name, 1)))
        assert wheel.renderer.cached_labels == 1
