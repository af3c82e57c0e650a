"""Prize wheel engine.

Owns the wheel's mutable state (current angle, phase, segment layout) and
ties the selector, the spin animation and the renderer together.

Spin protocol:
    1. spin() snapshots the configured prizes, picks a winner by weight,
       and computes the angle that parks the winner's equal-angle wedge
       under the pointer after a few full turns.
    2. Each frame tick() eases the angle towards the target and redraws.
    3. When the spin duration has elapsed the angle snaps to the exact
       target, the phase returns to IDLE and the SpinOutcome is delivered
       through the returned future, on_complete callbacks and the event bus.

The returned outcome is always the prize that is visually under the pointer.
"""

from typing import Callable, List, Optional, Sequence, Tuple
import asyncio
import logging
import random

import numpy as np

from prizewheel.animation.clock import Clock, MonotonicClock
from prizewheel.animation.scheduler import AsyncioFrameScheduler, FrameScheduler
from prizewheel.animation.spin import SpinAnimation
from prizewheel.config.settings import Settings, get_settings
from prizewheel.core.errors import ConfigurationError, RenderSurfaceError
from prizewheel.core.events import Event, EventBus, EventType
from prizewheel.core.state import SpinStateMachine, WheelPhase
from prizewheel.graphics.renderer import WheelRenderer
from prizewheel.graphics.surface import Surface
from prizewheel.wheel.layout import compute_segments, compute_target_rotation
from prizewheel.wheel.models import PrizeOption, Segment, SpinOutcome, validate_options
from prizewheel.wheel.selector import RandomSource, WeightedSelector

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[SpinOutcome], None]


class _ActiveSpin:
    """Everything one in-flight spin needs, frozen at spin() time."""

    def __init__(
        self,
        animation: SpinAnimation,
        segments: Tuple[Segment, ...],
        winner_index: int,
        full_turns: int,
        future: "asyncio.Future[SpinOutcome]",
    ):
        self.animation = animation
        self.segments = segments
        self.winner_index = winner_index
        self.full_turns = full_turns
        self.future = future

    @property
    def winner(self) -> PrizeOption:
        return self.segments[self.winner_index].option


class PrizeWheel:
    """Weighted prize selection with an equal-angle spinning wheel.

    Args:
        surface: Where frames are presented; None renders off-screen only
        settings: Wheel and style settings (defaults to get_settings())
        random_source: Randomness for prize selection
        turns_source: Randomness for the number of full turns
        clock: Millisecond clock for the animation
        scheduler: Per-frame callback scheduler
        event_bus: Bus for lifecycle events
        renderer: Frame renderer
    """

    def __init__(
        self,
        surface: Optional[Surface] = None,
        settings: Optional[Settings] = None,
        random_source: Optional[RandomSource] = None,
        turns_source: Optional[RandomSource] = None,
        clock: Optional[Clock] = None,
        scheduler: Optional[FrameScheduler] = None,
        event_bus: Optional[EventBus] = None,
        renderer: Optional[WheelRenderer] = None,
    ):
        self.settings = settings or get_settings()
        wheel_cfg = self.settings.wheel

        if random_source is None:
            random_source = random.Random(wheel_cfg.seed)
        self._selector = WeightedSelector(random_source)
        self._turns_random = turns_source or random.Random()
        self._clock = clock or MonotonicClock()
        self._scheduler = scheduler or AsyncioFrameScheduler(wheel_cfg.fps)
        self.event_bus = event_bus or EventBus()
        self.renderer = renderer or WheelRenderer(self.settings.style, margin=wheel_cfg.margin)
        self.surface = surface

        self._state = SpinStateMachine()
        self._options: Tuple[PrizeOption, ...] = ()
        self._segments: Tuple[Segment, ...] = ()
        self._configured = False
        self._current_angle = 0.0
        self._spin: Optional[_ActiveSpin] = None
        self._frame_handle = None
        self._callbacks: List[OutcomeCallback] = []
        self._last_outcome: Optional[SpinOutcome] = None
        self._surface_warned = False
        self._disposed = False

        width = surface.width if surface is not None else wheel_cfg.size
        height = surface.height if surface is not None else wheel_cfg.size
        self._frame = self.renderer.new_frame(width, height)

    # State

    @property
    def current_angle(self) -> float:
        return self._current_angle

    @property
    def phase(self) -> WheelPhase:
        return self._state.phase

    @property
    def is_spinning(self) -> bool:
        return self._state.is_spinning

    @property
    def options(self) -> Tuple[PrizeOption, ...]:
        return self._options

    @property
    def segments(self) -> Tuple[Segment, ...]:
        """Layout of the configured prizes (the in-flight spin keeps its own copy)."""
        return self._segments

    @property
    def pointer_angle(self) -> float:
        return self.settings.wheel.pointer_angle

    @property
    def last_outcome(self) -> Optional[SpinOutcome]:
        return self._last_outcome

    @property
    def frame(self) -> np.ndarray:
        """Most recently drawn frame."""
        return self._frame

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    # Public operations

    def configure(self, options: Sequence[PrizeOption]) -> None:
        """Replace the prize set used by subsequent spins.

        A spin already in flight finishes with the prizes it started with.

        Raises:
            ConfigurationError: empty list, inactive prize, bad weights
            RenderSurfaceError: surface given but not available
        """
        self._ensure_alive()
        snapshot = validate_options(options)

        self._options = snapshot
        self._segments = compute_segments(snapshot)
        self.renderer.clear_cache()
        self._configured = True
        logger.info(f"Wheel configured with {len(snapshot)} prizes")

        self.event_bus.emit(Event(
            EventType.PRIZES_CONFIGURED,
            data={"count": len(snapshot), "names": [o.name for o in snapshot]},
        ))

        if self.surface is not None and not self.surface.is_available:
            self._surface_warned = True
            self.event_bus.emit(Event(EventType.SURFACE_UNAVAILABLE))
            raise RenderSurfaceError("Render surface is not available")

        if not self.is_spinning:
            self.draw()

    def spin(self) -> "asyncio.Future[SpinOutcome]":
        """Start one spin. Must be called with an asyncio loop running.

        Returns:
            Future resolved with the SpinOutcome once the animation ends.
            While a spin is already running, the same in-flight future is
            returned and nothing else happens.

        Raises:
            ConfigurationError: wheel never configured, or no prizes
            RuntimeError: no running event loop (nothing is drawn)
        """
        self._ensure_alive()

        if self._spin is not None and self.is_spinning:
            logger.debug("Spin ignored: wheel already spinning")
            self.event_bus.emit(Event(EventType.SPIN_IGNORED))
            return self._spin.future

        if not self._configured or not self._options:
            raise ConfigurationError("Wheel has no prizes configured")

        # no random draws before this point
        loop = asyncio.get_running_loop()

        options = self._options
        segments = compute_segments(options)
        winner_index, winner = self._selector.select(options)
        full_turns = self._draw_full_turns()

        wheel_cfg = self.settings.wheel
        target = compute_target_rotation(
            self._current_angle,
            segments[winner_index].mid_angle,
            wheel_cfg.pointer_angle,
            full_turns,
        )
        animation = SpinAnimation(
            start_angle=self._current_angle,
            target_angle=target,
            start_ms=self._clock.now_ms(),
            duration_ms=wheel_cfg.spin_duration_ms,
            easing=wheel_cfg.easing,
        )

        future: asyncio.Future[SpinOutcome] = loop.create_future()
        self._spin = _ActiveSpin(animation, segments, winner_index, full_turns, future)
        self._state.transition(WheelPhase.SPINNING)

        logger.info(
            f"Spinning: {len(segments)} prizes, {full_turns} full turns, "
            f"target {target:.4f} rad"
        )
        self.event_bus.emit(Event(
            EventType.SPIN_STARTED,
            data={"prize_count": len(segments), "full_turns": full_turns},
        ))

        self._frame_handle = self._scheduler.request_frame(self.tick)
        return future

    def tick(self) -> None:
        """Advance the running spin by one frame."""
        self._frame_handle = None
        spin = self._spin
        if spin is None or self._disposed:
            return

        now = self._clock.now_ms()
        self._current_angle = spin.animation.angle_at(now)

        if spin.animation.is_complete(now):
            self._finish(spin)
            return

        self._draw_frame(spin.segments)
        self._frame_handle = self._scheduler.request_frame(self.tick)

    def draw(self) -> None:
        """Redraw the wheel at its current angle."""
        segments = self._spin.segments if self._spin is not None else self._segments
        self._draw_frame(segments)

    def on_complete(self, callback: OutcomeCallback) -> Callable[[], None]:
        """Register a callback for every finished spin. Returns an unsubscribe function."""
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def dispose(self) -> None:
        """Tear the wheel down: cancel the pending frame and any unfinished spin."""
        if self._disposed:
            return

        if self._frame_handle is not None:
            self._scheduler.cancel_frame(self._frame_handle)
            self._frame_handle = None

        spin = self._spin
        self._spin = None
        if spin is not None and not spin.future.done():
            spin.future.cancel()
            logger.info("Spin cancelled by dispose()")
        if self.is_spinning:
            self._state.transition(WheelPhase.IDLE)

        self._callbacks.clear()
        self._disposed = True
        self.event_bus.emit(Event(EventType.WHEEL_DISPOSED))
        logger.info("Wheel disposed")

    # Internals

    def _ensure_alive(self) -> None:
        if self._disposed:
            raise RenderSurfaceError("Wheel has been disposed")

    def _draw_full_turns(self) -> int:
        wheel_cfg = self.settings.wheel
        low, high = wheel_cfg.min_full_turns, wheel_cfg.max_full_turns
        turns = low + int(self._turns_random.random() * (high - low + 1))
        return min(turns, high)

    def _finish(self, spin: _ActiveSpin) -> None:
        self._current_angle = spin.animation.target_angle
        self._draw_frame(spin.segments)

        outcome = SpinOutcome(
            winning_prize=spin.winner,
            final_angle=self._current_angle,
            winner_index=spin.winner_index,
            full_turns=spin.full_turns,
        )
        self._spin = None
        self._last_outcome = outcome
        self._state.transition(WheelPhase.IDLE)
        logger.info(f"Spin complete: {outcome.prize_name!r} at {outcome.final_angle:.4f} rad")

        if not spin.future.done():
            spin.future.set_result(outcome)

        for callback in list(self._callbacks):
            try:
                callback(outcome)
            except Exception as e:
                logger.error(f"Error in spin completion callback: {e}")

        self.event_bus.emit(Event(
            EventType.SPIN_COMPLETE,
            data={
                "prize": outcome.prize_name,
                "prize_id": outcome.winning_prize.id,
                "final_angle": outcome.final_angle,
            },
        ))

    def _draw_frame(self, segments: Sequence[Segment]) -> None:
        """Render and present one frame. Failures skip the frame, never the spin."""
        try:
            self.renderer.render(self._frame, segments, self._current_angle, self.pointer_angle)
        except Exception as e:
            logger.warning(f"Frame skipped, render failed: {e}")
            self.event_bus.emit(Event(EventType.FRAME_SKIPPED, data={"reason": str(e)}))
            return

        surface = self.surface
        if surface is None:
            return
        if not surface.is_available:
            if not self._surface_warned:
                logger.warning("Render surface unavailable; skipping frames")
                self._surface_warned = True
            return

        try:
            surface.present(self._frame)
        except Exception as e:
            logger.warning(f"Frame skipped, present failed: {e}")
            self.event_bus.emit(Event(EventType.FRAME_SKIPPED, data={"reason": str(e)}))
