"""
Spin state machine for the prize wheel.

States:
    IDLE: Wheel at rest, spin() accepted
    SPINNING: Animation in flight, spin() is a no-op

Each spin is IDLE -> SPINNING -> IDLE. Teardown (dispose) also returns
to IDLE from SPINNING.
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class WheelPhase(Enum):
    """Wheel animation phases."""
    IDLE = auto()
    SPINNING = auto()


Listener = Callable[[WheelPhase, WheelPhase], None]


class SpinStateMachine:
    """
    Guards the wheel's phase.

    The wheel engine is the only caller of transition(); listeners are
    notified after every successful change.
    """

    VALID_TRANSITIONS: list[tuple[WheelPhase, WheelPhase]] = [
        (WheelPhase.IDLE, WheelPhase.SPINNING),
        (WheelPhase.SPINNING, WheelPhase.IDLE),
    ]

    def __init__(self, initial: WheelPhase = WheelPhase.IDLE) -> None:
        self._phase = initial
        self._listeners: list[Listener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)

    @property
    def phase(self) -> WheelPhase:
        return self._phase

    @property
    def is_spinning(self) -> bool:
        return self._phase == WheelPhase.SPINNING

    def can_transition(self, to_phase: WheelPhase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: WheelPhase) -> bool:
        """
        Attempt to move to a new phase.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_phase):
            logger.warning(
                f"Invalid transition: {self._phase.name} -> {to_phase.name}"
            )
            return False

        old_phase = self._phase
        self._phase = to_phase
        logger.debug(f"Wheel phase: {old_phase.name} -> {to_phase.name}")

        for listener in self._listeners:
            try:
                listener(old_phase, to_phase)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")

        return True

    def add_listener(self, callback: Listener) -> None:
        self._listeners.append(callback)

    def reset(self) -> None:
        """Force the machine back to IDLE without validation."""
        old_phase = self._phase
        self._phase = WheelPhase.IDLE
        if old_phase != WheelPhase.IDLE:
            for listener in self._listeners:
                try:
                    listener(old_phase, WheelPhase.IDLE)
                except Exception as e:
                    logger.error(f"Error in phase listener during reset: {e}")
            logger.info("Spin state reset to IDLE")
