"""Core framework components for the prize wheel."""

from .errors import WheelError, ConfigurationError, RenderSurfaceError
from .state import WheelPhase, SpinStateMachine
from .events import EventBus, Event, EventType

__all__ = [
    "WheelError",
    "ConfigurationError",
    "RenderSurfaceError",
    "WheelPhase",
    "SpinStateMachine",
    "EventBus",
    "Event",
    "EventType",
]
