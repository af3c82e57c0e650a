"""
Event bus for the prize wheel.

The engine publishes its lifecycle here (configured, spin started, spin
complete, disposed) and the host (simulator window, CLI or an embedding
application) publishes input. Engine events are delivered synchronously
from emit(); host input is queued and drained once per frame with
process_queue(), which also awaits coroutine handlers.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Awaitable, Callable
import asyncio
import inspect
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Events the wheel and its hosts exchange."""
    # Host input
    BUTTON_PRESS = auto()

    # Wheel lifecycle
    PRIZES_CONFIGURED = auto()
    SPIN_STARTED = auto()
    SPIN_IGNORED = auto()     # spin() while already spinning
    SPIN_COMPLETE = auto()
    WHEEL_DISPOSED = auto()

    # Drawing
    FRAME_SKIPPED = auto()
    SURFACE_UNAVAILABLE = auto()

    # Host loop
    TICK = auto()
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    One published event.

    Attributes:
        type: What happened
        data: Event payload
        source: Who published it
        timestamp: Wall-clock time of creation
    """
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "wheel"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], None] | Callable[[Event], Awaitable[None]]


class EventBus:
    """Publish/subscribe hub with an input queue and a bounded history."""

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self._pending: deque[Event] = deque()
        self._history: deque[Event] = deque(maxlen=history_limit)

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """
        Register handler for event_type.

        Returns:
            Function that removes the handler again
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type.name}")

        def unsubscribe() -> None:
            handlers = self._handlers[event_type]
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """
        Deliver an event now.

        Coroutine handlers cannot be awaited from here; they are skipped
        with a warning. Publish through queue_event() to reach them.
        """
        self._history.append(event)
        for handler in list(self._handlers.get(event.type, ())):
            if inspect.iscoroutinefunction(handler):
                logger.warning(f"Async handler skipped for synchronous {event.type.name}")
                continue
            self._call(handler, event)

    def queue_event(self, event: Event) -> None:
        """Hold an event until the next process_queue()."""
        self._pending.append(event)

    async def process_queue(self) -> None:
        """Deliver every queued event, awaiting coroutine handlers."""
        while self._pending:
            event = self._pending.popleft()
            self._history.append(event)
            waiting = []
            for handler in list(self._handlers.get(event.type, ())):
                if inspect.iscoroutinefunction(handler):
                    waiting.append(handler(event))
                else:
                    self._call(handler, event)
            if not waiting:
                continue
            for result in await asyncio.gather(*waiting, return_exceptions=True):
                if isinstance(result, Exception):
                    logger.error(f"Async handler for {event.type.name} failed: {result}")

    @staticmethod
    def _call(handler: Handler, event: Event) -> None:
        try:
            handler(event)
        except Exception as e:
            logger.error(f"Handler for {event.type.name} failed: {e}")

    def get_history(self, event_type: EventType | None = None, limit: int = 10) -> list[Event]:
        """Most recent events, oldest first, optionally of one type."""
        events = [e for e in self._history if event_type is None or e.type == event_type]
        return events[-limit:]


def button_press_event(source: str = "button") -> Event:
    """Spin request from a host input device."""
    return Event(EventType.BUTTON_PRESS, source=source)
