"""
Simulator window using pygame.

Hosts a PrizeWheel in a desktop window for development and demos.

Keyboard Mapping:
    SPACE / ENTER: Spin
    F1: Toggle info overlay
    F2: Capture screenshot
    ESC: Exit simulator
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pygame
from numpy.typing import NDArray

from prizewheel.core.events import Event, EventBus, EventType, button_press_event
from prizewheel.graphics.surface import Surface

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    title: str = "Prize Wheel"
    fps: int = 60
    scale: int = 2
    info_height: int = 48

    bg_color: tuple[int, int, int] = (20, 20, 30)
    text_color: tuple[int, int, int] = (200, 200, 220)
    accent_color: tuple[int, int, int] = (243, 198, 119)


class PygameSurface(Surface):
    """
    Wheel surface backed by a numpy buffer that the window blits each frame.

    Unavailable until the window has opened, and again after it closes.
    """

    def __init__(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        self._buffer = np.zeros((height, width, 3), dtype=np.uint8)
        self._mounted = False

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def is_available(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        self._mounted = True

    def close(self) -> None:
        self._mounted = False

    def present(self, buffer: NDArray[np.uint8]) -> None:
        np.copyto(self._buffer, buffer)

    def render(self, scale: int = 1) -> pygame.Surface:
        """Convert the buffer to a pygame surface, scaled by an integer factor."""
        surface = pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))
        if scale == 1:
            return surface
        return pygame.transform.scale(surface, (self._width * scale, self._height * scale))


class SimulatorWindow:
    """
    Desktop window that shows the wheel surface and turns key presses into
    BUTTON_PRESS events on the bus.
    """

    def __init__(
        self,
        surface: PygameSurface,
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.surface = surface
        self.config = config or WindowConfig()
        self.event_bus = event_bus or EventBus()

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0
        self._show_info = True

        self._status = "SPACE to spin"
        self._spinning = False

        self.event_bus.subscribe(EventType.SPIN_STARTED, self._on_spin_started)
        self.event_bus.subscribe(EventType.SPIN_COMPLETE, self._on_spin_complete)

        logger.info("SimulatorWindow created")

    @property
    def size(self) -> tuple[int, int]:
        scale = self.config.scale
        return self.surface.width * scale, self.surface.height * scale + self.config.info_height

    def open(self) -> None:
        """Initialize pygame, create the window and mount the surface."""
        if self._screen is not None:
            return
        pygame.init()
        pygame.display.set_caption(self.config.title)
        self._screen = pygame.display.set_mode(self.size, pygame.DOUBLEBUF)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 24)

        self.surface.mount()
        logger.info(f"Pygame initialized: {self.size[0]}x{self.size[1]}")

    def _on_spin_started(self, event: Event) -> None:
        self._spinning = True
        self._status = "Spinning..."

    def _on_spin_complete(self, event: Event) -> None:
        self._spinning = False
        self._status = f"Winner: {event.data.get('prize', '?')}"

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key

        if key == pygame.K_ESCAPE:
            self._running = False
        elif key in (pygame.K_SPACE, pygame.K_RETURN):
            self.event_bus.queue_event(button_press_event(source="keyboard"))
        elif key == pygame.K_F1:
            self._show_info = not self._show_info
        elif key == pygame.K_F2:
            self._capture_screenshot()

    def _render(self) -> None:
        if not self._screen:
            return

        self._screen.fill(self.config.bg_color)
        self._screen.blit(self.surface.render(self.config.scale), (0, 0))

        if self._show_info and self._font:
            color = self.config.text_color if self._spinning else self.config.accent_color
            text = self._font.render(self._status, True, color)
            y = self.surface.height * self.config.scale + (self.config.info_height - text.get_height()) // 2
            self._screen.blit(text, ((self.size[0] - text.get_width()) // 2, y))

        pygame.display.flip()

    def _capture_screenshot(self) -> None:
        """Capture and save a screenshot."""
        if self._screen:
            filename = f"screenshot_{self._frame_count}.png"
            pygame.image.save(self._screen, filename)
            logger.info(f"Screenshot saved: {filename}")

    async def run(self) -> None:
        """Main simulator loop."""
        self.open()
        self._running = True

        logger.info("Simulator started")

        try:
            while self._running:
                self._handle_events()

                if self._clock:
                    delta = self._clock.get_time() / 1000.0
                    self.event_bus.emit(Event(
                        EventType.TICK,
                        data={"delta": delta, "frame": self._frame_count}
                    ))

                await self.event_bus.process_queue()

                self._render()

                if self._clock:
                    self._clock.tick(self.config.fps)

                self._frame_count += 1

                # Yield so the wheel's frame callbacks run
                await asyncio.sleep(0)
        finally:
            self._cleanup()

    def _cleanup(self) -> None:
        self.surface.close()
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="simulator"))
        pygame.quit()
        self._screen = None
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False


def make_window(
    width: int,
    height: int,
    title: str = "Prize Wheel",
    scale: int = 2,
    fps: int = 60,
    event_bus: Optional[EventBus] = None,
) -> SimulatorWindow:
    """Window plus its backing surface, ready to hand to a PrizeWheel."""
    surface = PygameSurface(width, height)
    config = WindowConfig(title=title, fps=fps, scale=scale)
    return SimulatorWindow(surface, config=config, event_bus=event_bus)
