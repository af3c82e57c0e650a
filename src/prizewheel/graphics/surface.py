"""
Drawable surfaces the wheel renders onto.

The wheel draws a full frame into its own numpy buffer and hands it to a
Surface with present(). A surface that is not yet mounted, or already
closed, reports is_available = False and the wheel skips drawing to it.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union
import logging

import numpy as np
from numpy.typing import NDArray
from PIL import Image

logger = logging.getLogger(__name__)


class Surface(ABC):
    """Abstract 2D raster target."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Surface width in pixels."""
        ...

    @property
    @abstractmethod
    def height(self) -> int:
        """Surface height in pixels."""
        ...

    @property
    def is_available(self) -> bool:
        """Whether frames can be presented right now."""
        return True

    @abstractmethod
    def present(self, buffer: NDArray[np.uint8]) -> None:
        """
        Show a finished frame.

        Args:
            buffer: numpy array of shape (height, width, 3) with RGB values
        """
        ...

    def close(self) -> None:
        """Release the surface. Further frames are not presented."""


class BufferSurface(Surface):
    """In-memory surface that keeps the last presented frame."""

    def __init__(self, width: int = 300, height: int = 300, available: bool = True) -> None:
        self._width = width
        self._height = height
        self._buffer = np.zeros((height, width, 3), dtype=np.uint8)
        self._available = available
        self.frames_presented = 0

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def is_available(self) -> bool:
        return self._available

    def mount(self) -> None:
        self._available = True

    def close(self) -> None:
        self._available = False

    def present(self, buffer: NDArray[np.uint8]) -> None:
        if buffer.shape != self._buffer.shape:
            raise ValueError(
                f"Frame shape {buffer.shape} does not match surface {self._buffer.shape}"
            )
        np.copyto(self._buffer, buffer)
        self.frames_presented += 1

    def get_buffer(self) -> NDArray[np.uint8]:
        """Copy of the last presented frame."""
        return self._buffer.copy()

    def to_image(self) -> Image.Image:
        return Image.fromarray(self._buffer.copy())


class ImageSurface(BufferSurface):
    """Buffer surface that can write frames out as image files.

    With frame_dir set, every presented frame is saved as
    frame_00000.png, frame_00001.png, ... in that directory.
    """

    def __init__(
        self,
        width: int = 300,
        height: int = 300,
        frame_dir: Optional[Union[str, Path]] = None,
    ) -> None:
        super().__init__(width, height)
        self._frame_dir = Path(frame_dir) if frame_dir else None
        if self._frame_dir:
            self._frame_dir.mkdir(parents=True, exist_ok=True)

    def present(self, buffer: NDArray[np.uint8]) -> None:
        super().present(buffer)
        if self._frame_dir:
            path = self._frame_dir / f"frame_{self.frames_presented - 1:05d}.png"
            self.to_image().save(path)

    def save(self, path: Union[str, Path]) -> Path:
        """Write the last presented frame to path."""
        path = Path(path)
        self.to_image().save(path)
        logger.info(f"Saved wheel frame to {path}")
        return path
