"""
Frame and bounding box types shared by detectors, sources and sinks
"""
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .errors import FrameShapeError

# Channels expected in the pixel buffer for each supported channel order
CHANNEL_COUNTS = {
    'GRAY': 1,
    'BGR': 3,
    'RGB': 3,
    'BGRA': 4,
    'RGBA': 4,
}


@dataclass(frozen=True)
class Frame:
    """Immutable snapshot of one tick's image"""
    width: int
    height: int
    pixels: Optional[np.ndarray]
    channel_order: str = 'BGR'

    @classmethod
    def from_array(cls, pixels: np.ndarray, channel_order: str = 'BGR') -> 'Frame':
        """Build a frame whose declared size is taken from the array"""
        if pixels is None or pixels.ndim < 2:
            return cls(0, 0, pixels, channel_order)
        height, width = pixels.shape[:2]
        return cls(int(width), int(height), pixels, channel_order)

    @property
    def is_empty(self) -> bool:
        return self.pixels is None or self.pixels.size == 0

    @property
    def channels(self) -> int:
        if self.is_empty:
            return 0
        return self.pixels.shape[2] if self.pixels.ndim == 3 else 1

    def check_shape(self, expected_size: Optional[Tuple[int, int]] = None) -> None:
        """
        Validate the pixel buffer against the declared shape

        Args:
            expected_size: Optional (width, height) the frame must have

        Raises:
            FrameShapeError: if the buffer, channel order or size disagree
        """
        if self.channel_order not in CHANNEL_COUNTS:
            raise FrameShapeError(f"Unknown channel order {self.channel_order!r}")

        if expected_size is not None and (self.width, self.height) != tuple(expected_size):
            raise FrameShapeError(
                f"Frame is {self.width}x{self.height}, expected {expected_size[0]}x{expected_size[1]}"
            )

        # Empty buffers are degenerate frames, detectors answer None for them
        if self.is_empty:
            return

        if self.pixels.ndim not in (2, 3):
            raise FrameShapeError(f"Pixel buffer has {self.pixels.ndim} dimensions")

        if self.pixels.shape[:2] != (self.height, self.width):
            raise FrameShapeError(
                f"Pixel buffer is {self.pixels.shape[1]}x{self.pixels.shape[0]}, "
                f"frame declares {self.width}x{self.height}"
            )

        if self.channels != CHANNEL_COUNTS[self.channel_order]:
            raise FrameShapeError(
                f"{self.channel_order} frame has {self.channels} channel(s)"
            )


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in pixel coordinates, bounds inclusive"""
    xmin: int
    xmax: int
    ymin: int
    ymax: int

    @classmethod
    def clamped(cls, xmin, xmax, ymin, ymax, width, height) -> 'BoundingBox':
        """
        Build a box from raw corners, keeping it inside a width x height frame

        Corners are ordered so xmin <= xmax and ymin <= ymax, then each one is
        clamped to [0, width-1] x [0, height-1].
        """
        x1, x2 = sorted((xmin, xmax))
        y1, y2 = sorted((ymin, ymax))
        return cls(
            xmin=_clamp(x1, width),
            xmax=_clamp(x2, width),
            ymin=_clamp(y1, height),
            ymax=_clamp(y2, height),
        )

    @property
    def width(self) -> int:
        return self.xmax - self.xmin

    @property
    def height(self) -> int:
        return self.ymax - self.ymin

    @property
    def center(self) -> Tuple[int, int]:
        return (self.xmin + self.xmax) // 2, (self.ymin + self.ymax) // 2

    def as_xywh(self) -> Tuple[int, int, int, int]:
        return self.xmin, self.ymin, self.width, self.height


def _clamp(value, size):
    return int(max(0, min(value, size - 1)))
