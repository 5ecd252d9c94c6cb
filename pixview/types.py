"""Core data types for pixview."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

import numpy as np

from .config import GRID_STEP, GRID_COLOR, BACKGROUND_COLOR


def frozen(array: np.ndarray) -> np.ndarray:
    """Mark a freshly built array read-only and return it."""
    array.setflags(write=False)
    return array


class Direction(Enum):
    """Pan directions, named after the part of the image being revealed."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @property
    def horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded image: packed 0xAARRGGBB pixels, row-major, top to bottom.

    ``pixels`` is a read-only ``uint32`` vector of ``width * height`` items.
    ``has_alpha`` tells whether the source colour model can express
    transparency, not whether any pixel actually is transparent.
    """
    width: int
    height: int
    pixels: np.ndarray = field(repr=False, compare=False)
    has_alpha: bool = False

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"negative dimensions {self.width}x{self.height}")
        pixels = np.ascontiguousarray(self.pixels, dtype=np.uint32).reshape(-1)
        if pixels.size != self.width * self.height:
            raise ValueError(
                f"{pixels.size} pixels do not fill {self.width}x{self.height}")
        # Writable input may still be referenced by the caller: take a copy.
        if pixels.flags.writeable:
            pixels = frozen(pixels.copy())
        object.__setattr__(self, "pixels", pixels)

    @classmethod
    def empty(cls, has_alpha: bool = False) -> PixelBuffer:
        return cls(0, 0, frozen(np.zeros(0, dtype=np.uint32)), has_alpha)

    @classmethod
    def from_rgba(cls, rgba: np.ndarray, has_alpha: bool) -> PixelBuffer:
        """Pack an ``(height, width, 4)`` uint8 RGBA array."""
        height, width = rgba.shape[:2]
        c = rgba.astype(np.uint32)
        packed = (c[..., 3] << 24) | (c[..., 0] << 16) | (c[..., 1] << 8) | c[..., 2]
        return cls(width, height, frozen(packed.reshape(-1)), has_alpha)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def rows(self) -> np.ndarray:
        """2-D ``(height, width)`` view of the pixels."""
        return self.pixels.reshape(self.height, self.width)

    def pixel(self, x: int, y: int) -> int:
        """Packed value of the pixel at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return int(self.pixels[y * self.width + x])

    def to_rgba_bytes(self, opaque: bool = False) -> bytes:
        """Unpack into R, G, B, A byte order for texture upload.

        With ``opaque`` the alpha bytes are all 0xFF.
        """
        p = self.pixels
        rgba = np.empty((p.size, 4), dtype=np.uint8)
        rgba[:, 0] = (p >> 16) & 0xFF
        rgba[:, 1] = (p >> 8) & 0xFF
        rgba[:, 2] = p & 0xFF
        rgba[:, 3] = 0xFF if opaque else p >> 24
        return rgba.tobytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (self.size == other.size and
                self.has_alpha == other.has_alpha and
                np.array_equal(self.pixels, other.pixels))


@dataclass(frozen=True)
class CheckerboardStyle:
    """Checkerboard drawn behind translucent pixels."""
    cell_size: int = GRID_STEP
    color: int = GRID_COLOR  # RGB24

    def __post_init__(self) -> None:
        if self.cell_size <= 0:
            raise ValueError(f"cell size must be positive, got {self.cell_size}")


@dataclass
class ViewerConfig:
    """Startup options consumed once by the viewer."""
    scale: int = 0  # 0 = optimal
    border: int = 0
    exit_unfocus: bool = False
    background: int = BACKGROUND_COLOR  # RGB24
