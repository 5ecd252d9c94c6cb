"""Window state - surface dimensions and border."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass
class WindowState:
    """Size of the drawing surface as reported by the display."""
    outer_w: int = 0
    outer_h: int = 0
    border: int = 0

    @property
    def width(self) -> int:
        """Drawable width inside the border."""
        return max(0, self.outer_w - 2 * self.border)

    @property
    def height(self) -> int:
        """Drawable height inside the border."""
        return max(0, self.outer_h - 2 * self.border)

    @property
    def size(self) -> Tuple[int, int]:
        """Drawable size as tuple."""
        return (self.width, self.height)
