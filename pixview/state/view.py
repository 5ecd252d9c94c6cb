"""View state - scale and image placement."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass
class ViewportState:
    """Scale and placement of the displayed image inside the window."""
    scale: int = 100  # percent
    image_x: int = 0
    image_y: int = 0
    image_w: int = 0
    image_h: int = 0

    @property
    def offset(self) -> Tuple[int, int]:
        """Top-left corner of the image relative to the window."""
        return (self.image_x, self.image_y)
