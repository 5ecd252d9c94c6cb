from __future__ import annotations

import io
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pytest
from PIL import Image

from pixview.display import Display
from pixview.types import PixelBuffer


def solid(width: int, height: int, value: int, has_alpha: bool = False) -> PixelBuffer:
    """Buffer filled with one packed 0xAARRGGBB value."""
    return PixelBuffer(width, height,
                       np.full(width * height, value, dtype=np.uint32), has_alpha)


def numbered(width: int, height: int, has_alpha: bool = False) -> PixelBuffer:
    """Opaque buffer whose pixel at (x, y) holds 0xFF000000 | (y * width + x)."""
    values = np.arange(width * height, dtype=np.uint32) | np.uint32(0xFF000000)
    return PixelBuffer(width, height, values, has_alpha)


def encode(img: Image.Image, fmt: str, **params) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format=fmt, **params)
    return buf.getvalue()


class FakeDisplay(Display):
    """Scripted display: key presses and focus are fed frame by frame."""

    def __init__(
        self,
        size: Tuple[int, int] = (200, 200),
        keys: Optional[Sequence[List[int]]] = None,
        focus: Optional[Sequence[bool]] = None,
        resizes: Optional[dict] = None,
    ):
        self._size = size
        self._keys = list(keys or [])
        self._focus = list(focus or [])
        self._resizes = dict(resizes or {})
        self.frame = 0
        self.opened = False
        self.closed = 0
        self.titles: List[str] = []
        self.images: List[Tuple[PixelBuffer, int, int]] = []
        self.moves: List[Tuple[int, int]] = []
        self.close_requested = False

    def open(self, width, height, title):
        self.opened = True
        self._size = (width, height)
        self.titles.append(title)

    def close(self):
        self.closed += 1

    def size(self):
        return self._size

    def set_title(self, title):
        self.titles.append(title)

    def set_image(self, image, x, y):
        self.images.append((image, x, y))

    def move_image(self, x, y):
        self.moves.append((x, y))

    def poll_keys(self):
        if self.frame < len(self._keys):
            return list(self._keys[self.frame])
        return []

    def should_close(self):
        return self.close_requested or (
            bool(self._keys) and self.frame > len(self._keys) + 5)

    def is_focused(self):
        if self.frame < len(self._focus):
            return self._focus[self.frame]
        return True

    def is_resized(self):
        if self.frame in self._resizes:
            self._size = self._resizes[self.frame]
            return True
        return False

    def draw(self):
        self.frame += 1


@pytest.fixture(autouse=True)
def quiet_logger():
    from pixview.logging import get_logger
    logger = get_logger()
    enabled = logger.enabled
    logger.enabled = False
    yield
    logger.enabled = enabled
