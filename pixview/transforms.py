"""Pixel transforms for pixview.

Provides the nearest-neighbor resampler and the checkerboard compositor.
Both return a new PixelBuffer and never touch their input.
"""

from __future__ import annotations
from typing import Optional

import numpy as np

from .config import SCALE_MIN, SCALE_MAX, GRID_DARKEN
from .errors import AllocationFailure
from .types import CheckerboardStyle, PixelBuffer, frozen


def resize(src: PixelBuffer, percent: int) -> PixelBuffer:
    """
    Scale an image by an integer percentage with nearest-neighbor sampling.

    Destination pixel (x, y) copies source pixel (x * 100 / percent,
    y * 100 / percent), truncated, so enlarging duplicates pixels and
    shrinking drops them.

    Args:
        src: Image to scale.
        percent: Scale factor in percent, 1..1000.

    Returns:
        New PixelBuffer of floor(percent * width / 100) x
        floor(percent * height / 100), each side at least 1 pixel when the
        source side is not empty.
    """
    if not SCALE_MIN <= percent <= SCALE_MAX:
        raise ValueError(f"scale {percent}% outside [{SCALE_MIN}, {SCALE_MAX}]")

    # exact floor in integers; a non-empty axis never collapses to zero pixels
    width = max(1, percent * src.width // 100) if src.width else 0
    height = max(1, percent * src.height // 100) if src.height else 0
    if width == 0 or height == 0:
        return PixelBuffer.empty(src.has_alpha)

    try:
        cols = np.arange(width, dtype=np.intp) * 100 // percent
        rows = np.arange(height, dtype=np.intp) * 100 // percent
        out = src.rows()[np.ix_(rows, cols)].reshape(-1)
    except MemoryError as e:
        raise AllocationFailure(width, height) from e

    return PixelBuffer(width, height, frozen(out), src.has_alpha)


def add_checkerboard(
    src: PixelBuffer,
    style: Optional[CheckerboardStyle] = None
) -> PixelBuffer:
    """
    Blend a two-tone checkerboard behind every pixel that is not opaque.

    Cells whose column and row parity differ use ``style.color``; the others
    use that colour darkened by 0x101010. Every channel, alpha included, is
    blended as ``(cell * (255 - a) + pixel * a) >> 8``. The shift stands in
    for division by 255 and its truncation is kept as is. Opaque pixels are
    copied unchanged.

    Args:
        src: Image to composite.
        style: Cell size and base colour; defaults to 10 px, 0x404040.

    Returns:
        New PixelBuffer with the same dimensions and ``has_alpha`` flag.
    """
    style = style or CheckerboardStyle()
    color_a = style.color & 0xFFFFFF
    color_b = (color_a - GRID_DARKEN) & 0xFFFFFFFF
    step = style.cell_size

    if src.is_empty:
        return PixelBuffer.empty(src.has_alpha)

    try:
        px = src.rows()
        alpha = px >> 24
        mask = alpha != 0xFF

        xs = (np.arange(src.width) // step) % 2
        ys = (np.arange(src.height) // step) % 2
        cell = np.where(ys[:, None] != xs[None, :],
                        np.uint32(color_a), np.uint32(color_b))

        inv = 0xFF - alpha
        out = np.zeros_like(px)
        for shift in (0, 8, 16, 24):
            bg = (cell >> shift) & 0xFF
            fg = (px >> shift) & 0xFF
            out |= ((bg * inv + fg * alpha) >> 8) << shift
        out = np.where(mask, out, px).reshape(-1)
    except MemoryError as e:
        raise AllocationFailure(src.width, src.height) from e

    return PixelBuffer(src.width, src.height, frozen(out), src.has_alpha)
