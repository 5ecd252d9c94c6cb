"""Pure view calculation functions - no side effects, no state mutation.

All functions work on one axis at a time. An offset is the window-relative
position of the image's leading edge (left or top) and may be negative.
"""

from __future__ import annotations

from .config import SCALE_MIN, SCALE_MAX, SCALE_IDENTITY, MOVE_STEP
from .math_utils import clamp, half_toward_zero


def clamp_scale(scale: int) -> int:
    """Clamp a scale percentage to the supported range."""
    return clamp(int(scale), SCALE_MIN, SCALE_MAX)


def step_scale(scale: int, delta: int) -> int:
    """Move the scale by ``delta`` percent, stopping at the range limits.

    The last step toward a limit may be shorter than ``delta``.
    """
    return clamp_scale(scale + delta)


def compute_optimal_scale(
    img_w: int,
    img_h: int,
    window_w: int,
    window_h: int
) -> int:
    """Largest scale, at most 100%, that fits the image in the window.

    Args:
        img_w: Source image width in pixels.
        img_h: Source image height in pixels.
        window_w: Window width in pixels.
        window_h: Window height in pixels.

    Returns:
        Scale percentage; 100 when the image already fits, never above it.
    """
    scale = SCALE_IDENTITY
    if img_w > 0:
        scale = min(scale, SCALE_IDENTITY * window_w // img_w)
    if img_h > 0:
        scale = min(scale, SCALE_IDENTITY * window_h // img_h)
    return max(SCALE_MIN, scale)


def center_offset(window: int, size: int) -> int:
    """Offset that centers ``size`` within ``window``."""
    return (window - size) // 2


def cover_clamp(offset: int, window: int, size: int) -> int:
    """Snap an oversized image so it leaves no part of the window uncovered.

    Requires ``size >= window``: the result satisfies ``offset <= 0`` and
    ``offset + size >= window``.
    """
    if offset > 0:
        return 0
    if offset + size < window:
        return window - size
    return offset


def place_axis(window: int, size: int, old_offset: int, old_size: int) -> int:
    """Compute the offset of a (possibly resized) image on one axis.

    A fitting image is centered. An oversized image keeps the visual center
    of the previously displayed one and is then clamped to cover the window.
    Without a previous image the oversized image is centered as well.

    Args:
        window: Window size on this axis.
        size: New image size on this axis.
        old_offset: Offset of the previously displayed image.
        old_size: Size of the previously displayed image (0 if none).

    Returns:
        New offset.
    """
    if size <= window or old_size <= 0:
        offset = center_offset(window, size)
    else:
        offset = old_offset + half_toward_zero(old_size - size)
    if size > window:
        offset = cover_clamp(offset, window, size)
    return offset


def is_contained(offset: int, window: int, size: int) -> bool:
    """True if the image lies entirely inside the window on this axis."""
    return offset >= 0 and offset + size <= window


def pan_axis(
    offset: int,
    window: int,
    size: int,
    toward_start: bool,
    step: int = MOVE_STEP
) -> int:
    """Move an oversized image by one step on one axis.

    ``toward_start`` reveals the leading (left/top) part of the image and
    increases the offset, never above 0. Otherwise the offset decreases,
    never below ``window - size``. A contained image does not move.

    Returns:
        New offset (unchanged when no move is possible).
    """
    if is_contained(offset, window, size):
        return offset
    if toward_start:
        if offset <= 0:
            return min(offset + step, 0)
    else:
        if offset + size >= window:
            return max(offset - step, window - size)
    return offset
