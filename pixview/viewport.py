"""Viewport engine - scale and placement of the image inside the window.

The engine owns the decoded source image, derives the displayed buffer
(resampled, then composited over a checkerboard when transparent) and keeps
its placement consistent with the window:

- on an axis where the image fits, it is centered;
- on an axis where it does not, it covers the whole window.
"""

from __future__ import annotations
from typing import Optional, Tuple

from .config import SCALE_IDENTITY, SCALE_STEP, MOVE_STEP
from .logging import log
from .state import ViewportState, WindowState
from .transforms import add_checkerboard, resize
from .types import CheckerboardStyle, Direction, PixelBuffer, ViewerConfig
from . import view_math


class ViewportEngine:
    """Zoom/pan state machine for a single image."""

    def __init__(
        self,
        source: PixelBuffer,
        window_w: int,
        window_h: int,
        config: Optional[ViewerConfig] = None,
        checkerboard: Optional[CheckerboardStyle] = None,
    ):
        config = config or ViewerConfig()
        self._source = source
        self._checkerboard = checkerboard or CheckerboardStyle()
        self.window = WindowState(window_w, window_h, max(0, config.border))
        self.state = ViewportState()
        self._displayed = PixelBuffer.empty(source.has_alpha)

        if config.scale:
            self.state.scale = view_math.clamp_scale(config.scale)
        else:
            self.state.scale = self._optimal_scale()
        log(f"[VIEW] init window={self.window.width}x{self.window.height} "
            f"scale={self.state.scale}%")
        self._refresh()

    # ═══════════════════════════════════════════════════════════════════════
    # Accessors
    # ═══════════════════════════════════════════════════════════════════════

    @property
    def source(self) -> PixelBuffer:
        """Decoded image as loaded."""
        return self._source

    @property
    def displayed(self) -> PixelBuffer:
        """Buffer to blit: resampled and, if transparent, composited."""
        return self._displayed

    @property
    def scale(self) -> int:
        return self.state.scale

    @property
    def placement(self) -> Tuple[int, int]:
        """Top-left corner of the displayed image relative to the window."""
        return self.state.offset

    @property
    def border(self) -> int:
        return self.window.border

    # ═══════════════════════════════════════════════════════════════════════
    # Window
    # ═══════════════════════════════════════════════════════════════════════

    def set_window_size(self, width: int, height: int) -> None:
        """Update the surface size (border included) and re-place the image."""
        self.window.outer_w = width
        self.window.outer_h = height
        self.recompute_placement()

    def set_border(self, border: int) -> None:
        """Change the border; the scale is left alone."""
        self.window.border = max(0, border)
        self.recompute_placement()

    # ═══════════════════════════════════════════════════════════════════════
    # Zoom
    # ═══════════════════════════════════════════════════════════════════════

    def zoom_in(self) -> bool:
        """Increase scale by one step. Returns True if the scale changed."""
        return self._set_scale(view_math.step_scale(self.state.scale, SCALE_STEP))

    def zoom_out(self) -> bool:
        """Decrease scale by one step. Returns True if the scale changed."""
        return self._set_scale(view_math.step_scale(self.state.scale, -SCALE_STEP))

    def zoom_optimal(self) -> bool:
        """Fit the image into the window without upscaling."""
        return self._set_scale(self._optimal_scale())

    def zoom_absolute(self, percent: int) -> bool:
        """Set an explicit scale (clamped to the supported range)."""
        return self._set_scale(view_math.clamp_scale(percent))

    def _optimal_scale(self) -> int:
        return view_math.compute_optimal_scale(
            self._source.width, self._source.height,
            self.window.width, self.window.height)

    def _set_scale(self, scale: int) -> bool:
        if scale == self.state.scale:
            return False
        log(f"[VIEW] scale {self.state.scale}% -> {scale}%")
        self.state.scale = scale
        self._refresh()
        return True

    # ═══════════════════════════════════════════════════════════════════════
    # Placement
    # ═══════════════════════════════════════════════════════════════════════

    def _refresh(self) -> None:
        """Re-derive the displayed buffer for the current scale and place it."""
        img = self._source
        if self.state.scale != SCALE_IDENTITY:
            img = resize(img, self.state.scale)
        if img.has_alpha:
            img = add_checkerboard(img, self._checkerboard)
        self._displayed = img
        self.recompute_placement()

    def recompute_placement(self) -> None:
        """Place the displayed image, axis by axis, relative to the previous one."""
        st = self.state
        img = self._displayed
        st.image_x = view_math.place_axis(
            self.window.width, img.width, st.image_x, st.image_w)
        st.image_y = view_math.place_axis(
            self.window.height, img.height, st.image_y, st.image_h)
        st.image_w, st.image_h = img.width, img.height

    # ═══════════════════════════════════════════════════════════════════════
    # Pan
    # ═══════════════════════════════════════════════════════════════════════

    def pan(self, direction: Direction, step: int = MOVE_STEP) -> bool:
        """Move the image to reveal more of it in ``direction``.

        Returns:
            True if the image moved.
        """
        st = self.state
        toward_start = direction in (Direction.LEFT, Direction.UP)
        if direction.horizontal:
            new_x = view_math.pan_axis(
                st.image_x, self.window.width, st.image_w, toward_start, step)
            moved = new_x != st.image_x
            st.image_x = new_x
        else:
            new_y = view_math.pan_axis(
                st.image_y, self.window.height, st.image_h, toward_start, step)
            moved = new_y != st.image_y
            st.image_y = new_y
        return moved
