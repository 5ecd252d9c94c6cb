"""Renderer - raylib implementation of the display collaborator.

The Renderer is the single owner of the window and the image texture. It only
draws what it is given: placement is computed by the viewport engine.
"""

from __future__ import annotations
from typing import Any, List, Optional, Tuple

from .config import TARGET_FPS, BACKGROUND_COLOR
from .display import Display
from .logging import log
from .rl_compat import (
    rl, FLAG_WINDOW_RESIZABLE, KEY_NULL,
    make_color as RL_Color, color_from_rgb24,
    init_window, set_window_title, load_texture, is_texture_valid,
)
from .types import PixelBuffer


class Renderer(Display):
    """
    Raylib window showing one texture at an offset inside a border.

    Usage:
        renderer = Renderer(border=4)
        renderer.open(800, 600, "title")
        renderer.set_image(buffer, x, y)
        while not renderer.should_close():
            renderer.draw()
        renderer.close()
    """

    def __init__(self, border: int = 0, background: int = BACKGROUND_COLOR):
        self.border = border
        self.background = background
        self._opened = False
        self._texture: Optional[Any] = None
        self._img_x = 0
        self._img_y = 0

    def open(self, width: int, height: int, title: str) -> None:
        rl.SetConfigFlags(FLAG_WINDOW_RESIZABLE)
        init_window(width, height, title)
        if not rl.IsWindowReady():
            raise RuntimeError("Unable to open window")
        self._opened = True
        # key handling belongs to the input handler, not raylib
        rl.SetExitKey(KEY_NULL)
        rl.SetTargetFPS(TARGET_FPS)
        log(f"[RENDER] window {rl.GetScreenWidth()}x{rl.GetScreenHeight()} "
            f"border={self.border}")

    def close(self) -> None:
        self._unload_texture()
        if self._opened:
            self._opened = False
            log("[RENDER] Closing window")
            rl.CloseWindow()

    def size(self) -> Tuple[int, int]:
        return (rl.GetScreenWidth(), rl.GetScreenHeight())

    def set_title(self, title: str) -> None:
        set_window_title(title)

    def set_image(self, image: PixelBuffer, x: int, y: int) -> None:
        self._unload_texture()
        if not image.is_empty:
            self._texture = load_texture(image)
        self.move_image(x, y)

    def move_image(self, x: int, y: int) -> None:
        self._img_x = x
        self._img_y = y

    def poll_keys(self) -> List[int]:
        keys = []
        key = rl.GetKeyPressed()
        while key:
            keys.append(key)
            key = rl.GetKeyPressed()
        return keys

    def should_close(self) -> bool:
        return bool(rl.WindowShouldClose())

    def is_focused(self) -> bool:
        return bool(rl.IsWindowFocused())

    def is_resized(self) -> bool:
        return bool(rl.IsWindowResized())

    def draw(self) -> None:
        rl.BeginDrawing()
        rl.ClearBackground(color_from_rgb24(self.background))
        tex = self._texture
        if tex is not None and is_texture_valid(tex):
            rl.DrawTexture(tex, self.border + self._img_x,
                           self.border + self._img_y, RL_Color(255, 255, 255))
        rl.EndDrawing()

    def _unload_texture(self) -> None:
        if self._texture is not None:
            if is_texture_valid(self._texture):
                rl.UnloadTexture(self._texture)
            self._texture = None
