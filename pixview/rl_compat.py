"""Raylib compatibility layer - wraps the CFFI binding of python-raylib."""

from __future__ import annotations
from typing import Any

import raylib as rl

from .types import PixelBuffer

# RGBA, 8 bits per channel
PIXELFORMAT_R8G8B8A8 = getattr(rl, "PIXELFORMAT_UNCOMPRESSED_R8G8B8A8", 7)
FLAG_WINDOW_RESIZABLE = getattr(rl, "FLAG_WINDOW_RESIZABLE", 0x00000004)
KEY_NULL = getattr(rl, "KEY_NULL", 0)


def make_color(r: int, g: int, b: int, a: int = 255) -> Any:
    """Create a raylib Color compatible with the current binding."""
    c = rl.ffi.new("Color *")
    c[0].r = int(r) & 0xFF
    c[0].g = int(g) & 0xFF
    c[0].b = int(b) & 0xFF
    c[0].a = int(a) & 0xFF
    return c[0]


def color_from_rgb24(value: int) -> Any:
    """Create an opaque raylib Color from 0xRRGGBB."""
    return make_color((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def encode(text: str) -> bytes:
    return text.encode('utf-8')


def init_window(width: int, height: int, title: str) -> None:
    """Open the window with encoding fallback."""
    try:
        rl.InitWindow(width, height, title)
    except TypeError:
        rl.InitWindow(width, height, encode(title))


def set_window_title(title: str) -> None:
    """Set window title with encoding fallback."""
    try:
        rl.SetWindowTitle(title)
    except TypeError:
        rl.SetWindowTitle(encode(title))


def load_texture(image: PixelBuffer) -> Any:
    """Upload a PixelBuffer to the GPU and return the texture.

    Alpha is dropped: the image is shown as is, without blending it over
    the window background.
    """
    data = rl.ffi.new("unsigned char[]", image.to_rgba_bytes(opaque=True))
    img = rl.ffi.new("Image *")
    img[0].data = data
    img[0].width = image.width
    img[0].height = image.height
    img[0].mipmaps = 1
    img[0].format = PIXELFORMAT_R8G8B8A8
    # the texture is a GPU copy; ``data`` may go away afterwards
    return rl.LoadTextureFromImage(img[0])


def get_texture_id(tex: Any) -> int:
    """Safely get texture ID."""
    return getattr(tex, 'id', 0) or 0


def is_texture_valid(tex: Any) -> bool:
    """Check if texture is valid and loaded."""
    return get_texture_id(tex) > 0


__all__ = [
    'rl',
    'FLAG_WINDOW_RESIZABLE',
    'KEY_NULL',
    'make_color',
    'color_from_rgb24',
    'init_window',
    'set_window_title',
    'load_texture',
    'get_texture_id',
    'is_texture_valid',
]
