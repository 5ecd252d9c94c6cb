"""Application configuration constants."""

from __future__ import annotations

# Performance
TARGET_FPS = 60

# Scale (percent)
SCALE_MIN = 1
SCALE_MAX = 1000
SCALE_STEP = 5
SCALE_IDENTITY = 100

# Pan step (pixels)
MOVE_STEP = 10

# Format sniffing
HEADER_SIZE = 16

# Checkerboard behind transparent images
GRID_STEP = 10
GRID_COLOR = 0x404040
GRID_DARKEN = 0x101010

# Window
DEFAULT_WINDOW_W = 800
DEFAULT_WINDOW_H = 600
BACKGROUND_COLOR = 0x000000
WINDOW_TITLE = "pixview"

# Hotkeys (raylib key codes)
# See: https://github.com/raysan5/raylib/blob/master/src/raylib.h
KEY_LEFT = 263
KEY_RIGHT = 262
KEY_UP = 265
KEY_DOWN = 264
KEY_KP_LEFT = 324           # KEY_KP_4
KEY_KP_RIGHT = 326          # KEY_KP_6
KEY_KP_UP = 328             # KEY_KP_8
KEY_KP_DOWN = 322           # KEY_KP_2
KEY_H = 72
KEY_J = 74
KEY_K = 75
KEY_L = 76
KEY_EQUAL = 61
KEY_MINUS = 45
KEY_KP_ADD = 334
KEY_KP_SUBTRACT = 333
KEY_BACKSPACE = 259
KEY_ZERO = 48
KEY_ESCAPE = 256
KEY_ENTER = 257
KEY_KP_ENTER = 335
KEY_F3 = 292
KEY_F4 = 293
KEY_F10 = 299
KEY_Q = 81
KEY_E = 69
KEY_X = 88

KEYS_PAN_LEFT = frozenset({KEY_LEFT, KEY_KP_LEFT, KEY_H})
KEYS_PAN_RIGHT = frozenset({KEY_RIGHT, KEY_KP_RIGHT, KEY_L})
KEYS_PAN_UP = frozenset({KEY_UP, KEY_KP_UP, KEY_K})
KEYS_PAN_DOWN = frozenset({KEY_DOWN, KEY_KP_DOWN, KEY_J})
KEYS_ZOOM_IN = frozenset({KEY_EQUAL, KEY_KP_ADD})
KEYS_ZOOM_OUT = frozenset({KEY_MINUS, KEY_KP_SUBTRACT})
KEYS_ZOOM_OPTIMAL = frozenset({KEY_BACKSPACE})
KEYS_QUIT = frozenset({
    KEY_ESCAPE, KEY_ENTER, KEY_KP_ENTER,
    KEY_F3, KEY_F4, KEY_F10,
    KEY_Q, KEY_E, KEY_X,
})

# Digit keys 1..9 -> 10%..90%, 0 -> 100%
ZOOM_ABSOLUTE_KEYS = {KEY_ZERO + d: (d * 10 if d else 100) for d in range(10)}
