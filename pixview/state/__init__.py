"""State management submodules for pixview."""

from .window import WindowState
from .view import ViewportState

__all__ = [
    'WindowState',
    'ViewportState',
]
