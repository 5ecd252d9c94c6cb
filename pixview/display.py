"""Display collaborator interface.

The application talks to the window only through this interface, so the
viewer logic can run against any surface (raylib in production, a fake in
tests).
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Tuple

from .types import PixelBuffer


class Display(ABC):
    """A window region that shows one image at an offset."""

    @abstractmethod
    def open(self, width: int, height: int, title: str) -> None:
        """Create the window."""

    @abstractmethod
    def close(self) -> None:
        """Release every resource; safe to call more than once."""

    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """Current surface size, border included."""

    @abstractmethod
    def set_title(self, title: str) -> None:
        """Change the window title."""

    @abstractmethod
    def set_image(self, image: PixelBuffer, x: int, y: int) -> None:
        """Replace the shown image and put it at (x, y) inside the border."""

    @abstractmethod
    def move_image(self, x: int, y: int) -> None:
        """Move the current image to (x, y) inside the border."""

    @abstractmethod
    def poll_keys(self) -> List[int]:
        """Key codes pressed since the last poll, oldest first."""

    @abstractmethod
    def should_close(self) -> bool:
        """True once the user asked the window manager to close the window."""

    @abstractmethod
    def is_focused(self) -> bool:
        """True while the window has input focus."""

    @abstractmethod
    def is_resized(self) -> bool:
        """True if the surface changed size since the previous frame."""

    @abstractmethod
    def draw(self) -> None:
        """Present one frame."""
