"""Input Handler - maps raylib key codes to commands.

The display collaborator reports the key codes pressed since the last poll;
this module turns them into commands for the application loop.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, FrozenSet, List, Optional

if TYPE_CHECKING:
    from .display import Display

from .commands import (
    Command,
    ZoomIn, ZoomOut, ZoomOptimal, ZoomAbsolute,
    Pan, Quit,
)
from .config import (
    KEYS_PAN_LEFT, KEYS_PAN_RIGHT, KEYS_PAN_UP, KEYS_PAN_DOWN,
    KEYS_ZOOM_IN, KEYS_ZOOM_OUT, KEYS_ZOOM_OPTIMAL, KEYS_QUIT,
    ZOOM_ABSOLUTE_KEYS,
)
from .types import Direction


@dataclass
class InputHandler:
    """Translates key presses into commands."""

    # Key bindings (can be customized)
    keys_pan_left: FrozenSet[int] = KEYS_PAN_LEFT
    keys_pan_right: FrozenSet[int] = KEYS_PAN_RIGHT
    keys_pan_up: FrozenSet[int] = KEYS_PAN_UP
    keys_pan_down: FrozenSet[int] = KEYS_PAN_DOWN
    keys_zoom_in: FrozenSet[int] = KEYS_ZOOM_IN
    keys_zoom_out: FrozenSet[int] = KEYS_ZOOM_OUT
    keys_zoom_optimal: FrozenSet[int] = KEYS_ZOOM_OPTIMAL
    keys_quit: FrozenSet[int] = KEYS_QUIT
    zoom_absolute_keys: Dict[int, int] = field(
        default_factory=lambda: dict(ZOOM_ABSOLUTE_KEYS))

    def translate(self, key: int) -> Optional[Command]:
        """Get the command bound to a key, or None if unbound."""
        if key in self.keys_pan_left:
            return Pan(Direction.LEFT)
        if key in self.keys_pan_right:
            return Pan(Direction.RIGHT)
        if key in self.keys_pan_up:
            return Pan(Direction.UP)
        if key in self.keys_pan_down:
            return Pan(Direction.DOWN)
        if key in self.keys_zoom_in:
            return ZoomIn()
        if key in self.keys_zoom_out:
            return ZoomOut()
        if key in self.keys_zoom_optimal:
            return ZoomOptimal()
        if key in self.zoom_absolute_keys:
            return ZoomAbsolute(self.zoom_absolute_keys[key])
        if key in self.keys_quit:
            return Quit()
        return None

    def poll(self, display: "Display") -> List[Command]:
        """Collect commands for every key pressed since the last poll."""
        commands = []
        for key in display.poll_keys():
            cmd = self.translate(key)
            if cmd is not None:
                commands.append(cmd)
        return commands


# Singleton instance
_input_handler: Optional[InputHandler] = None


def get_input_handler() -> InputHandler:
    """Get the input handler instance."""
    global _input_handler
    if _input_handler is None:
        _input_handler = InputHandler()
    return _input_handler
