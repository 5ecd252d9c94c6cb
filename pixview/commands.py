"""Command Pattern for input handling.

Commands encapsulate actions that can be triggered by various inputs.
Each command has an execute() method and optional can_execute() for guards.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .viewport import ViewportEngine

from .types import Direction
from .logging import log


class Command(ABC):
    """Base class for all commands."""

    @abstractmethod
    def execute(self, engine: "ViewportEngine") -> bool:
        """Execute the command. Returns True if the view changed."""
        pass

    def can_execute(self, engine: "ViewportEngine") -> bool:
        """Check if command can be executed. Override for guards."""
        return True


# ═══════════════════════════════════════════════════════════════════════════
# Zoom Commands
# ═══════════════════════════════════════════════════════════════════════════

class ZoomIn(Command):
    """Zoom in by one step."""

    def execute(self, engine: "ViewportEngine") -> bool:
        changed = engine.zoom_in()
        log(f"[CMD] ZoomIn: scale={engine.scale}% changed={changed}")
        return changed


class ZoomOut(Command):
    """Zoom out by one step."""

    def execute(self, engine: "ViewportEngine") -> bool:
        changed = engine.zoom_out()
        log(f"[CMD] ZoomOut: scale={engine.scale}% changed={changed}")
        return changed


class ZoomOptimal(Command):
    """Fit the image into the window (never above 100%)."""

    def execute(self, engine: "ViewportEngine") -> bool:
        changed = engine.zoom_optimal()
        log(f"[CMD] ZoomOptimal: scale={engine.scale}% changed={changed}")
        return changed


@dataclass
class ZoomAbsolute(Command):
    """Jump to a fixed scale."""
    percent: int

    def execute(self, engine: "ViewportEngine") -> bool:
        changed = engine.zoom_absolute(self.percent)
        log(f"[CMD] ZoomAbsolute: {self.percent}% changed={changed}")
        return changed


# ═══════════════════════════════════════════════════════════════════════════
# Pan Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class Pan(Command):
    """Move the view point one step."""
    direction: Direction

    def can_execute(self, engine: "ViewportEngine") -> bool:
        return not engine.displayed.is_empty

    def execute(self, engine: "ViewportEngine") -> bool:
        if not self.can_execute(engine):
            return False
        moved = engine.pan(self.direction)
        if moved:
            log(f"[CMD] Pan {self.direction.value}: pos={engine.placement}")
        return moved


# ═══════════════════════════════════════════════════════════════════════════
# Application Commands
# ═══════════════════════════════════════════════════════════════════════════

class Quit(Command):
    """Close the viewer."""

    def execute(self, engine: "ViewportEngine") -> bool:
        log("[CMD] Quit")
        return False
