"""Application - main loop orchestrator.

The Application class coordinates:
- Input handling (via InputHandler)
- Command execution against the ViewportEngine
- Pushing the displayed buffer, placement and title to the Display
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Optional
import os

from .commands import Command, Quit
from .config import DEFAULT_WINDOW_W, DEFAULT_WINDOW_H, WINDOW_TITLE
from .display import Display
from .formats import load_image
from .input_handler import InputHandler, get_input_handler
from .logging import log, increment_frame, get_frame
from .types import PixelBuffer, ViewerConfig
from .viewport import ViewportEngine


def format_title(path: str, image: PixelBuffer, scale: int) -> str:
    """Window title: file name, source dimensions and current scale."""
    return f"{path} [{image.width}x{image.height} {scale}%]"


@dataclass
class Application:
    """
    Main application orchestrator.

    Usage:
        app = Application(display, engine, path)
        app.run()
    """

    display: Display
    engine: ViewportEngine
    path: str
    config: ViewerConfig = field(default_factory=ViewerConfig)
    input_handler: InputHandler = field(default_factory=get_input_handler)
    running: bool = False

    _shown: Optional[PixelBuffer] = field(default=None, init=False, repr=False)
    _shown_at: Optional[tuple] = field(default=None, init=False, repr=False)
    _had_focus: bool = field(default=False, init=False, repr=False)

    def refresh(self) -> None:
        """Send what changed in the engine to the display."""
        img = self.engine.displayed
        x, y = self.engine.placement
        if img is not self._shown:
            self.display.set_image(img, x, y)
            self.display.set_title(
                format_title(self.path, self.engine.source, self.engine.scale))
            self._shown = img
        elif (x, y) != self._shown_at:
            self.display.move_image(x, y)
        self._shown_at = (x, y)

    def run(self) -> None:
        """Run the main loop until quit, window close or focus loss."""
        self.running = True
        log("[APP] Starting main loop")
        self.refresh()
        try:
            while self.running:
                self._frame()
        finally:
            self._cleanup()

    def _frame(self) -> None:
        """Execute a single frame."""
        if self.display.should_close():
            log("[APP] Window closed")
            self.running = False
            return

        if self.config.exit_unfocus:
            if self.display.is_focused():
                self._had_focus = True
            elif self._had_focus:
                log("[APP] Focus lost")
                self.running = False
                return

        # 1. Track window size
        if self.display.is_resized():
            w, h = self.display.size()
            log(f"[APP] Resized to {w}x{h}")
            self.engine.set_window_size(w, h)

        # 2. Poll input and execute commands
        for cmd in self.input_handler.poll(self.display):
            self._execute_command(cmd)
            if not self.running:
                return

        # 3. Push changes and draw
        self.refresh()
        self.display.draw()

        # 4. Frame bookkeeping
        increment_frame()

    def _execute_command(self, cmd: Command) -> None:
        """Execute a single command."""
        if isinstance(cmd, Quit):
            cmd.execute(self.engine)
            self.running = False
            return
        cmd.execute(self.engine)

    def _cleanup(self) -> None:
        """Release the display on every exit path."""
        log(f"[APP] Cleanup after {get_frame()} frames")
        self.display.close()


def show(
    path: str,
    make_display: Callable[[], Display],
    config: Optional[ViewerConfig] = None,
    size: tuple = (DEFAULT_WINDOW_W, DEFAULT_WINDOW_H),
) -> None:
    """Load ``path`` and preview it until the user quits.

    The image is decoded before any window is opened, so a broken file never
    flashes a window. The display is closed on every exit path.
    """
    config = config or ViewerConfig()
    image = load_image(path)

    display = make_display()
    try:
        display.open(size[0], size[1], f"{WINDOW_TITLE} - {os.path.basename(path)}")
        w, h = display.size()
        engine = ViewportEngine(image, w, h, config)
    except BaseException:
        display.close()
        raise

    Application(display, engine, path, config).run()
