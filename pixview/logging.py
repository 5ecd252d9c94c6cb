"""Logging utilities with timing and frame tracking."""

from __future__ import annotations
import sys
import time
from typing import Optional


class Logger:
    """Application logger with timestamps and frame counts."""

    def __init__(self):
        self._start_time: float = time.perf_counter()
        self._frame: int = 0
        self.enabled: bool = True

    @property
    def frame(self) -> int:
        """Current frame number."""
        return self._frame

    @frame.setter
    def frame(self, value: int) -> None:
        """Set frame number."""
        self._frame = value

    def increment_frame(self) -> None:
        """Increment frame counter."""
        self._frame += 1

    @property
    def elapsed(self) -> float:
        """Seconds since logger was created."""
        return time.perf_counter() - self._start_time

    def format(self, msg: str) -> str:
        """Stamp a message with elapsed time and frame number."""
        return f"[{self.elapsed:7.3f}s F{self._frame:06d}] {msg}\n"

    def log(self, msg: str) -> None:
        """Log a message with timestamp and frame number."""
        if not self.enabled:
            return
        line = self.format(msg)
        try:
            sys.stdout.write(line)
            sys.stdout.flush()
        except (OSError, ValueError):
            # stdout closed or detached
            sys.stderr.write(line)
            sys.stderr.flush()

    def __call__(self, msg: str) -> None:
        """Shorthand for log()."""
        self.log(msg)


# Global logger instance
_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Get or create the global logger instance."""
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger


def log(msg: str) -> None:
    """Log a message using the global logger."""
    get_logger().log(msg)


def get_frame() -> int:
    """Get current frame count."""
    return get_logger().frame


def increment_frame() -> None:
    """Increment frame counter."""
    get_logger().increment_frame()


def set_enabled(enabled: bool) -> None:
    """Turn logging output on or off."""
    get_logger().enabled = enabled
