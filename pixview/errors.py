"""Error types raised while loading and preparing an image."""

from __future__ import annotations


class PixviewError(Exception):
    """Base class for all preview failures."""


class UnsupportedFormat(PixviewError):
    """No registered decoder recognised the file header."""

    def __init__(self, message: str = "Unsupported format"):
        super().__init__(message)


class DecodeError(PixviewError):
    """A decoder found the payload malformed or truncated."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class AllocationFailure(PixviewError):
    """A pixel buffer could not be allocated."""

    def __init__(self, width: int = 0, height: int = 0):
        if width and height:
            super().__init__(f"unable to allocate {width}x{height} pixel buffer")
        else:
            super().__init__("unable to allocate pixel buffer")
        self.width = width
        self.height = height
