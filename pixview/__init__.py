"""pixview - preview a single image with zoom and pan."""

__version__ = "0.1.0"
