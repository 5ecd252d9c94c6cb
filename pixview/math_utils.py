"""Pure math utilities - no external dependencies."""

from __future__ import annotations


def clamp(v: int, a: int, b: int) -> int:
    """Clamp value v to range [a, b]."""
    return a if v < a else b if v > b else v


def half_toward_zero(v: int) -> int:
    """Halve an integer, truncating toward zero like C integer division."""
    return v // 2 if v >= 0 else -(-v // 2)
