"""Bounds-checked binary decoding primitives.

Python 3.13+. Zero external dependencies.
"""

from .reader import ByteCursor, ReadResult

__all__ = ["ByteCursor", "ReadResult"]
