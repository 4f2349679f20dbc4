"""Applying designed filters to signals."""

from ._sosfilt import sosfilt

__all__ = [
    "sosfilt",
]
