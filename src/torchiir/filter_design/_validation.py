"""Argument checks shared by prototypes, transforms and design functions."""

import math
import numbers

from ._exceptions import (
    InvalidCutoffError,
    InvalidOrderError,
    NyquistViolationError,
)


def validate_order(order: int) -> None:
    if isinstance(order, bool) or not isinstance(order, numbers.Integral):
        raise InvalidOrderError(
            f"Filter order must be an integer, got {order!r}"
        )
    if order < 1:
        raise InvalidOrderError(f"Filter order must be positive, got {order}")


def validate_cutoff(cutoff: float) -> None:
    """Check a frequency expressed as a fraction of the sample rate."""
    if not (math.isfinite(cutoff) and 0 < cutoff < 0.5):
        raise InvalidCutoffError(
            f"Cutoff frequency must be between 0 and 0.5 (Nyquist), got {cutoff}"
        )


def validate_band(center: float, width: float) -> None:
    """Check a band given as center and width fractions of the sample rate."""
    validate_cutoff(center)
    if not (math.isfinite(width) and width > 0):
        raise InvalidCutoffError(f"Band width must be positive, got {width}")
    low = center - width / 2
    high = center + width / 2
    if not (0 < low and high < 0.5):
        raise NyquistViolationError(
            f"Band edges must satisfy 0 < low < high < 0.5, got [{low}, {high}]"
        )
