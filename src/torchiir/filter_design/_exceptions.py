"""Exceptions and warnings for filter design module."""


class FilterDesignError(Exception):
    """Base exception for filter design errors."""

    pass


class InvalidOrderError(FilterDesignError):
    """Raised when filter order is invalid.

    This occurs when:
    - Order is not an integer
    - Order is less than one
    """

    pass


class InvalidCutoffError(FilterDesignError):
    """Raised when a cutoff, center or width frequency is invalid.

    This occurs when:
    - Cutoff or center is outside the open interval (0, Nyquist)
    - Band width is not positive
    - Sample rate is not positive
    """

    pass


class NyquistViolationError(FilterDesignError):
    """Raised when a band edge reaches zero or the Nyquist frequency.

    This occurs when center +/- width / 2 leaves (0, sample_rate / 2).
    """

    pass


class InvalidRippleError(FilterDesignError):
    """Raised when the ripple in decibels is not strictly positive."""

    pass


class InvalidGainError(FilterDesignError):
    """Raised when a shelf gain makes the ripple factor degenerate.

    A gain of 0 dB collapses both shelf levels onto unity, leaving no
    ripple factor to place poles with.
    """

    pass


class SpecificationError(FilterDesignError):
    """Raised when shelf parameters push the closed-form design out of domain.

    This occurs when an intermediate logarithm argument is not positive.
    """

    pass


class DegenerateRippleWarning(UserWarning):
    """Warning for shelf designs that fell back to an approximate ripple factor.

    Emitted when the ripple-referenced gain equals the reference gain, in
    which case eps = G - 1 is used in place of the closed form.
    """

    pass
