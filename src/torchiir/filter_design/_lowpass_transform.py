"""Analog prototype to digital lowpass transform."""

import math

from ._layout import (
    AtInfinity,
    ConjugatePair,
    Layout,
    MatchedPair,
    RealSingle,
    Zero,
)
from ._validation import validate_cutoff


def lowpass_transform(analog: Layout, cutoff: float) -> Layout:
    """
    Map a normalized analog lowpass layout to a digital lowpass layout.

    Combines the frequency scaling s -> s / wc with the bilinear transform,
    pre-warped so that the analog edge at 1 rad/s lands exactly on
    ``cutoff``.

    Parameters
    ----------
    analog : Layout
        Normalized analog prototype.
    cutoff : float
        Cutoff frequency as a fraction of the sample rate, in (0, 0.5).

    Returns
    -------
    digital : Layout
        Digital layout with the same pole/zero multiplicity. The
        normalization point is copied from ``analog``.

    Raises
    ------
    InvalidCutoffError
        If ``cutoff`` is outside (0, 0.5).

    Notes
    -----
    With :math:`f = \\tan(\\pi f_c)` each root :math:`c` maps to

    .. math::
        z = \\frac{1 + f c}{1 - f c}

    and zeros at infinity map to :math:`z = -1`.
    """
    validate_cutoff(cutoff)

    f = math.tan(math.pi * cutoff)

    def transform(c: Zero) -> complex:
        if isinstance(c, AtInfinity):
            return complex(-1, 0)
        c = f * c
        return (1 + c) / (1 - c)

    digital = Layout(digital=True)
    _map_entries(analog, digital, transform)
    digital.set_normal(analog.normal_w, analog.normal_gain)

    return digital


def _map_entries(analog: Layout, digital: Layout, transform) -> None:
    # One-to-one root maps keep the entry shape
    for entry in analog:
        if isinstance(entry, ConjugatePair):
            digital.add_conjugate_pair(
                transform(entry.pole), transform(entry.zero)
            )
        elif isinstance(entry, RealSingle):
            digital.add_single(
                transform(entry.pole).real, transform(entry.zero).real
            )
        elif isinstance(entry, MatchedPair):
            digital.add_matched_pair(
                tuple(transform(p) for p in entry.poles),
                tuple(transform(z) for z in entry.zeros),
            )
