"""Analog prototype to digital bandpass transform."""

import cmath
import math
from typing import Tuple

from ._layout import (
    AtInfinity,
    ConjugatePair,
    Layout,
    MatchedPair,
    RealSingle,
    Zero,
)
from ._validation import validate_band


def bandpass_transform(analog: Layout, center: float, width: float) -> Layout:
    """
    Map a normalized analog lowpass layout to a digital bandpass layout.

    Applies the bilinear transform to the prototype, then the Constantinides
    lowpass-to-bandpass substitution whose band edges are
    ``center - width / 2`` and ``center + width / 2``.

    Parameters
    ----------
    analog : Layout
        Normalized analog prototype.
    center : float
        Center frequency as a fraction of the sample rate, in (0, 0.5).
    width : float
        Bandwidth as a fraction of the sample rate. Both band edges must
        stay inside (0, 0.5).

    Returns
    -------
    digital : Layout
        Digital layout of twice the prototype order. Each conjugate pair
        becomes two conjugate pairs; an unpaired real pole becomes one
        matched pair.

    Raises
    ------
    InvalidCutoffError
        If ``center`` is outside (0, 0.5) or ``width`` is not positive.
    NyquistViolationError
        If a band edge leaves (0, 0.5).

    Notes
    -----
    Every root maps to the two solutions of a quadratic in :math:`z`, so the
    filter order doubles. Zeros at infinity map to :math:`z = \\pm 1`. The
    prototype's normalization frequency is carried to the geometric center
    of the pre-warped band edges.
    """
    validate_band(center, width)

    ww = 2 * math.pi * width
    wc2 = 2 * math.pi * center - ww / 2
    wc = wc2 + ww

    a = math.cos((wc + wc2) * 0.5) / math.cos((wc - wc2) * 0.5)
    b = 1 / math.tan((wc - wc2) * 0.5)
    a2 = a * a
    b2 = b * b
    ab_2 = 2 * a * b

    def transform(c: Zero) -> Tuple[complex, complex]:
        if isinstance(c, AtInfinity):
            return complex(-1, 0), complex(1, 0)

        c = (1 + c) / (1 - c)

        v = 4 * (b2 * (a2 - 1) + 1) * c
        v += 8 * (b2 * (a2 - 1) - 1)
        v *= c
        v += 4 * (b2 * (a2 - 1) + 1)
        v = cmath.sqrt(v)

        u = -v + ab_2 * c + ab_2
        v = v + ab_2 * c + ab_2

        d = 2 * (b - 1) * c + 2 * (1 + b)

        return u / d, v / d

    digital = Layout(digital=True)
    _split_entries(analog, digital, transform)

    wn = analog.normal_w
    digital.set_normal(
        2
        * math.atan(
            math.sqrt(math.tan((wc + wn) * 0.5) * math.tan((wc2 + wn) * 0.5))
        ),
        analog.normal_gain,
    )

    return digital


def _split_entries(analog: Layout, digital: Layout, transform) -> None:
    # Each prototype root becomes two digital roots
    for entry in analog:
        if isinstance(entry, ConjugatePair):
            p1, p2 = transform(entry.pole)
            z1, z2 = transform(entry.zero)
            digital.add_conjugate_pair(p1, z1)
            digital.add_conjugate_pair(p2, z2)
        elif isinstance(entry, RealSingle):
            digital.add_matched_pair(
                transform(entry.pole), transform(entry.zero)
            )
        elif isinstance(entry, MatchedPair):
            raise ValueError(
                "Band transforms expect a prototype of conjugate pairs and "
                "real singles"
            )
