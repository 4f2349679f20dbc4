"""Analog prototype to digital bandstop transform."""

import cmath
import math
from typing import Tuple

from ._bandpass_transform import _split_entries
from ._layout import AtInfinity, Layout, Zero
from ._validation import validate_band


def bandstop_transform(analog: Layout, center: float, width: float) -> Layout:
    """
    Map a normalized analog lowpass layout to a digital bandstop layout.

    Applies the bilinear transform to the prototype, then the Constantinides
    lowpass-to-bandstop substitution whose stopband edges are
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
        Digital layout of twice the prototype order, normalized at ``pi``
        when ``center < 0.25`` and at DC otherwise, so the reference point
        is the passband farther from the notch.

    Raises
    ------
    InvalidCutoffError
        If ``center`` is outside (0, 0.5) or ``width`` is not positive.
    NyquistViolationError
        If a band edge leaves (0, 0.5).

    Notes
    -----
    Zeros at infinity are taken through the bilinear transform as
    :math:`-1` before the substitution, which places them on the unit
    circle at the center of the stopband.
    """
    validate_band(center, width)

    ww = 2 * math.pi * width
    wc2 = 2 * math.pi * center - ww / 2
    wc = wc2 + ww

    a = math.cos((wc + wc2) * 0.5) / math.cos((wc - wc2) * 0.5)
    b = math.tan((wc - wc2) * 0.5)
    a2 = a * a
    b2 = b * b

    def transform(c: Zero) -> Tuple[complex, complex]:
        if isinstance(c, AtInfinity):
            c = complex(-1, 0)
        else:
            c = (1 + c) / (1 - c)

        u = 4 * (b2 + a2 - 1) * c
        u += 8 * (b2 - a2 + 1)
        u *= c
        u += 4 * (a2 + b2 - 1)
        u = cmath.sqrt(u)

        v = u * -0.5 + a - a * c
        u = u * 0.5 + a - a * c

        d = (b + 1) + (b - 1) * c

        return u / d, v / d

    digital = Layout(digital=True)
    _split_entries(analog, digital, transform)

    if center < 0.25:
        digital.set_normal(math.pi, analog.normal_gain)
    else:
        digital.set_normal(0, analog.normal_gain)

    return digital
