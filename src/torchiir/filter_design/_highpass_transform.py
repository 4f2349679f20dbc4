"""Analog prototype to digital highpass transform."""

import math

from ._layout import AtInfinity, Layout, Zero
from ._lowpass_transform import _map_entries
from ._validation import validate_cutoff


def highpass_transform(analog: Layout, cutoff: float) -> Layout:
    """
    Map a normalized analog lowpass layout to a digital highpass layout.

    Combines the substitution s -> wc / s with the bilinear transform,
    pre-warped so that the analog edge at 1 rad/s lands on ``cutoff``.

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
        normalization frequency is mirrored to ``pi - w``.

    Raises
    ------
    InvalidCutoffError
        If ``cutoff`` is outside (0, 0.5).

    Notes
    -----
    With :math:`f = 1 / \\tan(\\pi f_c)` each root :math:`c` maps to

    .. math::
        z = -\\frac{1 + f c}{1 - f c}

    and zeros at infinity map to :math:`z = 1`.
    """
    validate_cutoff(cutoff)

    f = 1.0 / math.tan(math.pi * cutoff)

    def transform(c: Zero) -> complex:
        if isinstance(c, AtInfinity):
            return complex(1, 0)
        c = f * c
        return -(1 + c) / (1 - c)

    digital = Layout(digital=True)
    _map_entries(analog, digital, transform)
    digital.set_normal(math.pi - analog.normal_w, analog.normal_gain)

    return digital
