"""Chebyshev Type II analog lowpass filter prototype."""

import math

from ._exceptions import InvalidRippleError
from ._layout import INFINITY, Layout
from ._validation import validate_order


def chebyshev_type_2_prototype(order: int, ripple_db: float) -> Layout:
    """
    Design an analog Chebyshev Type II lowpass filter prototype.

    Places the poles and zeros of a normalized inverse Chebyshev lowpass
    filter with the specified stopband ripple. The filter has a maximally
    flat passband and an equiripple stopband.

    Parameters
    ----------
    order : int
        The order of the filter. Must be positive.
    ripple_db : float
        Stopband ripple (minimum stopband attenuation) in decibels. Must be
        positive. Common values: 20 dB, 40 dB, 60 dB.

    Returns
    -------
    layout : Layout
        Analog layout holding ``order // 2`` conjugate pairs and, for odd
        order, one real pole with a zero at infinity. Normalized to unity
        gain at DC.

    Raises
    ------
    InvalidOrderError
        If ``order`` is not a positive integer.
    InvalidRippleError
        If ``ripple_db`` is not positive and finite.

    Notes
    -----
    With :math:`\\epsilon = 1 / \\sqrt{10^{R_s/10} - 1}` and
    :math:`v_0 = \\sinh^{-1}(1/\\epsilon) / n`, the poles are the reciprocals
    of the Chebyshev Type I poles

    .. math::
        -\\sinh(v_0) \\cos\\theta_k + j \\cosh(v_0) \\sin\\theta_k,
        \\quad \\theta_k = (k - n) \\pi / (2n)

    and the zeros lie on the imaginary axis at :math:`j / \\cos(k \\pi / 2n)`
    for odd :math:`k < n`.

    Examples
    --------
    >>> from torchiir.filter_design import chebyshev_type_2_prototype
    >>> layout = chebyshev_type_2_prototype(4, ripple_db=40.0)
    >>> layout.num_poles, len(layout)
    (4, 2)
    """
    validate_order(order)
    if not (math.isfinite(ripple_db) and ripple_db > 0):
        raise InvalidRippleError(
            f"Stopband ripple must be positive, got {ripple_db}"
        )

    eps = math.sqrt(1.0 / (math.exp(ripple_db * 0.1 * math.log(10)) - 1))
    v0 = math.asinh(1 / eps) / order
    sinh_v0 = -math.sinh(v0)
    cosh_v0 = math.cosh(v0)
    fn = math.pi / (2 * order)

    layout = Layout()

    k = 1
    for _ in range(order // 2):
        a = sinh_v0 * math.cos((k - order) * fn)
        b = cosh_v0 * math.sin((k - order) * fn)
        d2 = a * a + b * b
        im = 1 / math.cos(k * fn)
        layout.add_conjugate_pair(complex(a / d2, b / d2), complex(0, im))
        k += 2

    if order % 2 == 1:
        layout.add_single(1 / sinh_v0, INFINITY)

    layout.set_normal(0, 1)

    return layout

