"""Analog low-shelf prototype for parametric equalizers."""

import math
import warnings

from ._exceptions import (
    DegenerateRippleWarning,
    InvalidGainError,
    InvalidRippleError,
    SpecificationError,
)
from ._layout import Layout
from ._validation import validate_order


def chebyshev_type_2_shelf_prototype(
    order: int,
    gain_db: float,
    ripple_db: float,
) -> Layout:
    """
    Design an analog low-shelf prototype with equiripple shelf band.

    Places the poles and zeros of a normalized shelving filter whose gain
    moves from ``gain_db`` at low frequencies to unity at high frequencies,
    following Orfanidis' high-order parametric equalizer design.

    Parameters
    ----------
    order : int
        The order of the filter. Must be positive.
    gain_db : float
        Shelf gain in decibels. Positive boosts, negative cuts. Must be
        non-zero.
    ripple_db : float
        Ripple in decibels allowed in the shelf band. Must be positive.
        Values larger than ``abs(gain_db)`` are clamped to it.

    Returns
    -------
    layout : Layout
        Analog layout with ``order // 2`` conjugate pairs and, for odd
        order, one real pole with a real zero. Normalized to unity gain at
        ``pi``, which the digital transforms map to the band away from the
        shelf.

    Raises
    ------
    InvalidOrderError
        If ``order`` is not a positive integer.
    InvalidGainError
        If ``gain_db`` is zero.
    InvalidRippleError
        If ``ripple_db`` is not positive and finite.
    SpecificationError
        If the parameters drive a logarithm argument non-positive.

    Warns
    -----
    DegenerateRippleWarning
        When ``ripple_db`` is clamped so that the ripple-referenced gain
        equals the reference gain. The ripple factor then falls back to
        ``G - 1``, which is an approximation.

    Notes
    -----
    The prototype is designed for the inverse sense (the requested gain is
    negated) with

    .. math::
        \\epsilon = \\sqrt{\\frac{G^2 - G_b^2}{G_b^2 - G_0^2}}

    and poles/zeros at
    :math:`-\\sin a_i \\sinh u + j \\cos a_i \\cosh u` and
    :math:`-\\sin a_i \\sinh v + j \\cos a_i \\cosh v`.

    References
    ----------
    S. J. Orfanidis, "High-Order Digital Parametric Equalizer Design",
    J. Audio Eng. Soc., vol. 53, pp. 1026-1046, 2005.

    Examples
    --------
    >>> from torchiir.filter_design import chebyshev_type_2_shelf_prototype
    >>> layout = chebyshev_type_2_shelf_prototype(3, gain_db=6.0, ripple_db=0.5)
    >>> layout.num_poles, layout.normal_w
    (3, 3.141592653589793)
    """
    validate_order(order)
    if not math.isfinite(gain_db) or gain_db == 0:
        raise InvalidGainError(
            f"Shelf gain must be non-zero and finite, got {gain_db}"
        )
    if not (math.isfinite(ripple_db) and ripple_db > 0):
        raise InvalidRippleError(f"Shelf ripple must be positive, got {ripple_db}")

    gain_db = -gain_db

    if ripple_db >= abs(gain_db):
        ripple_db = abs(gain_db)
    if gain_db < 0:
        ripple_db = -ripple_db

    G = 10.0 ** (gain_db / 20.0)
    Gb = 10.0 ** ((gain_db - ripple_db) / 20.0)
    G0 = 1.0
    g0 = G0 ** (1.0 / order)

    if Gb != G0:
        eps = math.sqrt((G * G - Gb * Gb) / (Gb * Gb - G0 * G0))
    else:
        eps = G - 1
        warnings.warn(
            f"Shelf ripple of {abs(ripple_db)} dB equals the gain; "
            f"using the approximate ripple factor eps = G - 1 = {eps:.6g}.",
            DegenerateRippleWarning,
            stacklevel=2,
        )

    root = math.sqrt(1 + 1 / (eps * eps))
    b_base = G / eps + Gb * root
    v_base = 1.0 / eps + root
    if b_base <= 0 or v_base <= 0:
        raise SpecificationError(
            f"Shelf parameters gain_db={-gain_db}, ripple_db={abs(ripple_db)} "
            f"have no real pole placement"
        )

    b = b_base ** (1.0 / order)
    u = math.log(b / g0)
    v = math.log(v_base ** (1.0 / order))

    sinh_u = math.sinh(u)
    sinh_v = math.sinh(v)
    cosh_u = math.cosh(u)
    cosh_v = math.cosh(v)
    n2 = 2 * order

    layout = Layout()

    for i in range(1, order // 2 + 1):
        a = math.pi * (2 * i - 1) / n2
        sn = math.sin(a)
        cs = math.cos(a)
        layout.add_conjugate_pair(
            complex(-sn * sinh_u, cs * cosh_u),
            complex(-sn * sinh_v, cs * cosh_v),
        )

    if order % 2 == 1:
        layout.add_single(-sinh_u, -sinh_v)

    layout.set_normal(math.pi, 1)

    return layout
