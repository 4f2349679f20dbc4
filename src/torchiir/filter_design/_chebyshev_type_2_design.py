"""Chebyshev Type II digital filter design functions."""

import math
from typing import Callable, Literal, Optional

import torch

from ._bandpass_transform import bandpass_transform
from ._bandstop_transform import bandstop_transform
from ._cascade import Cascade
from ._chebyshev_type_2_prototype import chebyshev_type_2_prototype
from ._chebyshev_type_2_shelf_prototype import (
    chebyshev_type_2_shelf_prototype,
)
from ._exceptions import InvalidCutoffError
from ._highpass_transform import highpass_transform
from ._layout import Layout
from ._lowpass_transform import lowpass_transform
from ._validation import validate_band, validate_cutoff, validate_order

FilterType = Literal[
    "lowpass",
    "highpass",
    "bandpass",
    "bandstop",
    "lowshelf",
    "highshelf",
    "bandshelf",
]

_BAND_TRANSFORMS = {
    "bandpass": bandpass_transform,
    "bandstop": bandstop_transform,
    "bandshelf": bandpass_transform,
}

_EDGE_TRANSFORMS = {
    "lowpass": lowpass_transform,
    "highpass": highpass_transform,
    "lowshelf": lowpass_transform,
    "highshelf": highpass_transform,
}

_SHELVES = ("lowshelf", "highshelf", "bandshelf")


def chebyshev_type_2_design(
    order: int,
    sample_rate: float,
    frequency: float,
    ripple_db: float,
    *,
    filter_type: FilterType = "lowpass",
    width_frequency: Optional[float] = None,
    gain_db: Optional[float] = None,
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> Cascade:
    """Design a digital Chebyshev Type II filter or shelf as a cascade.

    Builds the analog prototype for the filter family, maps it through the
    frequency transform for the band shape and assembles the digital poles
    and zeros into second-order sections.

    Parameters
    ----------
    order : int
        Order of the analog prototype. Band shapes double it.
    sample_rate : float
        Sampling frequency in Hz.
    frequency : float
        Cutoff frequency in Hz for lowpass, highpass and edge shelves, or
        center frequency in Hz for band shapes. Must lie in
        (0, sample_rate / 2).
    ripple_db : float
        Stopband ripple in decibels for the filters, or shelf-band ripple
        for the shelves. Must be positive.
    filter_type : {"lowpass", "highpass", "bandpass", "bandstop", "lowshelf", "highshelf", "bandshelf"}, optional
        The band shape. Default is "lowpass".
    width_frequency : float, optional
        Bandwidth in Hz. Required for "bandpass", "bandstop" and
        "bandshelf".
    gain_db : float, optional
        Shelf gain in decibels. Required for the shelves.
    dtype : torch.dtype, optional
        Coefficient dtype. Defaults to torch.get_default_dtype().
    device : torch.device, optional
        Output device. Defaults to CPU.

    Returns
    -------
    cascade : Cascade
        Cascade of biquads, scaled to the layout's normalization point.

    Raises
    ------
    InvalidOrderError
        If ``order`` is not a positive integer.
    InvalidCutoffError
        If a frequency is outside (0, sample_rate / 2), the width is not
        positive, or ``sample_rate`` is not positive.
    NyquistViolationError
        If a band edge leaves (0, sample_rate / 2).
    InvalidRippleError
        If ``ripple_db`` is not positive.
    InvalidGainError
        If a shelf gain is zero.
    ValueError
        If ``filter_type`` is unknown or a required argument is missing.

    Notes
    -----
    Lowpass, highpass, bandpass and bandstop use the inverse Chebyshev
    lowpass prototype; the shelves use the low-shelf prototype. The band
    shelf is renormalized after the transform to unity gain at Nyquist when
    its center sits below a quarter of the sample rate, and at DC otherwise.

    Examples
    --------
    >>> import torch
    >>> from torchiir.filter_design import chebyshev_type_2_design
    >>> cascade = chebyshev_type_2_design(
    ...     4,
    ...     48000.0,
    ...     6000.0,
    ...     40.0,
    ...     filter_type="bandstop",
    ...     width_frequency=2000.0,
    ... )
    >>> cascade.sos.shape
    torch.Size([4, 6])
    """
    validate_order(order)
    if not (math.isfinite(sample_rate) and sample_rate > 0):
        raise InvalidCutoffError(
            f"Sample rate must be positive, got {sample_rate}"
        )

    if filter_type in _BAND_TRANSFORMS:
        if width_frequency is None:
            raise ValueError(f"{filter_type} requires width_frequency")
        center = frequency / sample_rate
        width = width_frequency / sample_rate
        validate_band(center, width)
        band_transform = _BAND_TRANSFORMS[filter_type]

        def transform(analog: Layout) -> Layout:
            return band_transform(analog, center, width)

    elif filter_type in _EDGE_TRANSFORMS:
        cutoff = frequency / sample_rate
        validate_cutoff(cutoff)
        edge_transform = _EDGE_TRANSFORMS[filter_type]

        def transform(analog: Layout) -> Layout:
            return edge_transform(analog, cutoff)

    else:
        raise ValueError(f"Invalid filter_type: {filter_type}")

    if filter_type in _SHELVES:
        if gain_db is None:
            raise ValueError(f"{filter_type} requires gain_db")

        def prototype() -> Layout:
            return chebyshev_type_2_shelf_prototype(order, gain_db, ripple_db)

    else:

        def prototype() -> Layout:
            return chebyshev_type_2_prototype(order, ripple_db)

    normal = None
    if filter_type == "bandshelf":
        normal = (math.pi if frequency / sample_rate < 0.25 else 0.0, 1.0)

    return _design(prototype, transform, normal, dtype=dtype, device=device)


def _design(
    prototype: Callable[[], Layout],
    transform: Callable[[Layout], Layout],
    normal: Optional[tuple] = None,
    *,
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> Cascade:
    analog = prototype()
    digital = transform(analog)
    if normal is not None:
        digital.set_normal(*normal)
    return Cascade.from_layout(digital, dtype=dtype, device=device)


def chebyshev_type_2_lowpass(
    order: int,
    sample_rate: float,
    cutoff_frequency: float,
    ripple_db: float,
    *,
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> Cascade:
    """Design a Chebyshev Type II lowpass filter.

    Unity gain at DC; ``ripple_db`` is the stopband ripple.

    Examples
    --------
    >>> from torchiir.filter_design import chebyshev_type_2_lowpass
    >>> cascade = chebyshev_type_2_lowpass(4, 48000.0, 1000.0, 1.0)
    >>> cascade.num_second_order_sections, cascade.num_first_order_sections
    (2, 0)
    """
    return chebyshev_type_2_design(
        order,
        sample_rate,
        cutoff_frequency,
        ripple_db,
        filter_type="lowpass",
        dtype=dtype,
        device=device,
    )


def chebyshev_type_2_highpass(
    order: int,
    sample_rate: float,
    cutoff_frequency: float,
    ripple_db: float,
    *,
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> Cascade:
    """Design a Chebyshev Type II highpass filter with unity gain at Nyquist."""
    return chebyshev_type_2_design(
        order,
        sample_rate,
        cutoff_frequency,
        ripple_db,
        filter_type="highpass",
        dtype=dtype,
        device=device,
    )


def chebyshev_type_2_bandpass(
    order: int,
    sample_rate: float,
    center_frequency: float,
    width_frequency: float,
    ripple_db: float,
    *,
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> Cascade:
    """Design a Chebyshev Type II bandpass filter of order ``2 * order``."""
    return chebyshev_type_2_design(
        order,
        sample_rate,
        center_frequency,
        ripple_db,
        filter_type="bandpass",
        width_frequency=width_frequency,
        dtype=dtype,
        device=device,
    )


def chebyshev_type_2_bandstop(
    order: int,
    sample_rate: float,
    center_frequency: float,
    width_frequency: float,
    ripple_db: float,
    *,
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> Cascade:
    """Design a Chebyshev Type II bandstop filter of order ``2 * order``."""
    return chebyshev_type_2_design(
        order,
        sample_rate,
        center_frequency,
        ripple_db,
        filter_type="bandstop",
        width_frequency=width_frequency,
        dtype=dtype,
        device=device,
    )


def chebyshev_type_2_lowshelf(
    order: int,
    sample_rate: float,
    cutoff_frequency: float,
    gain_db: float,
    ripple_db: float,
    *,
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> Cascade:
    """Design a low shelf: ``gain_db`` below the cutoff, unity at Nyquist.

    Examples
    --------
    >>> import torch
    >>> from torchiir.filter_design import chebyshev_type_2_lowshelf
    >>> cascade = chebyshev_type_2_lowshelf(
    ...     3, 44100.0, 300.0, 6.0, 0.1, dtype=torch.float64
    ... )
    >>> round(abs(cascade.response(0.5)), 9)
    1.0
    """
    return chebyshev_type_2_design(
        order,
        sample_rate,
        cutoff_frequency,
        ripple_db,
        filter_type="lowshelf",
        gain_db=gain_db,
        dtype=dtype,
        device=device,
    )


def chebyshev_type_2_highshelf(
    order: int,
    sample_rate: float,
    cutoff_frequency: float,
    gain_db: float,
    ripple_db: float,
    *,
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> Cascade:
    """Design a high shelf: unity at DC, ``gain_db`` above the cutoff."""
    return chebyshev_type_2_design(
        order,
        sample_rate,
        cutoff_frequency,
        ripple_db,
        filter_type="highshelf",
        gain_db=gain_db,
        dtype=dtype,
        device=device,
    )


def chebyshev_type_2_bandshelf(
    order: int,
    sample_rate: float,
    center_frequency: float,
    width_frequency: float,
    gain_db: float,
    ripple_db: float,
    *,
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> Cascade:
    """Design a band shelf: ``gain_db`` across the band, unity outside it.

    The reference gain is taken at Nyquist for bands centered below a
    quarter of the sample rate, and at DC otherwise.
    """
    return chebyshev_type_2_design(
        order,
        sample_rate,
        center_frequency,
        ripple_db,
        filter_type="bandshelf",
        width_frequency=width_frequency,
        gain_db=gain_db,
        dtype=dtype,
        device=device,
    )
