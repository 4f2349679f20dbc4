"""Inverse Chebyshev and shelving filter design as biquad cascades."""

from ._bandpass_transform import bandpass_transform
from ._bandstop_transform import bandstop_transform
from ._cascade import Cascade
from ._chebyshev_type_2_design import (
    chebyshev_type_2_bandpass,
    chebyshev_type_2_bandshelf,
    chebyshev_type_2_bandstop,
    chebyshev_type_2_design,
    chebyshev_type_2_highpass,
    chebyshev_type_2_highshelf,
    chebyshev_type_2_lowpass,
    chebyshev_type_2_lowshelf,
)
from ._chebyshev_type_2_prototype import chebyshev_type_2_prototype
from ._chebyshev_type_2_shelf_prototype import (
    chebyshev_type_2_shelf_prototype,
)
from ._exceptions import (
    DegenerateRippleWarning,
    FilterDesignError,
    InvalidCutoffError,
    InvalidGainError,
    InvalidOrderError,
    InvalidRippleError,
    NyquistViolationError,
    SpecificationError,
)
from ._highpass_transform import highpass_transform
from ._layout import (
    INFINITY,
    AtInfinity,
    ConjugatePair,
    Layout,
    MatchedPair,
    RealSingle,
)
from ._lowpass_transform import lowpass_transform

__all__ = [
    # Design functions
    "chebyshev_type_2_bandpass",
    "chebyshev_type_2_bandshelf",
    "chebyshev_type_2_bandstop",
    "chebyshev_type_2_design",
    "chebyshev_type_2_highpass",
    "chebyshev_type_2_highshelf",
    "chebyshev_type_2_lowpass",
    "chebyshev_type_2_lowshelf",
    # Prototypes
    "chebyshev_type_2_prototype",
    "chebyshev_type_2_shelf_prototype",
    # Transforms
    "bandpass_transform",
    "bandstop_transform",
    "highpass_transform",
    "lowpass_transform",
    # Layouts and cascades
    "AtInfinity",
    "Cascade",
    "ConjugatePair",
    "INFINITY",
    "Layout",
    "MatchedPair",
    "RealSingle",
    # Exceptions
    "DegenerateRippleWarning",
    "FilterDesignError",
    "InvalidCutoffError",
    "InvalidGainError",
    "InvalidOrderError",
    "InvalidRippleError",
    "NyquistViolationError",
    "SpecificationError",
]
