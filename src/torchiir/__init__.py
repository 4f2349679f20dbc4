"""torchiir: inverse Chebyshev and shelving IIR filter design for PyTorch."""

from . import (
    filter,
    filter_analysis,
    filter_design,
)

__all__ = [
    "filter",
    "filter_analysis",
    "filter_design",
]

__version__ = "0.1.0"
