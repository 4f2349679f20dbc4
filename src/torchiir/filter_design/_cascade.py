"""Cascade of second-order sections assembled from a digital layout."""

import cmath
import math
from typing import List, Optional, Tuple, Union

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from ._layout import (
    AtInfinity,
    ConjugatePair,
    Layout,
    MatchedPair,
    RealSingle,
    Zero,
)


@tensorclass
class Cascade:
    """A chain of biquad sections realizing a digital pole/zero layout.

    Attributes
    ----------
    sos : Tensor
        Second-order sections, shape (n_sections, 6). Each row is
        ``[b0, b1, b2, a0, a1, a2]`` with ``a0 = 1``. The overall gain is
        folded into the numerator of the first section.
    orders : Tensor
        Order of each section (1 or 2), int64 tensor of shape (n_sections,).
    digital_poles : Tensor
        Digital poles, complex tensor.
    digital_zeros : Tensor
        Digital zeros, complex tensor.
    normal_w : Tensor
        Normalization frequency in radians per sample, scalar tensor.
    normal_gain : Tensor
        Gain the response has at ``normal_w``, scalar tensor.
    """

    sos: Tensor
    orders: Tensor
    digital_poles: Tensor
    digital_zeros: Tensor
    normal_w: Tensor
    normal_gain: Tensor

    @classmethod
    def from_layout(
        cls,
        digital: Layout,
        *,
        dtype: Optional[torch.dtype] = None,
        device: Optional[torch.device] = None,
    ) -> "Cascade":
        """
        Assemble a cascade from a digital pole/zero layout.

        Each layout entry becomes one section: a conjugate or matched pair
        gives a second-order section and an unpaired real pole gives a
        first-order section. The first section is then scaled so the
        response at the layout's normalization frequency equals its
        normalization gain.

        Parameters
        ----------
        digital : Layout
            Digital layout produced by a frequency transform.
        dtype : torch.dtype, optional
            Coefficient dtype. Defaults to torch.get_default_dtype().
        device : torch.device, optional
            Output device. Defaults to CPU.

        Returns
        -------
        cascade : Cascade
        """
        if dtype is None:
            dtype = torch.get_default_dtype()
        if device is None:
            device = torch.device("cpu")

        if dtype == torch.float32:
            complex_dtype = torch.complex64
        elif dtype == torch.float64:
            complex_dtype = torch.complex128
        else:
            raise ValueError(f"Unsupported dtype: {dtype}")

        if not digital.digital:
            raise ValueError("Cascade requires a digital layout")
        if len(digital) == 0:
            raise ValueError("Cannot build a cascade from an empty layout")

        rows: List[List[float]] = []
        orders: List[int] = []
        for entry in digital:
            if isinstance(entry, RealSingle):
                b = [1.0, -_finite(entry.zero).real, 0.0]
                a = [1.0, -entry.pole.real, 0.0]
                orders.append(1)
            elif isinstance(entry, ConjugatePair):
                b = _conjugate_polynomial(_finite(entry.zero))
                a = _conjugate_polynomial(entry.pole)
                orders.append(2)
            elif isinstance(entry, MatchedPair):
                b = _pair_polynomial(*(_finite(z) for z in entry.zeros))
                a = _pair_polynomial(*entry.poles)
                orders.append(2)
            else:
                raise TypeError(f"Unknown layout entry: {entry!r}")
            rows.append(b + a)

        # Evaluate in double precision before casting
        scale = digital.normal_gain / abs(
            _response(rows, digital.normal_w / (2 * math.pi))
        )
        rows[0][0] *= scale
        rows[0][1] *= scale
        rows[0][2] *= scale

        zeros = [_finite(z) for z in digital.zeros()]

        return cls(
            sos=torch.tensor(rows, dtype=dtype, device=device),
            orders=torch.tensor(orders, dtype=torch.int64, device=device),
            digital_poles=torch.tensor(
                digital.poles(), dtype=complex_dtype, device=device
            ),
            digital_zeros=torch.tensor(
                zeros, dtype=complex_dtype, device=device
            ),
            normal_w=torch.tensor(
                digital.normal_w, dtype=dtype, device=device
            ),
            normal_gain=torch.tensor(
                digital.normal_gain, dtype=dtype, device=device
            ),
            batch_size=[],
        )

    @property
    def num_sections(self) -> int:
        return self.sos.shape[0]

    @property
    def num_first_order_sections(self) -> int:
        return int((self.orders == 1).sum().item())

    @property
    def num_second_order_sections(self) -> int:
        return int((self.orders == 2).sum().item())

    @property
    def gain(self) -> Tensor:
        """Overall gain, the product of the leading numerator coefficients."""
        return torch.prod(self.sos[:, 0] / self.sos[:, 3])

    def response(self, normalized_frequency: float) -> complex:
        """Complex response at a frequency given as a fraction of the sample rate.

        Examples
        --------
        >>> import torch
        >>> from torchiir.filter_design import chebyshev_type_2_lowpass
        >>> cascade = chebyshev_type_2_lowpass(
        ...     4, 48000, 1000, 40.0, dtype=torch.float64
        ... )
        >>> round(abs(cascade.response(0.0)), 12)
        1.0
        """
        rows = self.sos.to(torch.float64).tolist()
        return _response(rows, normalized_frequency)

    def frequency_response(
        self,
        frequencies: Union[Tensor, int] = 512,
        sampling_frequency: Optional[float] = None,
    ) -> Tuple[Tensor, Tensor]:
        """Complex response over a grid of frequencies.

        See :func:`torchiir.filter_analysis.frequency_response_sos`.
        """
        from torchiir.filter_analysis import frequency_response_sos

        return frequency_response_sos(
            self.sos,
            frequencies=frequencies,
            sampling_frequency=sampling_frequency,
        )

    def process(
        self,
        x: Tensor,
        dim: int = -1,
        zi: Optional[Tensor] = None,
    ) -> Union[Tensor, Tuple[Tensor, Tensor]]:
        """Filter a signal through the cascade.

        See :func:`torchiir.filter.sosfilt`.

        Examples
        --------
        >>> import torch
        >>> from torchiir.filter_design import chebyshev_type_2_highpass
        >>> cascade = chebyshev_type_2_highpass(
        ...     4, 48000, 200, 40.0, dtype=torch.float64
        ... )
        >>> y = cascade.process(torch.randn(2, 480, dtype=torch.float64))
        >>> y.shape
        torch.Size([2, 480])
        """
        from torchiir.filter import sosfilt

        return sosfilt(self.sos, x, dim=dim, zi=zi)

    def to_zpk(self) -> Tuple[Tensor, Tensor, Tensor]:
        """Return the zeros, poles and overall gain."""
        return self.digital_zeros, self.digital_poles, self.gain


def _finite(root: Zero) -> complex:
    if isinstance(root, AtInfinity):
        raise ValueError("Digital layouts cannot hold zeros at infinity")
    return root


def _conjugate_polynomial(root: complex) -> List[float]:
    # (1 - r z^-1)(1 - conj(r) z^-1)
    return [1.0, -2 * root.real, root.real**2 + root.imag**2]


def _pair_polynomial(r1: complex, r2: complex) -> List[float]:
    if r1.imag != 0:
        return _conjugate_polynomial(r1)
    return [1.0, -(r1.real + r2.real), r1.real * r2.real]


def _response(rows: List[List[float]], normalized_frequency: float) -> complex:
    w = 2 * math.pi * normalized_frequency
    czn1 = cmath.exp(complex(0, -w))
    czn2 = cmath.exp(complex(0, -2 * w))

    numerator = complex(1, 0)
    denominator = complex(1, 0)
    for b0, b1, b2, a0, a1, a2 in rows:
        numerator *= (b0 + b1 * czn1 + b2 * czn2) / a0
        denominator *= (a0 + a1 * czn1 + a2 * czn2) / a0

    return numerator / denominator
