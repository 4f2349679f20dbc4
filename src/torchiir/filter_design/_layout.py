"""Pole/zero layouts shared by prototypes, transforms and cascades."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

import torch
from torch import Tensor


class AtInfinity:
    """A zero at infinity.

    Contributes no finite null to the response but still balances the pole
    count. Use the module singleton ``INFINITY``.
    """

    _instance: Optional["AtInfinity"] = None

    def __new__(cls) -> "AtInfinity":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "INFINITY"

    def __reduce__(self):
        return (AtInfinity, ())


INFINITY = AtInfinity()

Zero = Union[complex, AtInfinity]


def _canonical(root: Zero) -> Zero:
    # Conjugate pairs are stored by their upper half-plane member
    if isinstance(root, AtInfinity):
        return root
    root = complex(root)
    if root.imag < 0:
        return root.conjugate()
    return root


def _conjugate(root: Zero) -> Zero:
    if isinstance(root, AtInfinity):
        return root
    return root.conjugate()


@dataclass(frozen=True)
class ConjugatePair:
    """A conjugate pair of poles and its conjugate pair of zeros.

    Only the member with non-negative imaginary part is stored.
    """

    pole: complex
    zero: Zero

    @property
    def num_poles(self) -> int:
        return 2

    def poles(self) -> Tuple[complex, complex]:
        return self.pole, self.pole.conjugate()

    def zeros(self) -> Tuple[Zero, Zero]:
        return self.zero, _conjugate(self.zero)


@dataclass(frozen=True)
class RealSingle:
    """One unpaired real pole and its real (or infinite) zero."""

    pole: complex
    zero: Zero

    @property
    def num_poles(self) -> int:
        return 1

    def poles(self) -> Tuple[complex]:
        return (self.pole,)

    def zeros(self) -> Tuple[Zero]:
        return (self.zero,)


@dataclass(frozen=True)
class MatchedPair:
    """Two poles and two zeros realized together as one second-order section.

    Each of ``poles`` and ``zeros`` is either a pair of mutual conjugates or
    a pair of real roots. Band transforms produce these from odd-order
    prototypes.
    """

    poles: Tuple[complex, complex]
    zeros: Tuple[Zero, Zero]

    @property
    def num_poles(self) -> int:
        return 2


Entry = Union[ConjugatePair, RealSingle, MatchedPair]


def _entry_poles(entry: Entry) -> Tuple[complex, ...]:
    if isinstance(entry, MatchedPair):
        return entry.poles
    return entry.poles()


def _entry_zeros(entry: Entry) -> Tuple[Zero, ...]:
    if isinstance(entry, MatchedPair):
        return entry.zeros
    return entry.zeros()


class Layout:
    """An ordered set of pole/zero entries with a normalization point.

    Used for both analog prototypes (s-plane) and digital filters (z-plane).
    The normalization point is an angular frequency and the linear gain the
    realized response must have there; for digital layouts the frequency is
    in radians per sample, in ``[0, pi]``.

    Parameters
    ----------
    digital : bool, optional
        True for z-plane layouts produced by a frequency transform.
        Default is False (s-plane prototype).

    Examples
    --------
    >>> from torchiir.filter_design import INFINITY, Layout
    >>> layout = Layout()
    >>> layout.add_conjugate_pair(complex(-0.5, 0.8), complex(0.0, 2.0))
    >>> layout.add_single(-1.0, INFINITY)
    >>> layout.set_normal(0.0, 1.0)
    >>> layout.num_poles
    3
    """

    def __init__(self, digital: bool = False) -> None:
        self.digital = digital
        self._entries: List[Entry] = []
        self._normal_w = 0.0
        self._normal_gain = 1.0

    def reset(self) -> None:
        """Remove every entry and restore the default normalization point."""
        self._entries = []
        self._normal_w = 0.0
        self._normal_gain = 1.0

    def add_conjugate_pair(self, pole: complex, zero: Zero) -> None:
        """Append a conjugate pair of poles with their conjugate zeros."""
        self._entries.append(
            ConjugatePair(_canonical(pole), _canonical(zero))
        )

    def add_single(self, pole: complex, zero: Zero) -> None:
        """Append one unpaired real pole with its zero."""
        pole = complex(pole)
        if pole.imag != 0:
            raise ValueError(f"Unpaired pole must be real, got {pole}")
        if not isinstance(zero, AtInfinity):
            zero = complex(zero)
            if zero.imag != 0:
                raise ValueError(f"Unpaired zero must be real, got {zero}")
        self._entries.append(RealSingle(pole, zero))

    def add_matched_pair(
        self,
        poles: Tuple[complex, complex],
        zeros: Tuple[Zero, Zero],
    ) -> None:
        """Append two poles and two zeros that form one second-order section."""
        poles = (complex(poles[0]), complex(poles[1]))
        zeros = tuple(
            z if isinstance(z, AtInfinity) else complex(z) for z in zeros
        )
        self._entries.append(MatchedPair(poles, zeros))

    def set_normal(self, w: float, gain: float) -> None:
        """Record the frequency and gain the response is scaled to."""
        self._normal_w = float(w)
        self._normal_gain = float(gain)

    @property
    def normal_w(self) -> float:
        return self._normal_w

    @property
    def normal_gain(self) -> float:
        return self._normal_gain

    @property
    def num_poles(self) -> int:
        return sum(entry.num_poles for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    def __repr__(self) -> str:
        return (
            f"Layout(digital={self.digital}, num_poles={self.num_poles}, "
            f"normal_w={self._normal_w}, normal_gain={self._normal_gain})"
        )

    def poles(self) -> List[complex]:
        """All poles, with every conjugate pair expanded into both roots."""
        return [p for entry in self._entries for p in _entry_poles(entry)]

    def zeros(self) -> List[Zero]:
        """All zeros, conjugates expanded; zeros at infinity are included."""
        return [z for entry in self._entries for z in _entry_zeros(entry)]

    def to_zpk(
        self,
        *,
        dtype: Optional[torch.dtype] = None,
        device: Optional[torch.device] = None,
    ) -> Tuple[Tensor, Tensor, Tensor]:
        """Return the zeros, poles and gain as tensors.

        Zeros at infinity are dropped, matching the convention of
        zeros-poles-gain prototypes. The gain is the leading coefficient
        that makes the response hit ``normal_gain`` at ``normal_w``; for
        analog layouts ``normal_w`` is read on the imaginary axis, for
        digital layouts on the unit circle.

        Parameters
        ----------
        dtype : torch.dtype, optional
            Real dtype of the gain. Defaults to torch.get_default_dtype().
            Roots use the matching complex dtype.
        device : torch.device, optional
            Output device. Defaults to CPU.

        Returns
        -------
        zeros : Tensor
            Finite zeros, complex tensor.
        poles : Tensor
            Poles, complex tensor of shape (num_poles,).
        gain : Tensor
            System gain, scalar tensor.
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

        poles = self.poles()
        zeros = [z for z in self.zeros() if not isinstance(z, AtInfinity)]

        if self.digital:
            w = self._normal_w
            point = complex(math.cos(w), math.sin(w))
            gain = self._normal_gain / abs(_evaluate(zeros, poles, point))
        elif self._normal_w == 0:
            gain = self._normal_gain / abs(_evaluate(zeros, poles, 0j))
        else:
            # Normalized away from DC: a shelf, whose response tends to
            # the leading coefficient at infinity
            gain = self._normal_gain

        return (
            torch.tensor(zeros, dtype=complex_dtype, device=device),
            torch.tensor(poles, dtype=complex_dtype, device=device),
            torch.tensor(gain, dtype=dtype, device=device),
        )


def _evaluate(zeros: List[complex], poles: List[complex], point: complex):
    response = complex(1.0, 0.0)
    for z in zeros:
        response *= point - z
    for p in poles:
        response /= point - p
    return response
