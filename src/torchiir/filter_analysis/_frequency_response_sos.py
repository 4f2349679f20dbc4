"""Frequency response computation for SOS filters."""

import math
from typing import Optional, Tuple, Union

import torch
from torch import Tensor


def frequency_response_sos(
    sos: Tensor,
    frequencies: Union[Tensor, int] = 512,
    sampling_frequency: Optional[float] = None,
    whole: bool = False,
) -> Tuple[Tensor, Tensor]:
    """
    Compute the frequency response of a digital filter in SOS form.

    Parameters
    ----------
    sos : Tensor
        Second-order sections, shape (n_sections, 6).
        Each row is [b0, b1, b2, a0, a1, a2].
    frequencies : Tensor or int, default 512
        If int: number of evenly spaced points from 0 up to (excluding)
        Nyquist, or up to the sampling frequency if ``whole`` is True.
        If Tensor: frequency points at which to evaluate.
    sampling_frequency : float, optional
        If None: frequencies are fractions of the sample rate, so Nyquist
        is 0.5. If provided: frequencies are in Hz.
    whole : bool, default False
        Cover the whole unit circle when ``frequencies`` is an int.

    Returns
    -------
    frequencies : Tensor
        Frequency points, in the units described above.
    response : Tensor
        Complex frequency response :math:`H(e^{j\\omega})`, complex128.

    Notes
    -----
    Sections are evaluated in double precision and multiplied together,
    which stays accurate where an expanded transfer function would not.

    Examples
    --------
    >>> import torch
    >>> from torchiir.filter_analysis import frequency_response_sos
    >>> from torchiir.filter_design import chebyshev_type_2_lowpass
    >>> cascade = chebyshev_type_2_lowpass(6, 48000.0, 4000.0, 60.0)
    >>> freqs, response = frequency_response_sos(cascade.sos, sampling_frequency=48000.0)
    >>> freqs.shape, response.shape
    (torch.Size([512]), torch.Size([512]))
    """
    if sos.ndim != 2 or sos.shape[1] != 6:
        raise ValueError("sos must be shape (n_sections, 6)")

    scale = 1.0 if sampling_frequency is None else float(sampling_frequency)

    if isinstance(frequencies, int):
        stop = scale if whole else scale / 2.0
        freq_points = torch.linspace(
            0, stop, frequencies + 1, dtype=torch.float64, device=sos.device
        )[:-1]
    else:
        freq_points = frequencies.to(dtype=torch.float64, device=sos.device)

    w = 2 * math.pi * freq_points / scale
    z_inv = torch.exp(-1j * w)

    coefficients = sos.to(torch.float64)
    b = coefficients[:, :3].unsqueeze(-1)
    a = coefficients[:, 3:].unsqueeze(-1)
    powers = torch.stack([torch.ones_like(z_inv), z_inv, z_inv * z_inv])

    numerator = (b * powers).sum(dim=1)
    denominator = (a * powers).sum(dim=1)
    response = torch.prod(numerator / denominator, dim=0)

    return freq_points, response
