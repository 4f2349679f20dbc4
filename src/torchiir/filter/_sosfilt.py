"""Second-order sections (SOS) filter implementation."""

import math
from typing import Optional, Tuple, Union

import torch
from torch import Tensor


def sosfilt(
    sos: Tensor,
    x: Tensor,
    dim: int = -1,
    zi: Optional[Tensor] = None,
) -> Union[Tensor, Tuple[Tensor, Tensor]]:
    """
    Filter data along one dimension using cascaded second-order sections.

    Each section runs the Direct Form II Transposed difference equation
    with two delay elements; sections are applied in order.

    Parameters
    ----------
    sos : Tensor
        Second-order sections, shape ``(n_sections, 6)``. Each row contains
        ``[b0, b1, b2, a0, a1, a2]``. Rows are normalized by ``a0``.
    x : Tensor
        Input signal. Can be batched with arbitrary leading dimensions.
    dim : int, optional
        Dimension along which to filter. Default is -1 (last dimension).
    zi : Tensor, optional
        Initial delays, shape ``(n_sections, 2)`` or
        ``(*batch, n_sections, 2)`` where ``batch`` is the shape of ``x``
        without ``dim``. If provided, returns ``(y, zf)``.

    Returns
    -------
    y : Tensor
        Filtered signal, same shape as ``x``.
    zf : Tensor, optional
        Final delays, shape ``(*batch, n_sections, 2)`` (only if ``zi`` was
        provided).

    Notes
    -----
    For one section with input :math:`x[n]` and delays :math:`d_1, d_2`:

    .. math::
        y[n] = b_0 x[n] + d_1 \\\\
        d_1 \\leftarrow b_1 x[n] - a_1 y[n] + d_2 \\\\
        d_2 \\leftarrow b_2 x[n] - a_2 y[n]

    Processing a signal in blocks and threading ``zf`` into the next call
    as ``zi`` gives the same output as processing it in one call.

    Examples
    --------
    >>> import torch
    >>> from torchiir.filter import sosfilt
    >>> sos = torch.tensor([[0.2, 0.4, 0.2, 1.0, -0.5, 0.3]], dtype=torch.float64)
    >>> x = torch.randn(100, dtype=torch.float64)
    >>> y = sosfilt(sos, x)
    >>> y, zf = sosfilt(sos, x[:50], zi=torch.zeros(1, 2, dtype=torch.float64))
    """
    if sos.ndim != 2 or sos.shape[1] != 6:
        raise ValueError("sos must be shape (n_sections, 6)")

    dtype = torch.promote_types(sos.dtype, x.dtype)
    if not dtype.is_floating_point:
        dtype = torch.float64

    sos = sos.to(dtype=dtype, device=x.device)
    sos = sos / sos[:, 3:4]
    n_sections = sos.shape[0]

    x = x.to(dtype=dtype).movedim(dim, -1)
    batch_shape = x.shape[:-1]
    n_samples = x.shape[-1]
    batch_size = math.prod(batch_shape)
    x_flat = x.reshape(batch_size, n_samples)

    if zi is None:
        states = torch.zeros(
            batch_size, n_sections, 2, dtype=dtype, device=x.device
        )
    else:
        zi = zi.to(dtype=dtype, device=x.device)
        if zi.shape[-2:] != (n_sections, 2):
            raise ValueError(
                f"zi must end in shape ({n_sections}, 2), got {tuple(zi.shape)}"
            )
        states = (
            zi.expand(*batch_shape, n_sections, 2)
            .reshape(batch_size, n_sections, 2)
            .clone()
        )

    y = x_flat
    for i in range(n_sections):
        b0, b1, b2, _, a1, a2 = sos[i]
        d1 = states[:, i, 0]
        d2 = states[:, i, 1]
        out = torch.empty_like(y)

        for n in range(n_samples):
            x_n = y[:, n]
            y_n = b0 * x_n + d1
            d1 = b1 * x_n - a1 * y_n + d2
            d2 = b2 * x_n - a2 * y_n
            out[:, n] = y_n

        states[:, i, 0] = d1
        states[:, i, 1] = d2
        y = out

    y = y.reshape(*batch_shape, n_samples).movedim(-1, dim)

    if zi is not None:
        return y, states.reshape(*batch_shape, n_sections, 2)

    return y
