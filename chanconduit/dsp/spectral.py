"""Spectral engine: typed transforms over a pluggable DFT backend.

These functions are thin adapters between NumPy arrays and a
:class:`~chanconduit.dft.DFT`. They accept 1D sequences and 2D arrays;
for 2D input the ``axis`` argument picks a logical dimension (0 walks the
row index, 1 walks the column index), following the ``numpy.fft``
convention and independent of storage order.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..dft.base import DFT
from ..diagnostics.core import imag_residual
from ..diagnostics.debug_mode import is_debug_enabled
from ..errors import NumericalError

# Largest relative imaginary residual tolerated by inv_c2r in debug mode.
IMAG_TOLERANCE = 1e-6


def _dispatch(dft: DFT, data: np.ndarray, axis: Optional[int], inverse: bool) -> np.ndarray:
    if data.ndim == 1:
        if axis not in (None, 0):
            raise ValueError(f"axis must be None or 0 for 1D input, got {axis}")
        return dft.inv1d(data) if inverse else dft.fwd1d(data)
    if data.ndim == 2:
        if axis is None:
            return dft.inv2d(data) if inverse else dft.fwd2d(data)
        if axis not in (0, 1):
            raise ValueError(f"axis must be None, 0 or 1 for 2D input, got {axis}")
        return dft.inv1b(data, axis) if inverse else dft.fwd1b(data, axis)
    raise ValueError(f"Expected 1D or 2D input, got {data.ndim}D array")


def fwd(dft: DFT, data, axis: Optional[int] = None) -> np.ndarray:
    """Forward complex transform.

    Args:
        dft: Transform backend.
        data: 1D sequence or 2D array.
        axis: For 2D input, the logical axis to transform along, or None
            to transform both dimensions.

    Returns:
        Complex array of the same shape as ``data``.
    """
    return _dispatch(dft, np.asarray(data, dtype=complex), axis, inverse=False)


def inv(dft: DFT, spec, axis: Optional[int] = None) -> np.ndarray:
    """Inverse complex transform (normalized by 1/N); see :func:`fwd`."""
    return _dispatch(dft, np.asarray(spec, dtype=complex), axis, inverse=True)


def fwd_r2c(dft: DFT, data, axis: Optional[int] = None) -> np.ndarray:
    """Forward transform of real samples (imaginary parts taken as zero)."""
    real = np.asarray(data, dtype=float)
    return fwd(dft, real.astype(complex), axis=axis)


def inv_c2r(dft: DFT, spec, axis: Optional[int] = None) -> np.ndarray:
    """Inverse transform keeping only the real part.

    In debug mode the discarded imaginary part is checked against
    ``IMAG_TOLERANCE``; a larger residual means the spectrum was not
    Hermitian and raises :class:`NumericalError`.
    """
    values = inv(dft, spec, axis=axis)
    if is_debug_enabled():
        residual = imag_residual(values)
        if residual > IMAG_TOLERANCE:
            raise NumericalError(
                f"inverse transform has imaginary residual {residual:.3g} "
                f"(tolerance {IMAG_TOLERANCE:.1g})"
            )
    return np.ascontiguousarray(values.real)
