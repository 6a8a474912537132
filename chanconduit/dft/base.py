"""Abstract discrete Fourier transform capability.

A :class:`DFT` is handed to every spectral routine as an explicit
argument so the transform backend can be swapped (NumPy, PyTorch, or a
test double) without touching the algorithms.

Conventions shared by all backends:

- Transforms are complex-to-complex and length preserving; the caller
  chooses the length by the size of the input.
- The forward transform is unnormalized and the inverse carries the
  ``1/N`` factor, so ``inv1d(fwd1d(x)) == x``.
- Inputs are never modified and never aliased with the returned array.
- Backends hold no per-call state and are safe to share across threads.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


def _check_axis(arr: np.ndarray, axis: int) -> None:
    if arr.ndim != 2:
        raise ValueError(f"Expected 2D array, got {arr.ndim}D array")
    if axis not in (0, 1):
        raise ValueError(f"axis must be 0 or 1, got {axis}")


class DFT(ABC):
    """Fixed-length forward/inverse complex transforms."""

    @abstractmethod
    def fwd1d(self, seq: np.ndarray) -> np.ndarray:
        """Forward transform of a 1D complex sequence."""

    @abstractmethod
    def inv1d(self, seq: np.ndarray) -> np.ndarray:
        """Inverse transform of a 1D complex sequence (includes 1/N)."""

    def fwd1b(self, arr: np.ndarray, axis: int) -> np.ndarray:
        """
        Forward transform every 1D slice of a 2D array along ``axis``.

        ``axis`` is logical: 0 runs along the row index (each column is
        transformed), 1 runs along the column index (each row is
        transformed). The memory layout of ``arr`` is irrelevant.
        """
        arr = np.asarray(arr, dtype=complex)
        _check_axis(arr, axis)
        return self._batched(self.fwd1d, arr, axis)

    def inv1b(self, arr: np.ndarray, axis: int) -> np.ndarray:
        """Inverse counterpart of :meth:`fwd1b`."""
        arr = np.asarray(arr, dtype=complex)
        _check_axis(arr, axis)
        return self._batched(self.inv1d, arr, axis)

    def fwd2d(self, arr: np.ndarray) -> np.ndarray:
        """Forward transform over both dimensions of a 2D array."""
        return self.fwd1b(self.fwd1b(arr, axis=1), axis=0)

    def inv2d(self, arr: np.ndarray) -> np.ndarray:
        """Inverse transform over both dimensions of a 2D array."""
        return self.inv1b(self.inv1b(arr, axis=1), axis=0)

    @staticmethod
    def _batched(transform, arr: np.ndarray, axis: int) -> np.ndarray:
        out = np.empty(arr.shape, dtype=complex)
        if axis == 1:
            for irow in range(arr.shape[0]):
                out[irow, :] = transform(arr[irow, :])
        else:
            for icol in range(arr.shape[1]):
                out[:, icol] = transform(arr[:, icol])
        return out
