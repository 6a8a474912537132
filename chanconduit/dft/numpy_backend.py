"""DFT backend built on ``numpy.fft``."""

from __future__ import annotations

import numpy as np

from .base import DFT, _check_axis


class NumpyDFT(DFT):
    """Transforms computed with ``numpy.fft`` in complex128."""

    def fwd1d(self, seq: np.ndarray) -> np.ndarray:
        return np.fft.fft(np.asarray(seq, dtype=complex))

    def inv1d(self, seq: np.ndarray) -> np.ndarray:
        return np.fft.ifft(np.asarray(seq, dtype=complex))

    def fwd1b(self, arr: np.ndarray, axis: int) -> np.ndarray:
        arr = np.asarray(arr, dtype=complex)
        _check_axis(arr, axis)
        return np.fft.fft(arr, axis=axis)

    def inv1b(self, arr: np.ndarray, axis: int) -> np.ndarray:
        arr = np.asarray(arr, dtype=complex)
        _check_axis(arr, axis)
        return np.fft.ifft(arr, axis=axis)

    def fwd2d(self, arr: np.ndarray) -> np.ndarray:
        arr = np.asarray(arr, dtype=complex)
        _check_axis(arr, 0)
        return np.fft.fft2(arr)

    def inv2d(self, arr: np.ndarray) -> np.ndarray:
        arr = np.asarray(arr, dtype=complex)
        _check_axis(arr, 0)
        return np.fft.ifft2(arr)

    def __repr__(self) -> str:
        return "NumpyDFT()"
