"""Input validation helpers for the spectral routines."""

from __future__ import annotations

import numpy as np


def check_1d_array(x, name: str = "input", allow_empty: bool = False) -> np.ndarray:
    """Validate and cast input to a 1D float64 array.

    Args:
        x: Input array-like object.
        name: Argument name used in error messages.
        allow_empty: Accept zero-length input.

    Returns:
        1D float64 numpy array (a view when no cast is needed).

    Raises:
        ValueError: If input is not 1D, is empty, or contains NaN or Inf.
    """
    arr = np.asarray(x, dtype=float)
    if arr.ndim == 0:
        arr = arr.reshape(1)
    elif arr.ndim > 1:
        raise ValueError(f"{name}: expected 1D array, got {arr.ndim}D array")
    if arr.size == 0 and not allow_empty:
        raise ValueError(f"{name}: expected a non-empty array")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name}: contains NaN or Inf values")
    return arr


def zero_pad(x: np.ndarray, length: int) -> np.ndarray:
    """Return ``x`` zero-padded at the end to ``length`` samples.

    Raises:
        ValueError: If ``length`` is shorter than ``x``.
    """
    x = np.asarray(x)
    if length < x.shape[0]:
        raise ValueError(f"cannot pad {x.shape[0]} samples to shorter length {length}")
    out = np.zeros(length, dtype=x.dtype)
    out[: x.shape[0]] = x
    return out


def signed_frequencies(n: int) -> np.ndarray:
    """Bin frequencies in cycles per sample, negative above Nyquist."""
    return np.fft.fftfreq(n)


def check_signal(signal) -> None:
    """Raise unless ``signal`` is a 1D floating point ndarray that can be edited in place.

    Raises:
        ValueError: If ``signal`` is not a 1D numpy array.
        TypeError: If its dtype is not floating point.
    """
    if not isinstance(signal, np.ndarray) or signal.ndim != 1:
        raise ValueError("signal must be a 1D numpy array")
    if not np.issubdtype(signal.dtype, np.floating):
        raise TypeError(f"signal must have a floating dtype, got {signal.dtype}")
