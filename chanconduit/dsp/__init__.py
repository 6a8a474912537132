"""Spectral processing primitives.

This package provides:
- Forward/inverse transforms of 1D sequences and 2D arrays over an
  injected DFT backend, with real/complex adapters
- Alias-free linear convolution
- Response replacement (deconvolve one response, reconvolve another)
"""

from .conv import convolve, regularize_divisor, replace, replace_length
from .spectral import fwd, fwd_r2c, inv, inv_c2r
from .utils import check_1d_array, signed_frequencies, zero_pad

__all__ = [
    # Spectral engine
    "fwd",
    "inv",
    "fwd_r2c",
    "inv_c2r",
    # Convolution
    "convolve",
    "replace",
    "replace_length",
    "regularize_divisor",
    # Utils
    "check_1d_array",
    "zero_pad",
    "signed_frequencies",
]
