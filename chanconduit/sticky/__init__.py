"""Repair and re-timing of sticky (stuck-code) sample runs."""

from .mitigation import (
    fft_interp_sticky,
    fft_scaling,
    fft_shift_sticky,
    is_sticky_signal_like,
    linear_interp_ranges,
    linear_interp_sticky,
)
from .ranges import StickyRange, ranges_mask, validate_ranges

__all__ = [
    "StickyRange",
    "validate_ranges",
    "ranges_mask",
    "is_sticky_signal_like",
    "linear_interp_ranges",
    "linear_interp_sticky",
    "fft_interp_sticky",
    "fft_shift_sticky",
    "fft_scaling",
]
