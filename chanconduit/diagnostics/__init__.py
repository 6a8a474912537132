"""Diagnostics and debugging utilities for Channel Conduit."""

from .core import PartialCheck, calc_rms, imag_residual
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "calc_rms",
    "PartialCheck",
    "imag_residual",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
