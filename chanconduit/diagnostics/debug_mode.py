"""Debug mode switch for Channel Conduit.

When enabled, spectral helpers run extra consistency checks (for
example, verifying that a complex-to-real inverse really produced a real
waveform) at the cost of some speed.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

DEBUG_ENV_VAR = "CHANCONDUIT_DEBUG"

_TRUTHY = ("1", "true", "yes", "on")

_debug_enabled: bool = os.getenv(DEBUG_ENV_VAR, "0").strip().lower() in _TRUTHY


def is_debug_enabled() -> bool:
    """Return whether debug checks are active.

    The initial value comes from the ``CHANCONDUIT_DEBUG`` environment
    variable.
    """
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Turn debug checks on or off for the whole process."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily switch debug checks, restoring the previous state on exit.

    Example
    -------
    >>> with debug_context(True):
    ...     values = inv_c2r(dft, spectrum)
    """
    global _debug_enabled
    previous = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = previous
