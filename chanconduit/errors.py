"""Exception types raised by Channel Conduit."""

from __future__ import annotations


class ChanConduitError(Exception):
    """Base class for all Channel Conduit errors."""


class ConfigurationError(ChanConduitError, ValueError):
    """A filter could not be configured (bad option or unresolvable component)."""


class NumericalError(ChanConduitError, ArithmeticError):
    """A spectral operation hit a singularity it could not regularize."""


class RangeValidationError(ChanConduitError, ValueError):
    """A sticky range lies outside the signal or overlaps a previous range."""


__all__ = [
    "ChanConduitError",
    "ConfigurationError",
    "NumericalError",
    "RangeValidationError",
]
