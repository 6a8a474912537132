"""Alias-free spectral convolution and response replacement.

Both operations zero-pad their inputs to a length long enough that the
circular convolution computed by the DFT equals the linear one. Callers
pass unpadded inputs and truncate the result as they need.
"""

from __future__ import annotations

import numpy as np

from ..dft.base import DFT
from ..errors import NumericalError
from ..logging import get_logger
from .spectral import fwd_r2c, inv_c2r
from .utils import check_1d_array, zero_pad

logger = get_logger(__name__)

REPLACE_POLICIES = ("floor", "raise")


def convolve(dft: DFT, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Linear convolution of two real sequences via the DFT.

    Args:
        dft: Transform backend.
        a: First input signal (1D array, not pre-padded).
        b: Second input signal (1D array, not pre-padded).

    Returns:
        Real array of length ``len(a) + len(b) - 1``.

    Raises:
        ValueError: If either input is empty, not 1D, or not finite.
    """
    a = check_1d_array(a, name="a")
    b = check_1d_array(b, name="b")

    n_out = len(a) + len(b) - 1
    A = fwd_r2c(dft, zero_pad(a, n_out))
    B = fwd_r2c(dft, zero_pad(b, n_out))
    return inv_c2r(dft, A * B)


def replace_length(*lengths: int) -> int:
    """Padded length used by :func:`replace`.

    The sum of the two longest lengths less one, which is enough for a
    measurement convolved with either response to stay free of
    wraparound.
    """
    if not lengths:
        raise ValueError("replace_length needs at least one length")
    ordered = sorted(lengths, reverse=True)
    if len(ordered) == 1:
        return ordered[0]
    return ordered[0] + ordered[1] - 1


def regularize_divisor(R1: np.ndarray, floor: float = 1e-6, policy: str = "floor") -> np.ndarray:
    """Raise near-zero bins of a divisor spectrum; see :func:`replace`."""
    mags = np.abs(R1)
    peak = float(np.max(mags))
    if peak == 0.0:
        raise NumericalError("response spectrum is identically zero; cannot deconvolve")

    threshold = floor * peak
    small = mags < threshold
    if not np.any(small):
        return R1

    if policy == "raise":
        raise NumericalError(
            f"{int(np.sum(small))} response bins below {threshold:.3g} "
            f"({floor:.1g} of peak magnitude)"
        )

    logger.debug("replace: flooring %d near-zero response bins", int(np.sum(small)))
    # Keep the phase of the floored bins; exact zeros get phase 0.
    unit = np.where(mags > 0.0, R1 / np.where(mags > 0.0, mags, 1.0), 1.0)
    out = R1.copy()
    out[small] = threshold * unit[small]
    return out


def replace(
    dft: DFT,
    meas: np.ndarray,
    res1: np.ndarray,
    res2: np.ndarray,
    floor: float = 1e-6,
    policy: str = "floor",
) -> np.ndarray:
    """Replace response ``res1`` in ``meas`` with response ``res2``.

    Forms ``fwd(meas) * fwd(res2) / fwd(res1)`` in frequency space and
    returns the real part of its inverse.

    Near-zero bins of ``fwd(res1)`` are a numerical singularity. With
    ``policy="floor"`` every bin whose magnitude is below
    ``floor * max|fwd(res1)|`` is raised to that magnitude, keeping its
    phase. With ``policy="raise"`` such bins raise instead.

    Args:
        dft: Transform backend.
        meas: Measured waveform.
        res1: Response present in ``meas``.
        res2: Response to substitute.
        floor: Relative magnitude floor for the divisor.
        policy: "floor" or "raise".

    Returns:
        Real array of length ``replace_length(len(meas), len(res1), len(res2))``.

    Raises:
        ValueError: On invalid inputs, a non-positive floor or unknown policy.
        NumericalError: If the divisor cannot be regularized (all-zero
            response) or ``policy="raise"`` finds a near-zero bin.
    """
    if policy not in REPLACE_POLICIES:
        raise ValueError(f"Unsupported policy: {policy!r}. Supported: {list(REPLACE_POLICIES)}")
    if not floor > 0.0:
        raise ValueError(f"floor must be positive, got {floor}")

    meas = check_1d_array(meas, name="meas")
    res1 = check_1d_array(res1, name="res1")
    res2 = check_1d_array(res2, name="res2")

    n_out = replace_length(len(meas), len(res1), len(res2))
    M = fwd_r2c(dft, zero_pad(meas, n_out))
    R1 = fwd_r2c(dft, zero_pad(res1, n_out))
    R2 = fwd_r2c(dft, zero_pad(res2, n_out))

    R1 = regularize_divisor(R1, floor, policy)
    return inv_c2r(dft, M * R2 / R1)
