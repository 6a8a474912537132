"""Sticky sample mitigation strategies.

A "sticky" run is a stretch of samples where the digitizer kept
emitting a fixed code instead of following its input. Each strategy
below repairs such runs, given as :class:`StickyRange` intervals, in a
different way:

- :func:`linear_interp_sticky` bridges short runs that sit at the
  expected sticky level with a straight line.
- :func:`fft_interp_sticky` refills runs with band-limited values
  reconstructed from the rest of the waveform.
- :func:`fft_shift_sticky` repairs runs spectrally and then re-times the
  whole waveform by a fractional sample offset.
- :func:`fft_scaling` resamples a waveform to a new length by padding or
  truncating its spectrum.

The first three modify ``signal`` in place and return whether anything
changed. ``signal`` must be a 1D floating point ndarray.
"""

from __future__ import annotations

from typing import Iterable, List

import numpy as np

from ..dft.base import DFT
from ..dsp.spectral import fwd_r2c, inv_c2r
from ..dsp.utils import check_1d_array, check_signal, signed_frequencies
from ..logging import get_logger
from .ranges import RangeLike, StickyRange, ranges_mask, validate_ranges

logger = get_logger(__name__)


def _bridge(signal: np.ndarray, rng: StickyRange) -> None:
    """Fill ``rng`` with a line between its neighbours (or the one that exists)."""
    n = signal.shape[0]
    before, after = rng.start - 1, rng.end
    if before >= 0 and after < n:
        lo, hi = signal[before], signal[after]
        frac = np.arange(1, rng.length + 1) / (rng.length + 1)
        signal[rng.start : rng.end] = lo + (hi - lo) * frac
    elif before >= 0:
        signal[rng.start : rng.end] = signal[before]
    elif after < n:
        signal[rng.start : rng.end] = signal[after]
    else:
        signal[rng.start : rng.end] = 0.0


def is_sticky_signal_like(
    signal: np.ndarray,
    rng: RangeLike,
    sig_like_val: float,
    sig_like_rms: float,
) -> bool:
    """True when every sample of ``rng`` lies within ``sig_like_val ± sig_like_rms``."""
    start, end = int(rng[0]), int(rng[1])
    values = np.asarray(signal[start:end], dtype=float)
    if values.size == 0:
        return False
    return bool(np.all(np.abs(values - sig_like_val) <= sig_like_rms))


def linear_interp_ranges(
    signal: np.ndarray,
    ranges: Iterable[RangeLike],
    sig_like_val: float,
    sig_like_rms: float,
) -> List[StickyRange]:
    """
    Linearly interpolate over sticky-level ranges.

    A range is repaired only if it passes :func:`is_sticky_signal_like`
    and has a sample on both sides; its interior becomes a straight line
    from ``signal[start - 1]`` to ``signal[end]``. Other ranges are left
    untouched.

    Returns:
        The ranges that were repaired.

    Raises:
        RangeValidationError: If the ranges are malformed.
    """
    check_signal(signal)
    n = signal.shape[0]
    repaired: List[StickyRange] = []
    for rng in validate_ranges(ranges, n):
        if rng.start == 0 or rng.end == n:
            logger.debug("range [%d, %d) touches the waveform edge; skipped", rng.start, rng.end)
            continue
        if not is_sticky_signal_like(signal, rng, sig_like_val, sig_like_rms):
            logger.debug(
                "range [%d, %d) not at sticky level %.3g ± %.3g; skipped",
                rng.start,
                rng.end,
                sig_like_val,
                sig_like_rms,
            )
            continue
        _bridge(signal, rng)
        repaired.append(rng)
    return repaired


def linear_interp_sticky(
    signal: np.ndarray,
    ranges: Iterable[RangeLike],
    sig_like_val: float,
    sig_like_rms: float,
) -> bool:
    """Boolean form of :func:`linear_interp_ranges`."""
    return bool(linear_interp_ranges(signal, ranges, sig_like_val, sig_like_rms))


def fft_interp_sticky(
    dft: DFT,
    signal: np.ndarray,
    ranges: Iterable[RangeLike],
    band: float = 0.5,
    niter: int = 20,
) -> bool:
    """
    Refill sticky ranges with band-limited values.

    Each range is first bridged linearly. Then, ``niter`` times, the full
    waveform is transformed, every bin above ``band`` times the Nyquist
    frequency is zeroed, and the inverse is spliced back into the ranges
    only. Samples outside the ranges are never changed.

    Args:
        dft: Transform backend.
        signal: Waveform, modified in place.
        ranges: Sticky ranges.
        band: Retained fraction of the band, in (0, 1].
        niter: Number of projection rounds (>= 0).

    Returns:
        True if any range was refilled.
    """
    check_signal(signal)
    if not 0.0 < band <= 1.0:
        raise ValueError(f"band must be in (0, 1], got {band}")
    if niter < 0:
        raise ValueError(f"niter must be >= 0, got {niter}")

    n = signal.shape[0]
    ranges = validate_ranges(ranges, n)
    if not ranges:
        return False

    mask = ranges_mask(ranges, n)
    work = signal.astype(float, copy=True)
    for rng in ranges:
        _bridge(work, rng)

    stop = np.abs(signed_frequencies(n)) > 0.5 * band
    for _ in range(niter):
        spec = fwd_r2c(dft, work)
        spec[stop] = 0.0
        work[mask] = inv_c2r(dft, spec)[mask]

    signal[mask] = work[mask]
    return True


def fft_shift_sticky(
    dft: DFT,
    signal: np.ndarray,
    toffset: float,
    ranges: Iterable[RangeLike],
) -> bool:
    """
    Repair sticky ranges, then delay the waveform by ``toffset`` samples.

    The delay is a linear phase ramp ``exp(-2πi f toffset)`` so the
    result is ``x(n - toffset)``; for even lengths the Nyquist bin is
    scaled by ``cos(π toffset)`` to keep the output real. Integer offsets
    give a circular shift.

    Returns:
        True if any range was repaired or the offset is non-zero.
    """
    check_signal(signal)
    ranges = validate_ranges(ranges, signal.shape[0])

    altered = fft_interp_sticky(dft, signal, ranges) if ranges else False
    if toffset == 0.0:
        return altered

    n = signal.shape[0]
    ramp = np.exp(-2j * np.pi * signed_frequencies(n) * toffset)
    if n % 2 == 0:
        ramp[n // 2] = np.cos(np.pi * toffset)
    signal[:] = inv_c2r(dft, fwd_r2c(dft, signal) * ramp)
    return True


def fft_scaling(dft: DFT, signal: np.ndarray, nsamples: int) -> np.ndarray:
    """
    Resample a waveform to ``nsamples`` samples in the frequency domain.

    The spectrum is zero-padded (upsampling) or truncated (downsampling)
    symmetrically about Nyquist. On upsampling an even-length input's
    Nyquist bin is split between the two new bins; on downsampling the
    two bins folding onto the new Nyquist are summed. The result is scaled
    by ``nsamples / len(signal)`` so amplitudes are preserved.

    Args:
        dft: Transform backend.
        signal: Real waveform (not modified).
        nsamples: Target length (>= 1).

    Returns:
        New float array of length ``nsamples``.
    """
    x = check_1d_array(signal, name="signal")
    nsamples = int(nsamples)
    if nsamples < 1:
        raise ValueError(f"nsamples must be >= 1, got {nsamples}")

    n = x.shape[0]
    if nsamples == n:
        return x.copy()

    X = fwd_r2c(dft, x)
    Y = np.zeros(nsamples, dtype=complex)
    m = min(n, nsamples)
    nyq = m // 2 + 1
    Y[:nyq] = X[:nyq]
    if m > 2:
        Y[nyq - m :] = X[nyq - m :]
    if m % 2 == 0:
        if nsamples < n:
            Y[m // 2] += X[n - m // 2]
        else:
            Y[m // 2] *= 0.5
            Y[nsamples - m // 2] = Y[m // 2]

    return inv_c2r(dft, Y) * (nsamples / n)
