"""Waveform and spectrum diagnostics used by the channel filters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np


def calc_rms(signal: np.ndarray) -> Tuple[float, float]:
    """
    Robust baseline and RMS of a waveform.

    The baseline is the median; the RMS is derived from the spread of the
    16th and 84th percentiles so that signal pulses do not inflate it.

    Parameters
    ----------
    signal:
        1D real waveform.

    Returns
    -------
    tuple of float
        ``(median, rms)``. An empty waveform gives ``(0.0, 0.0)``.
    """
    values = np.asarray(signal, dtype=float).ravel()
    if values.size == 0:
        return 0.0, 0.0

    lo, mid, hi = np.percentile(values, [16.0, 50.0, 84.0])
    rms = np.sqrt(((hi - mid) ** 2 + (mid - lo) ** 2) / 2.0)
    return float(mid), float(rms)


@dataclass(frozen=True)
class PartialCheck:
    """
    Detect a "partial" response in a channel spectrum.

    A channel whose low-frequency magnitudes fall off steadily over the
    first ``nfreqs + 1`` non-DC bins, losing more than a factor of
    ``maxpower``, carries an incomplete RC shaping response. Such
    channels must not have the nominal RC response divided out.

    Attributes
    ----------
    nfreqs:
        Number of consecutive bin-to-bin comparisons.
    maxpower:
        Minimum ratio of the first to the last inspected magnitude.
    """

    nfreqs: int = 4
    maxpower: float = 1.1

    def __call__(self, spectrum: np.ndarray) -> bool:
        spectrum = np.asarray(spectrum)
        if spectrum.ndim != 1 or spectrum.size < self.nfreqs + 2:
            return False

        mags = np.abs(spectrum[1 : self.nfreqs + 2])
        if np.any(np.diff(mags) > 0.0):
            return False
        return bool(mags[0] > self.maxpower * mags[-1])


def imag_residual(values: np.ndarray) -> float:
    """
    Relative size of the imaginary part of a nominally real result.

    Returns ``max|imag| / max|values|``, or 0.0 for an all-zero input.
    """
    values = np.asarray(values)
    if values.size == 0:
        return 0.0
    scale = float(np.max(np.abs(values)))
    if scale == 0.0:
        return 0.0
    return float(np.max(np.abs(np.imag(values)))) / scale
