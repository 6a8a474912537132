"""Single channel noise subtraction stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from ..components.anode import AnodePlane
from ..components.noisedb import ChannelNoiseDatabase
from ..diagnostics.core import PartialCheck, calc_rms
from ..dsp.conv import regularize_divisor, replace
from ..dsp.spectral import fwd_r2c, inv_c2r
from ..dsp.utils import check_signal
from ..errors import ConfigurationError
from ..logging import get_logger
from ..sticky.mitigation import fft_scaling
from .base import ChannelFilter
from .mask import ChannelMaskMap

logger = get_logger(__name__)

NOISY_LABEL = "noisy"
LF_NOISY_LABEL = "lf_noisy"


@dataclass(frozen=True)
class OneChannelNoiseConfig:
    """
    Options of :class:`OneChannelNoise`.

    Attributes:
        anode: Name of the anode plane component.
        noisedb: Name of the channel noise database component.
        nfreqs: Bins inspected by the partial-response check.
        maxpower: Fall-off ratio of the partial-response check.
        resmp: ``[{"channels": [...], "sample_from": n}]`` channels whose
            digitizer produced only ``n`` samples over the readout window.
        adaptive_window: Half width, in samples, of the moving median used
            as baseline on partial-response channels.
        rcrc_floor: Relative magnitude floor when dividing out the RC
            response spectrum.
    """

    anode: str = "AnodePlane"
    noisedb: str = "OmniChannelNoiseDB"
    nfreqs: int = 4
    maxpower: float = 1.1
    resmp: List[Dict[str, Any]] = field(default_factory=list)
    adaptive_window: int = 20
    rcrc_floor: float = 1e-6

    def __post_init__(self) -> None:
        if self.nfreqs < 1:
            raise ValueError(f"nfreqs must be >= 1, got {self.nfreqs}")
        if self.adaptive_window < 1:
            raise ValueError(f"adaptive_window must be >= 1, got {self.adaptive_window}")
        if not self.rcrc_floor > 0:
            raise ValueError(f"rcrc_floor must be positive, got {self.rcrc_floor}")


def adaptive_baseline(signal: np.ndarray, window: int) -> np.ndarray:
    """Moving median of ``signal`` over ``2 * window + 1`` samples (edges replicated)."""
    padded = np.pad(np.asarray(signal, dtype=float), window, mode="edge")
    return np.median(sliding_window_view(padded, 2 * window + 1), axis=-1)


class OneChannelNoise(ChannelFilter):
    """
    Per-channel noise filtering.

    Steps, for one channel of ``N`` samples:

    1. Channels with a resample entry have their first ``sample_from``
       samples stretched over all ``N`` with :func:`fft_scaling`.
    2. The spectrum is checked for a partial RC response. If the
       response is complete, the database's RC spectrum is divided out.
    3. The database's noise filter is applied and the DC bin removed.
    4. When the database holds ``(actual, nominal)`` electronics
       responses, the actual one is replaced by the nominal one.
    5. The median baseline is subtracted; partial-response channels get
       a moving-median baseline instead, and induction channels among
       them are masked ``"lf_noisy"``.
    6. Channels whose robust RMS falls outside the database's cuts are
       masked ``"noisy"``.
    """

    config_class = OneChannelNoiseConfig

    def _configure(self, config: OneChannelNoiseConfig) -> None:
        anode = self.registry.find(config.anode, AnodePlane)
        noisedb = self.registry.find(config.noisedb, ChannelNoiseDatabase)

        resmp: Dict[int, int] = {}
        for ch in anode.channels():
            factor = noisedb.resample_factor(ch)
            if factor is not None:
                resmp[ch] = int(factor)
        for entry in config.resmp:
            try:
                sample_from = int(entry["sample_from"])
                channels = [int(ch) for ch in entry["channels"]]
            except (KeyError, TypeError, ValueError):
                raise ConfigurationError(
                    f"resmp entries need 'channels' and integer 'sample_from', got {entry!r}"
                ) from None
            if sample_from < 1:
                raise ConfigurationError(f"resmp sample_from must be >= 1, got {sample_from}")
            for ch in channels:
                resmp[ch] = sample_from

        self._anode = anode
        self._noisedb = noisedb
        self._resmp = resmp
        self._check_partial = PartialCheck(nfreqs=config.nfreqs, maxpower=config.maxpower)

    @property
    def resample_factors(self) -> Dict[int, int]:
        """Copy of the ``channel -> sample_from`` table."""
        return dict(self._resmp)

    @property
    def check_partial(self) -> PartialCheck:
        """The partial-response check in use."""
        return self._check_partial

    def _spectrum_for(self, name: str, spec, n: int) -> np.ndarray:
        spec = np.asarray(spec, dtype=complex)
        if spec.shape != (n,):
            raise ValueError(f"{name} spectrum has {spec.shape[0]} bins, signal has {n} samples")
        return spec

    def apply_one(self, channel: int, signal: np.ndarray) -> ChannelMaskMap:
        check_signal(signal)
        masks = ChannelMaskMap()
        n = signal.shape[0]
        if n == 0:
            return masks
        db = self._noisedb

        sample_from = self._resmp.get(channel)
        if sample_from is not None and sample_from != n:
            if sample_from > n:
                raise ValueError(
                    f"channel {channel}: sample_from {sample_from} exceeds signal length {n}"
                )
            signal[:] = fft_scaling(self.dft, signal[:sample_from], n)

        spectrum = fwd_r2c(self.dft, signal)
        is_partial = self._check_partial(spectrum)

        rcrc = db.rcrc(channel)
        if rcrc is not None and not is_partial:
            rcrc = self._spectrum_for("rcrc", rcrc, n)
            spectrum = spectrum / regularize_divisor(rcrc, self._config.rcrc_floor)

        noise_filter = db.noise_filter(channel)
        if noise_filter is not None:
            spectrum = spectrum * self._spectrum_for("noise filter", noise_filter, n)

        spectrum[0] = 0.0
        signal[:] = inv_c2r(self.dft, spectrum)

        response = db.response(channel)
        if response is not None:
            actual, nominal = response
            signal[:] = replace(self.dft, signal, actual, nominal)[:n]

        if is_partial:
            signal -= adaptive_baseline(signal, self._config.adaptive_window)
            if self._anode.is_induction(channel):
                masks.add(LF_NOISY_LABEL, channel, 0, n)
            logger.debug("channel %d: partial RC response", channel)
        else:
            baseline, _ = calc_rms(signal)
            signal -= baseline

        _, rms = calc_rms(signal)
        if not db.min_rms_cut(channel) <= rms <= db.max_rms_cut(channel):
            masks.add(NOISY_LABEL, channel, 0, n)
            logger.debug("channel %d: rms %.3g outside cuts", channel, rms)
        return masks
