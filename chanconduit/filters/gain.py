"""Relative gain correction stage."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from ..components.anode import AnodePlane
from ..components.noisedb import ChannelNoiseDatabase
from ..dsp.utils import check_signal
from .base import ChannelFilter
from .mask import ChannelMaskMap


@dataclass(frozen=True)
class RelGainCalibConfig:
    """
    Options of :class:`RelGainCalib`.

    Attributes:
        anode: Name of the anode plane component.
        noisedb: Name of the channel noise database component.
        gain_def: Gain used when a channel has no calibration.
        gain_min_cut: Lower clamp of calibrated gains.
        gain_max_cut: Upper clamp of calibrated gains.
        rel_gain: Calibrated gains indexed by channel; takes precedence
            over the noise database.
    """

    anode: str = "AnodePlane"
    noisedb: str = "OmniChannelNoiseDB"
    gain_def: float = 1.0
    gain_min_cut: float = 0.8
    gain_max_cut: float = 1.25
    rel_gain: List[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.gain_min_cut > self.gain_max_cut:
            raise ValueError(
                f"gain_min_cut ({self.gain_min_cut}) exceeds gain_max_cut ({self.gain_max_cut})"
            )


class RelGainCalib(ChannelFilter):
    """Scale each channel by its relative gain, clamped to the configured cuts."""

    config_class = RelGainCalibConfig

    def _configure(self, config: RelGainCalibConfig) -> None:
        anode = self.registry.find(config.anode, AnodePlane)
        noisedb = self.registry.find(config.noisedb, ChannelNoiseDatabase)
        self._anode = anode
        self._noisedb = noisedb
        self._gains: Dict[int, float] = {ch: self._lookup(config, ch) for ch in anode.channels()}

    def _lookup(self, config: RelGainCalibConfig, channel: int) -> float:
        gain: Optional[float] = None
        if 0 <= channel < len(config.rel_gain):
            gain = config.rel_gain[channel]
        if gain is None:
            gain = self._noisedb.relative_gain(channel)
        if gain is None or not math.isfinite(gain):
            return float(config.gain_def)
        # Clamped to the nearest cut, not reset to gain_def.
        return float(min(max(gain, config.gain_min_cut), config.gain_max_cut))

    def gain(self, channel: int) -> float:
        """Gain applied to ``channel``."""
        if channel in self._gains:
            return self._gains[channel]
        return self._lookup(self._config, channel)

    def apply_one(self, channel: int, signal: np.ndarray) -> ChannelMaskMap:
        check_signal(signal)
        signal *= self.gain(channel)
        return ChannelMaskMap()
