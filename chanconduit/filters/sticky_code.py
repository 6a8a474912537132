"""Sticky code mitigation stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import numpy as np

from ..components.anode import AnodePlane
from ..components.noisedb import ChannelNoiseDatabase
from ..components.registry import ComponentRegistry
from ..dft.base import DFT
from ..dsp.utils import check_signal
from ..errors import ConfigurationError
from ..logging import get_logger
from ..sticky.mitigation import fft_interp_sticky, fft_shift_sticky, linear_interp_ranges
from ..sticky.ranges import RangeLike, validate_ranges
from .base import ChannelFilter
from .mask import ChannelMaskMap

logger = get_logger(__name__)

#: ``range_source(channel, signal, extra_codes) -> ranges``: locates the
#: sticky runs of a waveform. Detection itself lives outside this package.
RangeSource = Callable[[int, np.ndarray, Tuple[int, ...]], Iterable[RangeLike]]

STICKY_LABEL = "sticky"
SHIFTED_LABEL = "shifted"


@dataclass(frozen=True)
class StickyCodeMitigConfig:
    """
    Options of :class:`StickyCodeMitig`.

    Attributes:
        anode: Name of the anode plane component.
        noisedb: Name of the channel noise database component.
        stky_sig_like_val: ADC level at which a stuck run is recognised.
        stky_sig_like_rms: Tolerance band around ``stky_sig_like_val``.
        stky_max_len: Longest run, in samples, that is repaired.
        fft_interp: Refill short runs that fail the level test spectrally.
        extra_stky: ``[{"channels": [...], "bits": [...]}]`` extra sticky
            codes per channel, added to those of the noise database.
        shift: ``[{"channels": [...], "toffset": t}]`` channels to re-time
            by ``t`` samples after repair.
    """

    anode: str = "AnodePlane"
    noisedb: str = "OmniChannelNoiseDB"
    stky_sig_like_val: float = 15.0
    stky_sig_like_rms: float = 2.0
    stky_max_len: int = 5
    fft_interp: bool = True
    extra_stky: List[Dict[str, Any]] = field(default_factory=list)
    shift: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.stky_sig_like_rms < 0:
            raise ValueError(f"stky_sig_like_rms must be >= 0, got {self.stky_sig_like_rms}")
        if self.stky_max_len < 1:
            raise ValueError(f"stky_max_len must be >= 1, got {self.stky_max_len}")


def _channel_entries(
    entries: List[Dict[str, Any]], key: str, option: str, convert: Callable[[Any], Any]
) -> List[Tuple[int, Any]]:
    """``(channel, convert(entry[key]))`` for every channel listed in ``entries``."""
    pairs: List[Tuple[int, Any]] = []
    for entry in entries:
        try:
            value = convert(entry[key])
            pairs.extend((int(ch), value) for ch in entry["channels"])
        except (KeyError, TypeError, ValueError):
            raise ConfigurationError(
                f"{option} entries need 'channels' and a valid '{key}', got {entry!r}"
            ) from None
    return pairs


def _codes(bits) -> Tuple[int, ...]:
    return tuple(int(b) for b in bits)


class StickyCodeMitig(ChannelFilter):
    """
    Repair sticky-code runs of each channel.

    For every run reported by ``range_source``:

    - runs longer than ``stky_max_len`` are left alone;
    - runs sitting within ``stky_sig_like_val ± tolerance`` are bridged
      linearly, where the tolerance is the larger of
      ``stky_sig_like_rms`` and the channel's baseline RMS from the noise
      database;
    - the remaining short runs are refilled spectrally when
      ``fft_interp`` is set.

    Channels listed under ``shift`` are repaired and re-timed with
    :func:`fft_shift_sticky`. Repaired runs are reported under the
    ``"sticky"`` label at their positions before re-timing; a re-timed
    channel is reported whole under ``"shifted"``.

    Args:
        registry: Component registry holding the anode and noise database.
        range_source: Callable locating sticky runs in a waveform.
        dft: Transform backend.
        **options: See :class:`StickyCodeMitigConfig`.
    """

    config_class = StickyCodeMitigConfig

    def __init__(
        self,
        registry: ComponentRegistry,
        range_source: RangeSource,
        dft: Optional[DFT] = None,
        **options: Any,
    ) -> None:
        if not callable(range_source):
            raise ConfigurationError("StickyCodeMitig needs a callable range_source")
        self.range_source = range_source
        super().__init__(registry, dft=dft, **options)

    def _configure(self, config: StickyCodeMitigConfig) -> None:
        anode = self.registry.find(config.anode, AnodePlane)
        noisedb = self.registry.find(config.noisedb, ChannelNoiseDatabase)

        extra: Dict[int, set] = {}
        sig_like_rms: Dict[int, float] = {}
        for ch in anode.channels():
            codes = noisedb.extra_sticky_codes(ch)
            if codes:
                extra.setdefault(ch, set()).update(int(c) for c in codes)
            baseline_rms = float(noisedb.baseline_rms(ch))
            if baseline_rms > config.stky_sig_like_rms:
                sig_like_rms[ch] = baseline_rms
        for ch, bits in _channel_entries(config.extra_stky, "bits", "extra_stky", _codes):
            extra.setdefault(ch, set()).update(bits)

        toffsets = dict(_channel_entries(config.shift, "toffset", "shift", float))

        self._anode = anode
        self._noisedb = noisedb
        self._extra_stky = {ch: tuple(sorted(codes)) for ch, codes in extra.items()}
        self._sig_like_rms = sig_like_rms
        self._toffsets = toffsets

    def extra_sticky_codes(self, channel: int) -> Tuple[int, ...]:
        """Extra sticky codes known for ``channel``."""
        return self._extra_stky.get(channel, ())

    def sig_like_rms(self, channel: int) -> float:
        """Tolerance around ``stky_sig_like_val`` used to classify runs of ``channel``."""
        return self._sig_like_rms.get(channel, self._config.stky_sig_like_rms)

    def apply_one(self, channel: int, signal: np.ndarray) -> ChannelMaskMap:
        check_signal(signal)
        cfg = self._config
        masks = ChannelMaskMap()
        n = signal.shape[0]
        if n == 0:
            return masks

        ranges = validate_ranges(
            self.range_source(channel, signal, self.extra_sticky_codes(channel)), n
        )
        toffset = self._toffsets.get(channel)
        if not ranges and toffset is None:
            return masks

        short = [rng for rng in ranges if rng.length <= cfg.stky_max_len]
        if len(short) < len(ranges):
            logger.debug(
                "channel %d: %d sticky runs longer than %d samples left as is",
                channel,
                len(ranges) - len(short),
                cfg.stky_max_len,
            )

        repaired = linear_interp_ranges(
            signal, short, cfg.stky_sig_like_val, self.sig_like_rms(channel)
        )
        done = set(repaired)
        rest = [rng for rng in short if rng not in done] if cfg.fft_interp else []

        if toffset is not None:
            fft_shift_sticky(self.dft, signal, toffset, rest)
            if toffset != 0.0:
                masks.add(SHIFTED_LABEL, channel, 0, n)
            logger.debug("channel %d: re-timed by %.3g samples", channel, toffset)
        elif rest:
            fft_interp_sticky(self.dft, signal, rest)

        for rng in sorted(repaired + rest):
            masks.add(STICKY_LABEL, channel, rng.start, rng.end)
        return masks
