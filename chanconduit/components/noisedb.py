"""Per-channel noise database interface and an in-memory implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields, replace
from typing import Mapping, Optional, Sequence, Tuple

import numpy as np


class ChannelNoiseDatabase(ABC):
    """
    Read-only per-channel metadata consumed by the channel filters.

    Optional quantities return ``None`` when the database has nothing
    for a channel.
    """

    @abstractmethod
    def baseline_rms(self, channel: int) -> float:
        """Expected baseline RMS of the channel."""

    @abstractmethod
    def extra_sticky_codes(self, channel: int) -> Tuple[int, ...]:
        """ADC codes known to stick on this channel beyond the generic ones."""

    @abstractmethod
    def resample_factor(self, channel: int) -> Optional[int]:
        """Number of samples the digitizer really produced for the readout window."""

    @abstractmethod
    def rcrc(self, channel: int) -> Optional[np.ndarray]:
        """RC shaping response spectrum to divide out, one bin per sample."""

    @abstractmethod
    def noise_filter(self, channel: int) -> Optional[np.ndarray]:
        """Multiplicative noise filter spectrum, one bin per sample."""

    @abstractmethod
    def response(self, channel: int) -> Optional[Tuple[np.ndarray, np.ndarray]]:
        """``(actual, nominal)`` electronics responses for response replacement."""

    @abstractmethod
    def min_rms_cut(self, channel: int) -> float:
        """Lowest acceptable RMS after noise filtering."""

    @abstractmethod
    def max_rms_cut(self, channel: int) -> float:
        """Highest acceptable RMS after noise filtering."""

    @abstractmethod
    def relative_gain(self, channel: int) -> Optional[float]:
        """Calibrated relative gain, if measured."""


@dataclass(frozen=True)
class ChannelNoiseInfo:
    """Everything :class:`OmniChannelNoiseDB` stores for one channel."""

    baseline_rms: float = 0.0
    extra_sticky_codes: Tuple[int, ...] = ()
    resample_factor: Optional[int] = None
    rcrc: Optional[np.ndarray] = field(default=None, compare=False)
    noise_filter: Optional[np.ndarray] = field(default=None, compare=False)
    response: Optional[Tuple[np.ndarray, np.ndarray]] = field(default=None, compare=False)
    min_rms_cut: float = 1.0
    max_rms_cut: float = 5.0
    relative_gain: Optional[float] = None


_INFO_FIELDS = frozenset(f.name for f in fields(ChannelNoiseInfo))


def _info(base: ChannelNoiseInfo, overrides: Mapping[str, object]) -> ChannelNoiseInfo:
    unknown = set(overrides) - _INFO_FIELDS
    if unknown:
        raise ValueError(f"Unknown noise database fields: {sorted(unknown)}")
    values = dict(overrides)
    if "extra_sticky_codes" in values:
        values["extra_sticky_codes"] = tuple(int(c) for c in values["extra_sticky_codes"])  # type: ignore[union-attr]
    return replace(base, **values)


class OmniChannelNoiseDB(ChannelNoiseDatabase):
    """
    Noise database held in memory.

    Args:
        default: Field values applied to every channel.
        channels: Per-channel overrides, ``{channel: {field: value}}``.
        groups: Overrides shared by groups of channels, as a sequence of
            ``(channels, {field: value})`` pairs applied before
            ``channels``.

    Example:
        >>> db = OmniChannelNoiseDB(
        ...     default={"min_rms_cut": 2.0, "max_rms_cut": 30.0},
        ...     channels={4: {"relative_gain": 1.05}},
        ... )
    """

    def __init__(
        self,
        default: Optional[Mapping[str, object]] = None,
        channels: Optional[Mapping[int, Mapping[str, object]]] = None,
        groups: Sequence[Tuple[Sequence[int], Mapping[str, object]]] = (),
    ) -> None:
        self._default = _info(ChannelNoiseInfo(), default or {})
        self._infos: dict[int, ChannelNoiseInfo] = {}
        for chans, overrides in groups:
            for ch in chans:
                self._infos[int(ch)] = _info(self._infos.get(int(ch), self._default), overrides)
        for ch, overrides in (channels or {}).items():
            self._infos[int(ch)] = _info(self._infos.get(int(ch), self._default), overrides)

    def info(self, channel: int) -> ChannelNoiseInfo:
        return self._infos.get(channel, self._default)

    def baseline_rms(self, channel: int) -> float:
        return self.info(channel).baseline_rms

    def extra_sticky_codes(self, channel: int) -> Tuple[int, ...]:
        return self.info(channel).extra_sticky_codes

    def resample_factor(self, channel: int) -> Optional[int]:
        return self.info(channel).resample_factor

    def rcrc(self, channel: int) -> Optional[np.ndarray]:
        return self.info(channel).rcrc

    def noise_filter(self, channel: int) -> Optional[np.ndarray]:
        return self.info(channel).noise_filter

    def response(self, channel: int) -> Optional[Tuple[np.ndarray, np.ndarray]]:
        return self.info(channel).response

    def min_rms_cut(self, channel: int) -> float:
        return self.info(channel).min_rms_cut

    def max_rms_cut(self, channel: int) -> float:
        return self.info(channel).max_rms_cut

    def relative_gain(self, channel: int) -> Optional[float]:
        return self.info(channel).relative_gain
