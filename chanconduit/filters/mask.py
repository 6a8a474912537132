"""Channel mask map: which sample ranges each filter altered."""

from __future__ import annotations

import threading
from typing import Dict, Iterator, List, Tuple

BinRange = Tuple[int, int]


def _union(ranges: List[BinRange], new: BinRange) -> List[BinRange]:
    """Insert ``new`` into sorted disjoint ``ranges``, fusing overlaps and neighbours."""
    merged: List[BinRange] = []
    for start, end in sorted(ranges + [new]):
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


class ChannelMaskMap:
    """
    ``label -> channel -> [(start, end), ...]`` record of altered samples.

    Labels name what happened (``"sticky"``, ``"shifted"``, ``"noisy"``,
    ``"lf_noisy"``). Ranges are half-open and kept sorted and disjoint per
    channel. The
    map only grows: adding or merging unions ranges, so a recorded sample
    is never dropped. All mutation happens under an internal lock, so one
    map can collect results from channels processed on several threads.
    """

    def __init__(self) -> None:
        self._masks: Dict[str, Dict[int, List[BinRange]]] = {}
        self._lock = threading.Lock()

    def add(self, label: str, channel: int, start: int, end: int) -> None:
        """Record ``[start, end)`` of ``channel`` under ``label``."""
        if start >= end:
            raise ValueError(f"mask range must be non-empty, got [{start}, {end})")
        with self._lock:
            per_channel = self._masks.setdefault(label, {})
            per_channel[channel] = _union(per_channel.get(channel, []), (int(start), int(end)))

    def merge(self, other: "ChannelMaskMap") -> "ChannelMaskMap":
        """Union every range of ``other`` into this map and return self."""
        if other is self:
            return self
        snapshot = other.as_dict()
        with self._lock:
            for label, channels in snapshot.items():
                per_channel = self._masks.setdefault(label, {})
                for channel, ranges in channels.items():
                    current = per_channel.get(channel, [])
                    for rng in ranges:
                        current = _union(current, rng)
                    per_channel[channel] = current
        return self

    def ranges(self, label: str, channel: int) -> List[BinRange]:
        """Ranges recorded for ``channel`` under ``label`` (empty if none)."""
        with self._lock:
            return list(self._masks.get(label, {}).get(channel, []))

    def labels(self) -> List[str]:
        with self._lock:
            return sorted(self._masks)

    def channels(self, label: str) -> List[int]:
        with self._lock:
            return sorted(self._masks.get(label, {}))

    def as_dict(self) -> Dict[str, Dict[int, List[BinRange]]]:
        """Deep copy as plain dicts and lists."""
        with self._lock:
            return {
                label: {ch: list(rngs) for ch, rngs in channels.items()}
                for label, channels in self._masks.items()
            }

    def __contains__(self, label: object) -> bool:
        with self._lock:
            return label in self._masks

    def __iter__(self) -> Iterator[str]:
        return iter(self.labels())

    def __len__(self) -> int:
        with self._lock:
            return len(self._masks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChannelMaskMap):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        return f"ChannelMaskMap({self.as_dict()!r})"
