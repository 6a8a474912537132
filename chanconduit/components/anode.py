"""Anode plane interface: which wire plane a channel belongs to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Mapping

# Plane index of collection channels; induction planes are 0 and 1.
COLLECTION_PLANE = 2


class AnodePlane(ABC):
    """Channel to wire-plane lookup used to select per-channel behaviour."""

    @abstractmethod
    def channels(self) -> List[int]:
        """All channel identifiers served by this anode, ascending."""

    @abstractmethod
    def plane_index(self, channel: int) -> int:
        """
        Wire plane index (0, 1 induction; 2 collection) of ``channel``.

        Raises:
            KeyError: If the channel is not on this anode.
        """

    def is_induction(self, channel: int) -> bool:
        return self.plane_index(channel) != COLLECTION_PLANE


class MappedAnodePlane(AnodePlane):
    """Anode plane defined by an explicit ``channel -> plane index`` mapping."""

    def __init__(self, planes: Mapping[int, int]) -> None:
        for channel, plane in planes.items():
            if plane not in (0, 1, COLLECTION_PLANE):
                raise ValueError(f"channel {channel}: plane index must be 0, 1 or 2, got {plane}")
        self._planes = {int(ch): int(plane) for ch, plane in planes.items()}

    def channels(self) -> List[int]:
        return sorted(self._planes)

    def plane_index(self, channel: int) -> int:
        try:
            return self._planes[channel]
        except KeyError:
            raise KeyError(f"channel {channel} is not on this anode plane") from None

    def __repr__(self) -> str:
        return f"MappedAnodePlane(nchannels={len(self._planes)})"
