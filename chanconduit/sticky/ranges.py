"""Sticky sample ranges and their validation."""

from __future__ import annotations

from typing import Iterable, List, NamedTuple, Sequence, Tuple, Union

import numpy as np

from ..errors import RangeValidationError


class StickyRange(NamedTuple):
    """Half-open run ``[start, end)`` of corrupted sample indices."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


RangeLike = Union[StickyRange, Tuple[int, int], Sequence[int]]


def validate_ranges(ranges: Iterable[RangeLike], nsamples: int) -> List[StickyRange]:
    """
    Check sticky ranges against a signal length.

    Args:
        ranges: Iterable of ``(start, end)`` pairs, ascending.
        nsamples: Length of the signal the ranges index.

    Returns:
        The ranges as a list of :class:`StickyRange`.

    Raises:
        RangeValidationError: If a range is empty, falls outside
            ``[0, nsamples)``, or starts before the previous one ends.
    """
    out: List[StickyRange] = []
    prev_end = 0
    for item in ranges:
        start, end = int(item[0]), int(item[1])
        if start >= end:
            raise RangeValidationError(f"empty or reversed range [{start}, {end})")
        if start < 0 or end > nsamples:
            raise RangeValidationError(
                f"range [{start}, {end}) outside signal of {nsamples} samples"
            )
        if start < prev_end:
            raise RangeValidationError(
                f"range [{start}, {end}) overlaps or precedes previous range ending at {prev_end}"
            )
        out.append(StickyRange(start, end))
        prev_end = end
    return out


def ranges_mask(ranges: Sequence[StickyRange], nsamples: int) -> np.ndarray:
    """Boolean mask that is True on every sample covered by ``ranges``."""
    mask = np.zeros(nsamples, dtype=bool)
    for rng in ranges:
        mask[rng.start : rng.end] = True
    return mask
