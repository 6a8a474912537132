"""Ordered chains of channel filters."""

from __future__ import annotations

from typing import Iterable, List, MutableMapping

import numpy as np

from ..logging import get_logger
from .base import BatchResult, ChannelFilter
from .mask import ChannelMaskMap

logger = get_logger(__name__)


class FilterPipeline:
    """
    Apply several channel filters in sequence.

    The usual order is sticky code mitigation, noise subtraction, then
    relative gain correction. Masks of all stages are merged into one
    map; no stage's ranges overwrite another's.
    """

    def __init__(self, stages: Iterable[ChannelFilter] = ()) -> None:
        self.stages: List[ChannelFilter] = list(stages)

    def add(self, stage: ChannelFilter) -> "FilterPipeline":
        """Append a stage and return self."""
        self.stages.append(stage)
        return self

    def apply_one(self, channel: int, signal: np.ndarray) -> ChannelMaskMap:
        """Run every stage on one channel in place."""
        masks = ChannelMaskMap()
        for stage in self.stages:
            masks.merge(stage.apply_one(channel, signal))
        return masks

    def apply_many(self, chansig: MutableMapping[int, np.ndarray]) -> BatchResult:
        """
        Run every stage over a group of channels.

        A channel that fails in one stage is recorded in the result and
        skipped by the later stages; its waveform keeps the output of the
        last stage that succeeded.
        """
        result = BatchResult()
        pending = dict(chansig)
        for stage in self.stages:
            stage_result = stage.apply_many(pending)
            result.masks.merge(stage_result.masks)
            for channel, exc in stage_result.errors.items():
                result.errors[channel] = exc
                chansig[channel] = pending.pop(channel)
        chansig.update(pending)
        if result.errors:
            logger.warning("pipeline: %d of %d channels failed", len(result.errors), len(chansig))
        return result

    def __len__(self) -> int:
        return len(self.stages)

    def __repr__(self) -> str:
        names = ", ".join(type(stage).__name__ for stage in self.stages)
        return f"FilterPipeline([{names}])"
