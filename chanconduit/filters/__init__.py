"""Per-channel correction filters and their pipeline."""

from .base import BatchResult, ChannelFilter
from .gain import RelGainCalib, RelGainCalibConfig
from .mask import ChannelMaskMap
from .noise import OneChannelNoise, OneChannelNoiseConfig, adaptive_baseline
from .pipeline import FilterPipeline
from .registry import FILTER_TYPES, build_pipeline, create_filter
from .sticky_code import RangeSource, StickyCodeMitig, StickyCodeMitigConfig

__all__ = [
    "ChannelFilter",
    "BatchResult",
    "ChannelMaskMap",
    "StickyCodeMitig",
    "StickyCodeMitigConfig",
    "RangeSource",
    "OneChannelNoise",
    "OneChannelNoiseConfig",
    "adaptive_baseline",
    "RelGainCalib",
    "RelGainCalibConfig",
    "FilterPipeline",
    "FILTER_TYPES",
    "create_filter",
    "build_pipeline",
]
