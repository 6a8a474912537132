"""Tests for FilterPipeline and the filter factory."""

import numpy as np
import pytest

from chanconduit.components import ComponentRegistry, OmniChannelNoiseDB
from chanconduit.errors import ConfigurationError, RangeValidationError
from chanconduit.filters import (
    FILTER_TYPES,
    FilterPipeline,
    OneChannelNoise,
    RelGainCalib,
    StickyCodeMitig,
    build_pipeline,
    create_filter,
)


def _ranges(channel, signal, codes):
    if channel == 3:
        return [(0, 10 * len(signal))]
    return [(40, 43)]


def _waveform(n=128):
    t = np.arange(n) / n
    signal = 10.0 * np.sin(2 * np.pi * 5 * t) + np.sin(2 * np.pi * 12 * t)
    signal[40:43] = 15.0
    return signal


SPECS = [
    {"type": "StickyCodeMitig", "data": {"stky_sig_like_val": 15.0}},
    {"type": "OneChannelNoise"},
    {"type": "RelGainCalib", "data": {"rel_gain": [1.2] * 6}},
]


def test_build_pipeline_order(registry):
    pipeline = build_pipeline(SPECS, registry, range_source=_ranges)
    assert len(pipeline) == 3
    assert [type(s) for s in pipeline.stages] == [StickyCodeMitig, OneChannelNoise, RelGainCalib]
    assert repr(pipeline) == "FilterPipeline([StickyCodeMitig, OneChannelNoise, RelGainCalib])"


def test_batch_matches_single_channel(registry):
    pipeline = build_pipeline(SPECS, registry, range_source=_ranges)
    channels = [0, 2, 4, 5]

    singles = {}
    single_masks = None
    for ch in channels:
        signal = _waveform()
        masks = pipeline.apply_one(ch, signal)
        singles[ch] = signal
        single_masks = masks if single_masks is None else single_masks.merge(masks)

    chansig = {ch: _waveform() for ch in channels}
    result = pipeline.apply_many(chansig)

    assert result.ok
    for ch in channels:
        np.testing.assert_array_equal(chansig[ch], singles[ch])
    assert result.masks == single_masks
    assert result.masks.channels("sticky") == channels


def test_failing_channel_is_isolated(registry):
    pipeline = build_pipeline(SPECS, registry, range_source=_ranges)
    chansig = {0: _waveform(), 3: _waveform(), 4: _waveform()}
    result = pipeline.apply_many(chansig)

    assert result.failed_channels == [3]
    assert isinstance(result.errors[3], RangeValidationError)
    # the failing channel is left as it was before the failing stage
    np.testing.assert_array_equal(chansig[3], _waveform())
    assert 3 not in result.masks.channels("sticky")

    expected = _waveform()
    pipeline.apply_one(0, expected)
    np.testing.assert_array_equal(chansig[0], expected)


def test_masks_from_all_stages_are_kept(anode):
    reg = ComponentRegistry()
    reg.register("AnodePlane", anode)
    db = OmniChannelNoiseDB(default={"min_rms_cut": 0.0, "max_rms_cut": 0.1})
    reg.register("OmniChannelNoiseDB", db)

    pipeline = build_pipeline(SPECS, reg, range_source=_ranges)
    result = pipeline.apply_many({4: _waveform()})

    assert result.masks.ranges("sticky", 4) == [(40, 43)]
    assert result.masks.ranges("noisy", 4) == [(0, 128)]


def test_empty_pipeline_is_identity():
    pipeline = FilterPipeline()
    signal = _waveform()
    masks = pipeline.apply_one(0, signal)
    np.testing.assert_array_equal(signal, _waveform())
    assert len(masks) == 0
    assert pipeline.apply_many({0: signal}).ok


def test_add_returns_pipeline(registry):
    pipeline = FilterPipeline().add(RelGainCalib(registry))
    assert len(pipeline) == 1


def test_create_filter(registry):
    filt = create_filter("RelGainCalib", registry, gain_def=1.5)
    assert isinstance(filt, RelGainCalib)
    assert filt.config.gain_def == 1.5
    assert set(FILTER_TYPES) == {"StickyCodeMitig", "OneChannelNoise", "RelGainCalib"}


def test_create_filter_unknown_type(registry):
    with pytest.raises(ValueError, match="Unsupported filter type"):
        create_filter("Wiener", registry)


def test_create_sticky_without_source(registry):
    with pytest.raises(ConfigurationError, match="range_source"):
        create_filter("StickyCodeMitig", registry)


def test_build_pipeline_needs_type(registry):
    with pytest.raises(ValueError, match="type"):
        build_pipeline([{"data": {}}], registry)


def test_batch_matches_single_channel_float32(registry):
    pipeline = build_pipeline(SPECS, registry, range_source=_ranges)

    single = _waveform().astype(np.float32)
    pipeline.apply_one(4, single)

    batch = _waveform().astype(np.float32)
    chansig = {4: batch}
    assert pipeline.apply_many(chansig).ok

    assert chansig[4] is batch
    assert batch.dtype == np.float32
    np.testing.assert_array_equal(batch, single)
