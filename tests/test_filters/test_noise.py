"""Tests for the OneChannelNoise filter."""

import numpy as np
import pytest

from chanconduit.components import ComponentRegistry, OmniChannelNoiseDB
from chanconduit.dsp import fwd_r2c
from chanconduit.errors import ConfigurationError, NumericalError
from chanconduit.filters import OneChannelNoise, adaptive_baseline
from chanconduit.sticky import fft_scaling


def _registry(anode, **db):
    default = {"min_rms_cut": 0.0, "max_rms_cut": 1e6}
    default.update(db.pop("default", {}))
    reg = ComponentRegistry()
    reg.register("AnodePlane", anode)
    reg.register("OmniChannelNoiseDB", OmniChannelNoiseDB(default=default, **db))
    return reg


def _complete(n=128, offset=3.0):
    """Signal with a full response: a strong tone at bin 5 rises above bins 1-4."""
    t = np.arange(n) / n
    return offset + 10.0 * np.sin(2 * np.pi * 5 * t) + np.sin(2 * np.pi * 12 * t)


def _partial(n=256):
    """Exponential tail: low-frequency magnitudes fall off steadily."""
    return 50.0 * np.exp(-np.arange(n) / 20.0)


def test_signals_classify_as_expected(registry, dft):
    filt = OneChannelNoise(registry)
    assert not filt.check_partial(fwd_r2c(dft, _complete()))
    assert filt.check_partial(fwd_r2c(dft, _partial()))


def test_baseline_is_removed(registry):
    filt = OneChannelNoise(registry)
    signal = _complete()
    masks = filt.apply_one(4, signal)

    assert abs(np.median(signal)) < 1e-9
    assert len(masks) == 0


def test_noise_filter_removes_tone(anode):
    n = 128
    notch = np.ones(n)
    notch[[5, n - 5]] = 0.0
    filt = OneChannelNoise(_registry(anode, channels={4: {"noise_filter": notch}}))

    signal = _complete(n)
    filt.apply_one(4, signal)
    expected = np.sin(2 * np.pi * 12 * np.arange(n) / n)
    np.testing.assert_allclose(signal, expected, atol=1e-9)


def test_rcrc_divided_only_when_response_complete(anode):
    reg = _registry(anode, default={"rcrc": np.zeros(256)})
    filt = OneChannelNoise(reg)

    # partial channels skip the division and never see the singular response
    filt.apply_one(4, _partial())

    with pytest.raises(NumericalError, match="identically zero"):
        filt.apply_one(4, _complete(256))


def test_rcrc_division(anode, dft):
    n = 128
    rcrc = np.full(n, 2.0, dtype=complex)
    filt = OneChannelNoise(_registry(anode, default={"rcrc": rcrc}))

    signal = _complete(n, offset=0.0)
    expected = signal / 2.0
    expected -= np.median(expected)
    filt.apply_one(5, signal)
    np.testing.assert_allclose(signal, expected, atol=1e-9)


def test_filter_spectrum_length_checked(anode):
    filt = OneChannelNoise(_registry(anode, default={"noise_filter": np.ones(64)}))
    with pytest.raises(ValueError, match="bins"):
        filt.apply_one(4, _complete(128))


def test_response_replacement_identity(anode):
    response = (np.array([1.0, 0.5]), np.array([1.0, 0.5]))
    filt = OneChannelNoise(_registry(anode, default={"response": response}))

    signal = _complete(offset=0.0)
    expected = signal - np.median(signal)
    filt.apply_one(4, signal)
    np.testing.assert_allclose(signal, expected, atol=1e-9)


def test_partial_induction_channel_masked(registry):
    filt = OneChannelNoise(registry)
    n = 256

    masks = filt.apply_one(0, _partial(n))
    assert masks.ranges("lf_noisy", 0) == [(0, n)]

    masks = filt.apply_one(4, _partial(n))
    assert "lf_noisy" not in masks


def test_partial_channel_uses_moving_baseline(registry):
    filt = OneChannelNoise(registry, adaptive_window=5)
    signal = _partial()
    filt.apply_one(4, signal)
    # the slow tail is flattened much more than a constant offset could
    assert np.max(np.abs(signal)) < 0.5 * np.ptp(_partial())


def test_rms_cut_masks_noisy(anode):
    reg = _registry(anode, default={"max_rms_cut": 0.5}, channels={5: {"max_rms_cut": 100.0}})
    filt = OneChannelNoise(reg)

    masks = filt.apply_one(4, _complete())
    assert masks.ranges("noisy", 4) == [(0, 128)]

    masks = filt.apply_one(5, _complete())
    assert "noisy" not in masks


def test_dead_channel_below_min_cut(anode):
    filt = OneChannelNoise(_registry(anode, default={"min_rms_cut": 1.0}))
    masks = filt.apply_one(4, np.full(64, 7.0))
    assert masks.ranges("noisy", 4) == [(0, 64)]


def test_resample_from_config(registry, dft):
    n, m = 150, 100
    x = np.zeros(n)
    x[:m] = np.cos(2 * np.pi * 5 * np.arange(m) / m)

    filt = OneChannelNoise(registry, resmp=[{"channels": [4, 5], "sample_from": m}])
    assert filt.resample_factors == {4: m, 5: m}

    expected = fft_scaling(dft, x[:m], n)
    expected -= expected.mean()
    expected -= np.median(expected)

    filt.apply_one(4, x)
    np.testing.assert_allclose(x, expected, atol=1e-9)


def test_resample_from_database(anode):
    filt = OneChannelNoise(_registry(anode, channels={2: {"resample_factor": 90}}))
    assert filt.resample_factors == {2: 90}


def test_resample_longer_than_signal(registry):
    filt = OneChannelNoise(registry, resmp=[{"channels": [4], "sample_from": 200}])
    with pytest.raises(ValueError, match="exceeds"):
        filt.apply_one(4, _complete(128))


@pytest.mark.parametrize(
    "options",
    [
        {"nfreqs": 0},
        {"adaptive_window": 0},
        {"rcrc_floor": 0.0},
        {"resmp": [{"channels": [1]}]},
        {"resmp": [{"channels": [1], "sample_from": 0}]},
        {"resmp": [{"channels": 4, "sample_from": 100}]},
        {"resmp": [{"channels": [4], "sample_from": "all"}]},
        {"noisedb": "Missing"},
    ],
)
def test_bad_configuration(registry, options):
    with pytest.raises(ConfigurationError):
        OneChannelNoise(registry, **options)


def test_wrong_component_type(anode):
    reg = ComponentRegistry()
    reg.register("AnodePlane", anode)
    reg.register("OmniChannelNoiseDB", anode)
    with pytest.raises(ConfigurationError, match="expected"):
        OneChannelNoise(reg)


def test_adaptive_baseline():
    np.testing.assert_allclose(adaptive_baseline(np.full(30, 4.0), 3), 4.0)

    step = np.r_[np.zeros(20), np.ones(20)]
    base = adaptive_baseline(step, 2)
    assert base.shape == step.shape
    np.testing.assert_array_equal(base[:18], 0.0)
    np.testing.assert_array_equal(base[22:], 1.0)

    spiky = np.zeros(21)
    spiky[10] = 100.0
    np.testing.assert_array_equal(adaptive_baseline(spiky, 3), 0.0)
