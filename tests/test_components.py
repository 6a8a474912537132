"""Tests for the anode plane, noise database and component registry."""

import numpy as np
import pytest

from chanconduit.components import (
    AnodePlane,
    ChannelNoiseInfo,
    ComponentRegistry,
    MappedAnodePlane,
    OmniChannelNoiseDB,
)
from chanconduit.errors import ConfigurationError


def test_mapped_anode(anode):
    assert anode.channels() == [0, 1, 2, 3, 4, 5]
    assert anode.plane_index(2) == 1
    assert anode.is_induction(0)
    assert anode.is_induction(3)
    assert not anode.is_induction(5)
    with pytest.raises(KeyError):
        anode.plane_index(42)


def test_mapped_anode_rejects_bad_plane():
    with pytest.raises(ValueError, match="plane index"):
        MappedAnodePlane({0: 3})


def test_noisedb_defaults():
    db = OmniChannelNoiseDB()
    assert db.info(7) == ChannelNoiseInfo()
    assert db.min_rms_cut(7) == 1.0
    assert db.max_rms_cut(7) == 5.0
    assert db.rcrc(7) is None
    assert db.response(7) is None
    assert db.relative_gain(7) is None
    assert db.extra_sticky_codes(7) == ()


def test_noisedb_layering():
    rcrc = np.ones(8)
    db = OmniChannelNoiseDB(
        default={"max_rms_cut": 20.0},
        groups=[([1, 2], {"rcrc": rcrc, "baseline_rms": 3.0})],
        channels={2: {"baseline_rms": 4.0, "extra_sticky_codes": [63, 0]}},
    )
    assert db.max_rms_cut(0) == 20.0
    assert db.rcrc(0) is None
    assert db.rcrc(1) is rcrc
    assert db.baseline_rms(1) == 3.0
    # per-channel entries override groups, groups override defaults
    assert db.baseline_rms(2) == 4.0
    assert db.rcrc(2) is rcrc
    assert db.max_rms_cut(2) == 20.0
    assert db.extra_sticky_codes(2) == (63, 0)


def test_noisedb_unknown_field():
    with pytest.raises(ValueError, match="Unknown noise database fields"):
        OmniChannelNoiseDB(channels={0: {"gain": 1.0}})


def test_registry(anode):
    reg = ComponentRegistry()
    reg.register("AnodePlane", anode)

    assert "AnodePlane" in reg
    assert reg.names() == ["AnodePlane"]
    assert reg.find("AnodePlane") is anode
    assert reg.find("AnodePlane", AnodePlane) is anode

    with pytest.raises(ConfigurationError, match="No component"):
        reg.find("Other")
    with pytest.raises(ConfigurationError, match="expected"):
        reg.find("AnodePlane", OmniChannelNoiseDB)
    with pytest.raises(ValueError):
        reg.register("", anode)


def test_registry_replaces(anode):
    reg = ComponentRegistry()
    reg.register("AnodePlane", anode)
    other = MappedAnodePlane({9: 2})
    reg.register("AnodePlane", other)
    assert reg.find("AnodePlane") is other
