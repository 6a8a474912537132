"""Pytest configuration and shared fixtures for Channel Conduit tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- A NumPy transform backend and a populated component registry
"""

import os

import numpy as np
import pytest
import torch

from chanconduit.components import ComponentRegistry, MappedAnodePlane, OmniChannelNoiseDB
from chanconduit.dft import NumpyDFT


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Set global numpy and torch seeds before every test."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture
def dft() -> NumpyDFT:
    """NumPy transform backend."""
    return NumpyDFT()


@pytest.fixture
def anode() -> MappedAnodePlane:
    """Six channels: 0-1 on plane U, 2-3 on plane V, 4-5 on the collection plane."""
    return MappedAnodePlane({0: 0, 1: 0, 2: 1, 3: 1, 4: 2, 5: 2})


@pytest.fixture
def noisedb() -> OmniChannelNoiseDB:
    """Noise database with wide RMS cuts and no filters."""
    return OmniChannelNoiseDB(default={"min_rms_cut": 0.0, "max_rms_cut": 1e6})


@pytest.fixture
def registry(anode, noisedb) -> ComponentRegistry:
    """Registry holding ``anode`` and ``noisedb`` under their default names."""
    reg = ComponentRegistry()
    reg.register("AnodePlane", anode)
    reg.register("OmniChannelNoiseDB", noisedb)
    return reg
