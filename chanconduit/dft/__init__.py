"""Pluggable discrete Fourier transform backends."""

from .base import DFT
from .device import Device, default_device, device
from .numpy_backend import NumpyDFT
from .torch_backend import TorchDFT, make_dft

__all__ = [
    "DFT",
    "NumpyDFT",
    "TorchDFT",
    "make_dft",
    "Device",
    "device",
    "default_device",
]
