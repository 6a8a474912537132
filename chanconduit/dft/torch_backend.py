"""DFT backend built on ``torch.fft``.

Arrays cross the backend boundary as NumPy arrays; the transforms
themselves run on the configured torch device, which lets a hosting
pipeline push channel spectra onto a GPU without changing any caller.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import torch

from .base import DFT, _check_axis
from .device import Device, default_device, device as device_factory


class TorchDFT(DFT):
    """Transforms computed with ``torch.fft`` on a :class:`Device`."""

    def __init__(self, device: Device | str | None = None) -> None:
        """
        Args:
            device: Device instance, device name ("cpu", "cuda") or None
                for the CPU.
        """
        if device is None:
            device = default_device()
        elif isinstance(device, str):
            device = device_factory(device)
        elif not isinstance(device, Device):
            raise TypeError(f"device must be Device, str, or None, got {type(device)}")
        self.device = device

    def _to_tensor(self, arr: np.ndarray) -> torch.Tensor:
        data = np.ascontiguousarray(arr, dtype=np.complex128)
        tensor = torch.from_numpy(data.copy())
        return tensor.to(device=self.device.as_torch_device(), dtype=self.device.complex_dtype)

    @staticmethod
    def _to_numpy(tensor: torch.Tensor) -> np.ndarray:
        return tensor.detach().cpu().numpy().astype(np.complex128, copy=False)

    def fwd1d(self, seq: np.ndarray) -> np.ndarray:
        return self._to_numpy(torch.fft.fft(self._to_tensor(seq)))

    def inv1d(self, seq: np.ndarray) -> np.ndarray:
        return self._to_numpy(torch.fft.ifft(self._to_tensor(seq)))

    def fwd1b(self, arr: np.ndarray, axis: int) -> np.ndarray:
        arr = np.asarray(arr, dtype=complex)
        _check_axis(arr, axis)
        return self._to_numpy(torch.fft.fft(self._to_tensor(arr), dim=axis))

    def inv1b(self, arr: np.ndarray, axis: int) -> np.ndarray:
        arr = np.asarray(arr, dtype=complex)
        _check_axis(arr, axis)
        return self._to_numpy(torch.fft.ifft(self._to_tensor(arr), dim=axis))

    def fwd2d(self, arr: np.ndarray) -> np.ndarray:
        arr = np.asarray(arr, dtype=complex)
        _check_axis(arr, 0)
        return self._to_numpy(torch.fft.fft2(self._to_tensor(arr)))

    def inv2d(self, arr: np.ndarray) -> np.ndarray:
        arr = np.asarray(arr, dtype=complex)
        _check_axis(arr, 0)
        return self._to_numpy(torch.fft.ifft2(self._to_tensor(arr)))

    def __repr__(self) -> str:
        return f"TorchDFT(device={self.device.name!r})"


def make_dft(backend: Optional[str] = None, device: Device | str | None = None) -> DFT:
    """
    Build a transform backend by name.

    Args:
        backend: "numpy" (default) or "torch".
        device: Device for the torch backend; ignored for numpy.

    Raises:
        ValueError: If the backend name is unknown.
    """
    from .numpy_backend import NumpyDFT

    name = (backend or "numpy").lower()
    if name == "numpy":
        return NumpyDFT()
    if name == "torch":
        return TorchDFT(device=device)
    raise ValueError(f"Unsupported DFT backend '{backend}'. Supported: ['numpy', 'torch']")
