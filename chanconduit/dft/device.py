"""Compute device selection for the PyTorch transform backend."""

from __future__ import annotations

import torch


class Device:
    """
    A named PyTorch device plus the complex dtype transforms run in.

    Instances are treated as immutable once built.
    """

    def __init__(
        self,
        name: str,
        torch_device: torch.device,
        complex_dtype: torch.dtype = torch.complex128,
    ) -> None:
        """
        Initialize a Device.

        Args:
            name: Logical device name ("cpu" or "cuda").
            torch_device: Underlying PyTorch device.
            complex_dtype: dtype used for spectra on this device.
        """
        self.name = name
        self.torch_device = torch_device
        self.complex_dtype = complex_dtype

    def __repr__(self) -> str:
        return (
            f"Device(name={self.name!r}, torch_device={self.torch_device}, "
            f"complex_dtype={self.complex_dtype})"
        )

    def as_torch_device(self) -> torch.device:
        """Return the underlying PyTorch device."""
        return self.torch_device


SUPPORTED_DEVICES = ("cpu", "cuda")


def device(name: str) -> Device:
    """
    Build a Device from its name.

    Args:
        name: "cpu", or "cuda" when a CUDA device is present.

    Returns:
        A Device computing in complex128.

    Raises:
        RuntimeError: If "cuda" is requested but CUDA is not available.
        ValueError: If the name is not one of SUPPORTED_DEVICES.
    """
    if name == "cpu":
        return Device("cpu", torch.device("cpu"))
    if name == "cuda":
        if not torch.cuda.is_available():
            raise RuntimeError(
                "CUDA device requested but torch.cuda.is_available() is False"
            )
        return Device("cuda", torch.device("cuda"))
    raise ValueError(
        f"Unsupported device name: {name!r}. Supported devices: {list(SUPPORTED_DEVICES)}"
    )


def default_device() -> Device:
    """Return the CPU device."""
    return device("cpu")
