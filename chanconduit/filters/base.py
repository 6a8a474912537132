"""Common interface of the per-channel correction filters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field, fields
from typing import Any, ClassVar, Dict, List, Mapping, MutableMapping, Optional

import numpy as np

from ..components.registry import ComponentRegistry
from ..dft.base import DFT
from ..dft.numpy_backend import NumpyDFT
from ..errors import ConfigurationError
from ..logging import get_logger
from .mask import ChannelMaskMap

logger = get_logger(__name__)


@dataclass
class BatchResult:
    """
    Outcome of filtering a group of channels.

    Attributes:
        masks: Ranges altered on the channels that succeeded.
        errors: Exception raised for each channel that failed; the signal
            of a failed channel is left as it was before the call.
    """

    masks: ChannelMaskMap = field(default_factory=ChannelMaskMap)
    errors: Dict[int, Exception] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def failed_channels(self) -> List[int]:
        return sorted(self.errors)


class ChannelFilter(ABC):
    """
    A filter applied to one channel's waveform at a time.

    Subclasses declare a frozen dataclass of options in ``config_class``
    and implement :meth:`_configure` (resolve components and build the
    per-channel lookup tables) and :meth:`apply_one`. Lookup tables are
    built once per configuration and only read while filtering, so a
    configured filter can be shared by threads working on different
    channels.

    Args:
        registry: Source of the named components (anode, noise database).
        dft: Transform backend (default: :class:`NumpyDFT`).
        **options: Overrides of the defaults in ``config_class``.

    Raises:
        ConfigurationError: If an option is unknown or invalid or a named
            component cannot be resolved.
    """

    config_class: ClassVar[type]

    def __init__(
        self,
        registry: ComponentRegistry,
        dft: Optional[DFT] = None,
        **options: Any,
    ) -> None:
        self.registry = registry
        self.dft = dft if dft is not None else NumpyDFT()
        self._config = self.config_class()
        self.configure(options)

    @property
    def config(self):
        """The active options (a frozen dataclass instance)."""
        return self._config

    def default_configuration(self) -> Dict[str, Any]:
        """Default options as a plain dict, without applying anything."""
        return asdict(self.config_class())

    def configure(self, config: Mapping[str, Any]) -> None:
        """
        Merge ``config`` over the active options and rebuild lookup tables.

        The filter keeps its previous configuration if this raises.
        """
        known = {f.name for f in fields(self.config_class)}
        unknown = set(config) - known
        if unknown:
            raise ConfigurationError(
                f"{type(self).__name__}: unknown options {sorted(unknown)}; "
                f"supported: {sorted(known)}"
            )

        merged = {**asdict(self._config), **dict(config)}
        try:
            new_config = self.config_class(**merged)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"{type(self).__name__}: {exc}") from exc

        self._configure(new_config)
        self._config = new_config
        logger.info("%s configured: %s", type(self).__name__, new_config)

    @abstractmethod
    def _configure(self, config) -> None:
        """Resolve components and build tables for ``config``."""

    @abstractmethod
    def apply_one(self, channel: int, signal: np.ndarray) -> ChannelMaskMap:
        """
        Filter ``signal`` of ``channel`` in place.

        Returns:
            Ranges of ``signal`` this filter altered.
        """

    def apply_many(self, chansig: MutableMapping[int, np.ndarray]) -> BatchResult:
        """
        Filter a group of channels independently.

        Each channel is filtered exactly as :meth:`apply_one` would, on a
        working copy that replaces the original only on success. A
        failing channel is logged and recorded in the result; the others
        are still processed. Floating point ndarrays keep their dtype and
        are updated in place; anything else is replaced by a float64 array.
        """
        result = BatchResult()
        for channel, signal in chansig.items():
            work = np.array(signal, copy=True)
            if not np.issubdtype(work.dtype, np.floating):
                work = work.astype(float)
            try:
                masks = self.apply_one(channel, work)
            except Exception as exc:
                logger.warning("%s: channel %s failed: %s", type(self).__name__, channel, exc)
                result.errors[channel] = exc
                continue

            if isinstance(signal, np.ndarray) and signal.shape == work.shape and signal.dtype == work.dtype:
                signal[:] = work
            else:
                chansig[channel] = work
            result.masks.merge(masks)
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._config})"
