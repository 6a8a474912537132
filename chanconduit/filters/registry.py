"""Filter construction by type name."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Type

from ..components.registry import ComponentRegistry
from ..dft.base import DFT
from ..errors import ConfigurationError
from .base import ChannelFilter
from .gain import RelGainCalib
from .noise import OneChannelNoise
from .pipeline import FilterPipeline
from .sticky_code import RangeSource, StickyCodeMitig

FILTER_TYPES: Dict[str, Type[ChannelFilter]] = {
    "StickyCodeMitig": StickyCodeMitig,
    "OneChannelNoise": OneChannelNoise,
    "RelGainCalib": RelGainCalib,
}


def create_filter(
    type_name: str,
    registry: ComponentRegistry,
    dft: Optional[DFT] = None,
    range_source: Optional[RangeSource] = None,
    **options: Any,
) -> ChannelFilter:
    """
    Create a channel filter from its type name.

    Args:
        type_name: A key of FILTER_TYPES.
        registry: Component registry passed to the filter.
        dft: Transform backend passed to the filter.
        range_source: Sticky run locator, required by "StickyCodeMitig".
        **options: Filter options.

    Returns:
        The configured filter.

    Raises:
        ValueError: If the type name is not supported.
        ConfigurationError: If the filter cannot be configured.
    """
    try:
        cls = FILTER_TYPES[type_name]
    except KeyError:
        raise ValueError(
            f"Unsupported filter type '{type_name}'. Supported types: {sorted(FILTER_TYPES)}"
        ) from None

    if cls is StickyCodeMitig:
        if range_source is None:
            raise ConfigurationError("StickyCodeMitig needs a range_source")
        return StickyCodeMitig(registry, range_source, dft=dft, **options)
    return cls(registry, dft=dft, **options)


def build_pipeline(
    specs: Iterable[Mapping[str, Any]],
    registry: ComponentRegistry,
    dft: Optional[DFT] = None,
    range_source: Optional[RangeSource] = None,
) -> FilterPipeline:
    """
    Build a pipeline from ``[{"type": name, "data": {options}}, ...]``.

    Stages run in the order given. A missing ``"data"`` means defaults.
    """
    pipeline = FilterPipeline()
    for spec in specs:
        if "type" not in spec:
            raise ValueError(f"filter spec needs a 'type', got {dict(spec)!r}")
        options = dict(spec.get("data") or {})
        pipeline.add(
            create_filter(spec["type"], registry, dft=dft, range_source=range_source, **options)
        )
    return pipeline
