"""Named component lookup used by filters at configuration time."""

from __future__ import annotations

from typing import Dict, Optional, Type, TypeVar

from ..errors import ConfigurationError

T = TypeVar("T")


class ComponentRegistry:
    """
    Maps component names (e.g. "AnodePlane", "OmniChannelNoiseDB") to
    instances shared by the filters of one pipeline.
    """

    def __init__(self) -> None:
        self._components: Dict[str, object] = {}

    def register(self, name: str, component: object) -> None:
        """Register ``component`` under ``name``, replacing any previous entry."""
        if not name:
            raise ValueError("component name must be a non-empty string")
        self._components[name] = component

    def find(self, name: str, kind: Optional[Type[T]] = None) -> T:
        """
        Resolve a component by name.

        Args:
            name: Registered name.
            kind: Expected type; checked with isinstance when given.

        Raises:
            ConfigurationError: If nothing is registered under ``name`` or
                it is not an instance of ``kind``.
        """
        try:
            component = self._components[name]
        except KeyError:
            raise ConfigurationError(
                f"No component named '{name}'. Registered: {sorted(self._components)}"
            ) from None
        if kind is not None and not isinstance(component, kind):
            raise ConfigurationError(
                f"Component '{name}' is a {type(component).__name__}, expected {kind.__name__}"
            )
        return component  # type: ignore[return-value]

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def names(self) -> list[str]:
        return sorted(self._components)
