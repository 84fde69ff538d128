"""Named template registry.

A preset is a template (field name -> constant or factory) stored under a
name and merged into builders with ``MockBuilder.preset(name)``.

``default_registry`` is shared by every builder in the process unless a
builder is given its own registry. Nothing is namespaced or expired;
test suites sharing a process should use distinct names or call
``clear()`` between runs. Access is not synchronized.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

import structlog

from mockbuilder.errors import PresetNotFoundError

logger = structlog.get_logger(__name__)


class PresetRegistry:
    """Mapping of preset names to templates.

    Redefining a name silently replaces the earlier template. Templates
    are stored by reference, so later mutation of a template dict is seen
    by builders that apply the preset afterwards.

    Example:
        >>> registry = PresetRegistry()
        >>> registry.define("user", {"name": "Alice", "age": 30})
        >>> registry.get("user")
        {'name': 'Alice', 'age': 30}
        >>> "admin" in registry
        False
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._presets: dict[str, Mapping[str, Any]] = {}

    def define(self, name: str, template: Mapping[str, Any]) -> None:
        """Store ``template`` under ``name``, replacing any earlier definition.

        Args:
            name: Preset name
            template: Field name to constant-or-factory mapping
        """
        if name in self._presets:
            logger.debug("preset_redefined", preset=name, fields=len(template))
        else:
            logger.debug("preset_defined", preset=name, fields=len(template))
        self._presets[name] = template

    def get(self, name: str) -> Mapping[str, Any]:
        """Look up a preset template.

        Args:
            name: Preset name

        Returns:
            The registered template

        Raises:
            PresetNotFoundError: If no preset is registered under ``name``
        """
        try:
            return self._presets[name]
        except KeyError:
            raise PresetNotFoundError(
                name,
                list(self._presets),
                internal_details=(
                    f"lookup in {'default' if self is default_registry else 'builder'} "
                    f"registry holding {len(self._presets)} preset(s)"
                ),
            ) from None

    def names(self) -> list[str]:
        """Registered preset names in definition order."""
        return list(self._presets)

    def clear(self) -> None:
        """Remove every preset."""
        self._presets.clear()
        logger.debug("presets_cleared")

    def __contains__(self, name: object) -> bool:
        return name in self._presets

    def __len__(self) -> int:
        return len(self._presets)

    def __iter__(self) -> Iterator[str]:
        return iter(self._presets)


default_registry = PresetRegistry()
"""Process-wide registry used by builders created without ``registry=``."""


def define_preset(name: str, template: Mapping[str, Any]) -> None:
    """Define a preset in the process-wide registry.

    Example:
        >>> define_preset("user", {"name": "Alice", "age": 30})
        >>> MockBuilder().preset("user").build()
        {'name': 'Alice', 'age': 30}
    """
    default_registry.define(name, template)
