"""Ordered field definitions owned by a builder.

Fields are kept in declaration order and never deduplicated: declaring a
name twice keeps both definitions. Both generators run during a build and
the later assignment overwrites the earlier value, so side effects of the
earlier generator (advancing a counter, calling a factory) still happen.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from mockbuilder.generators import Counter, FieldGenerator, resolve_generator


@dataclass(frozen=True)
class FieldDefinition:
    """A named generator producing one key of the built object.

    Attributes:
        name: Key assigned in the built object
        generator: Normalized ``(partial, index, options)`` generator
        counter: Counter owned by this field, for ``increment()`` fields
    """

    name: str
    generator: FieldGenerator
    counter: Counter | None = None


class FieldRegistry:
    """Append-only sequence of FieldDefinitions.

    Example:
        >>> registry = FieldRegistry()
        >>> registry.add_value("id", 1)
        >>> registry.extend({"id": 2, "name": "Alice"})
        >>> registry.names()
        ['id', 'id', 'name']
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._fields: list[FieldDefinition] = []

    def add(self, definition: FieldDefinition) -> None:
        """Append a field definition."""
        self._fields.append(definition)

    def add_value(self, name: str, value: Any) -> None:
        """Append a field from a constant or factory.

        Args:
            name: Field name
            value: Constant, or callable invoked at build time
        """
        self.add(FieldDefinition(name=name, generator=resolve_generator(value)))

    def extend(self, template: Mapping[str, Any]) -> None:
        """Append one field per template entry, in the template's order.

        Args:
            template: Field name to constant-or-factory mapping
        """
        for name, value in template.items():
            self.add_value(name, value)

    def names(self) -> list[str]:
        """Field names in declaration order, repeats included."""
        return [definition.name for definition in self._fields]

    def __iter__(self) -> Iterator[FieldDefinition]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)
