"""Unit tests for the ordered field registry."""

from __future__ import annotations

from mockbuilder.config import ResolvedBuildOptions
from mockbuilder.fields import FieldDefinition, FieldRegistry
from mockbuilder.generators import Counter, counter_generator

OPTIONS = ResolvedBuildOptions(deep_copy=True, skip_validation=True)


class TestFieldRegistry:
    """Tests for FieldRegistry ordering and merging."""

    def test_empty_registry(self) -> None:
        """New registry has no fields."""
        registry = FieldRegistry()

        assert len(registry) == 0
        assert registry.names() == []

    def test_add_value_appends_in_order(self) -> None:
        """Fields keep declaration order."""
        registry = FieldRegistry()
        registry.add_value("b", 1)
        registry.add_value("a", 2)

        assert registry.names() == ["b", "a"]

    def test_duplicate_names_are_kept(self) -> None:
        """Declaring a name twice keeps both definitions."""
        registry = FieldRegistry()
        registry.add_value("id", 1)
        registry.add_value("id", 2)

        definitions = list(registry)

        assert registry.names() == ["id", "id"]
        assert [d.generator({}, None, OPTIONS) for d in definitions] == [1, 2]

    def test_extend_uses_template_order(self) -> None:
        """Template entries are appended in the template's own order."""
        registry = FieldRegistry()
        registry.add_value("x", 0)
        registry.extend({"z": 1, "x": 2, "y": 3})

        assert registry.names() == ["x", "z", "x", "y"]

    def test_extend_callables_become_factories(self) -> None:
        """Callable template values are resolved as factories."""
        registry = FieldRegistry()
        registry.extend({"n": lambda: 123})

        (definition,) = list(registry)

        assert definition.generator({}, None, OPTIONS) == 123

    def test_extend_empty_template(self) -> None:
        """Empty templates add nothing."""
        registry = FieldRegistry()
        registry.extend({})

        assert len(registry) == 0

    def test_add_definition_with_counter(self) -> None:
        """Prepared definitions keep their counter."""
        counter = Counter(start=5)
        registry = FieldRegistry()
        registry.add(FieldDefinition(name="id", generator=counter_generator(counter), counter=counter))

        (definition,) = list(registry)

        assert definition.counter is counter
        assert definition.generator({}, None, OPTIONS) == 5
        assert counter.current == 6

    def test_plain_definition_has_no_counter(self) -> None:
        """Fields from values have no counter attached."""
        registry = FieldRegistry()
        registry.add_value("name", "Alice")

        (definition,) = list(registry)

        assert definition.counter is None
        assert definition.name == "name"
