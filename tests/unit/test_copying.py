"""Unit tests for structural cloning of generated values."""

from __future__ import annotations

import re
import weakref
from collections import OrderedDict
from concurrent.futures import Future
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from mockbuilder.copying import clone


@dataclass
class Address:
    """Arbitrary class instance used as an opaque value."""

    city: str


class TestCloneContainers:
    """Plain containers are rebuilt recursively."""

    def test_list_is_new_object(self) -> None:
        """Cloned list is equal but not identical."""
        original = [1, 2, 3]
        copied = clone(original)

        assert copied == original
        assert copied is not original

    def test_dict_is_new_object(self) -> None:
        """Cloned dict keeps keys and values but is a new object."""
        original = {"a": 1, "b": "two"}
        copied = clone(original)

        assert copied == original
        assert copied is not original

    def test_nested_containers_are_copied(self) -> None:
        """Nested lists and dicts are copied at every level."""
        original = {"profile": {"tags": ["x", "y"]}, "items": [{"id": 1}]}
        copied = clone(original)

        assert copied == original
        assert copied["profile"] is not original["profile"]
        assert copied["profile"]["tags"] is not original["profile"]["tags"]
        assert copied["items"][0] is not original["items"][0]

    def test_mutating_copy_leaves_original(self) -> None:
        """Changes to the copy do not leak into the source value."""
        original = {"arr": [1, 2]}
        copied = clone(original)

        copied["arr"].append(3)
        copied["new"] = True

        assert original == {"arr": [1, 2]}

    def test_tuple_items_are_copied(self) -> None:
        """Tuples are rebuilt so mutable items inside are not shared."""
        inner = [1]
        original = (inner, "a")
        copied = clone(original)

        assert copied == original
        assert isinstance(copied, tuple)
        assert copied[0] is not inner

    def test_empty_containers(self) -> None:
        """Empty list and dict clone to new empty containers."""
        empty_list: list[int] = []
        empty_dict: dict[str, int] = {}

        assert clone(empty_list) == []
        assert clone(empty_list) is not empty_list
        assert clone(empty_dict) == {}
        assert clone(empty_dict) is not empty_dict

    def test_self_referencing_list(self) -> None:
        """A list containing itself is reproduced, not recursed forever."""
        original: list[object] = [1]
        original.append(original)

        copied = clone(original)

        assert copied is not original
        assert copied[1] is copied

    def test_shared_child_copied_once(self) -> None:
        """A container reached twice within one value is copied once."""
        shared = {"name": "Sam"}
        copied = clone([shared, shared])

        assert copied[0] is copied[1]
        assert copied[0] is not shared


class TestCloneOpaqueValues:
    """Everything except plain containers is returned unchanged."""

    @pytest.mark.parametrize(
        "value",
        [
            0,
            1.5,
            "text",
            True,
            None,
            10**30,
            Decimal("1.10"),
            b"bytes",
        ],
    )
    def test_primitives_pass_through(self, value: object) -> None:
        """Atomic values are returned as-is."""
        assert clone(value) is value

    def test_datetime_same_reference(self) -> None:
        """Temporal values are atomic."""
        now = datetime.now(tz=timezone.utc)
        today = date.today()

        assert clone(now) is now
        assert clone(today) is today

    def test_pattern_same_reference(self) -> None:
        """Compiled patterns are atomic."""
        pattern = re.compile(r"^a+$")
        assert clone(pattern) is pattern

    def test_callable_same_reference(self) -> None:
        """Functions are atomic."""

        def fn() -> int:
            return 42

        assert clone(fn) is fn

    def test_sets_same_reference(self) -> None:
        """Set collections are atomic."""
        values = {1, 2}
        frozen = frozenset({3})

        assert clone(values) is values
        assert clone(frozen) is frozen

    def test_weak_collection_same_reference(self) -> None:
        """Weak-reference collections are atomic."""
        weak = weakref.WeakValueDictionary()
        assert clone(weak) is weak

    def test_exception_same_reference(self) -> None:
        """Error objects are atomic."""
        error = ValueError("boom")
        assert clone(error) is error

    def test_future_same_reference(self) -> None:
        """Pending computations are atomic."""
        future: Future[int] = Future()
        assert clone(future) is future

    def test_class_instance_same_reference(self) -> None:
        """Arbitrary objects are not copied."""
        address = Address(city="Paris")
        assert clone(address) is address

    def test_dict_subclass_same_reference(self) -> None:
        """Only exact dicts are cloned, subclasses are atomic."""
        ordered = OrderedDict(a=1)
        assert clone(ordered) is ordered

    def test_opaque_value_inside_container_is_shared(self) -> None:
        """Opaque values nested in a cloned container keep their identity."""
        now = datetime.now(tz=timezone.utc)
        copied = clone({"created": now, "tags": {"a"}})

        assert copied["created"] is now
