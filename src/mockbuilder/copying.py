"""Structural cloning of generated values.

Only plain containers are copied: ``list``, ``tuple`` and ``dict``
(exact types, not subclasses). Everything else is treated as atomic and
returned as the same object, including dates, compiled patterns,
callables, sets, weak collections, exceptions, futures, class instances
and primitives.
"""

from __future__ import annotations

from typing import Any


def clone(value: Any) -> Any:
    """Return a structural copy of ``value``.

    Lists, tuples and dicts are rebuilt recursively. Containers reached
    twice in the same call (including self references) are copied once,
    so cycles are reproduced instead of recursing forever.

    Args:
        value: Value returned by a field generator

    Returns:
        A new container for plain containers, otherwise ``value`` itself

    Example:
        >>> original = {"tags": ["a", "b"]}
        >>> copied = clone(original)
        >>> copied == original, copied["tags"] is original["tags"]
        (True, False)
    """
    return _clone(value, {})


def _clone(value: Any, memo: dict[int, Any]) -> Any:
    kind = type(value)
    if kind is not list and kind is not dict and kind is not tuple:
        return value

    key = id(value)
    if key in memo:
        return memo[key]

    if kind is list:
        items: list[Any] = []
        memo[key] = items
        items.extend(_clone(item, memo) for item in value)
        return items

    if kind is dict:
        mapping: dict[Any, Any] = {}
        memo[key] = mapping
        for k, v in value.items():
            mapping[k] = _clone(v, memo)
        return mapping

    # Immutable, so it can only be memoised once its items are copied
    copied = tuple(_clone(item, memo) for item in value)
    memo[key] = copied
    return copied
