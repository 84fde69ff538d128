"""Field generators.

Every field is produced by a generator with the uniform signature
``(partial, index, options) -> value``:

- partial: the object being built, holding the fields assigned so far
- index: repetition index, or None for a single build
- options: ResolvedBuildOptions in effect for the build call

This module normalizes declared values into that signature and provides
the built-in generator kinds (counters and Faker-backed random values).
"""

from __future__ import annotations

import inspect
import string
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from faker import Faker

    from mockbuilder.config import ResolvedBuildOptions

FieldGenerator: TypeAlias = Callable[[dict[str, Any], int | None, "ResolvedBuildOptions"], Any]

# Number of positional arguments a generator can receive
GENERATOR_ARITY = 3

RANDOM_STRING_PATTERN = "????"
RANDOM_STRING_LETTERS = string.ascii_lowercase + string.digits
RANDOM_NUMBER_MAX = 999


class Counter:
    """Stateful counter behind ``increment()`` fields.

    The counter belongs to the field definition that created it, so it
    keeps advancing across build() calls for the lifetime of the builder.

    Attributes:
        start: First value returned
        step: Amount added after each value (may be zero or negative)

    Example:
        >>> counter = Counter(start=10, step=-2)
        >>> [counter.advance() for _ in range(3)]
        [10, 8, 6]
    """

    def __init__(self, start: int | float = 1, step: int | float = 1) -> None:
        """Initialize the counter.

        Args:
            start: First value returned (default: 1)
            step: Increment applied after each value (default: 1)
        """
        self.start = start
        self.step = step
        self._next = start

    @property
    def current(self) -> int | float:
        """Value the next advance() call will return."""
        return self._next

    def advance(self) -> int | float:
        """Return the current value, then move the counter by ``step``."""
        value = self._next
        self._next += self.step
        return value

    def __repr__(self) -> str:
        return f"Counter(start={self.start!r}, step={self.step!r}, current={self._next!r})"


def _positional_arity(factory: Callable[..., Any]) -> int:
    """Count how many generator arguments ``factory`` requires positionally.

    Positional parameters with a default are left alone, so callables such
    as ``datetime.now`` or a Faker provider keep their own defaults.
    """
    if isinstance(factory, type) and factory.__module__ == "builtins":
        # list, dict, set, ... are used as empty-container factories
        return 0
    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError):
        return 0

    count = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return GENERATOR_ARITY
        if param.default is not inspect.Parameter.empty:
            continue
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return min(count, GENERATOR_ARITY)


def resolve_generator(value: Any) -> FieldGenerator:
    """Normalize a constant or factory into a FieldGenerator.

    Callables become factories invoked at build time with as many of
    ``(partial, index, options)`` as they accept; their return value is
    used as-is. Anything else becomes a generator that always returns the
    same object. No copying happens here.

    Args:
        value: Constant value or factory callable

    Returns:
        Generator with the uniform ``(partial, index, options)`` signature

    Example:
        >>> resolve_generator(lambda: 42)({}, None, options)
        42
        >>> resolve_generator(lambda obj: obj["a"] * 2)({"a": 2}, None, options)
        4
    """
    if not callable(value):
        return lambda partial, index, options: value

    factory: Callable[..., Any] = value
    arity = _positional_arity(factory)

    def generate(partial: dict[str, Any], index: int | None, options: ResolvedBuildOptions) -> Any:
        return factory(*(partial, index, options)[:arity])

    return generate


def counter_generator(counter: Counter) -> FieldGenerator:
    """Wrap a Counter so each invocation advances it."""
    return lambda partial, index, options: counter.advance()


def random_string(fake: Faker) -> FieldGenerator:
    """Random 4-character lowercase alphanumeric string."""
    return lambda partial, index, options: fake.lexify(
        RANDOM_STRING_PATTERN, letters=RANDOM_STRING_LETTERS
    )


def random_number(fake: Faker) -> FieldGenerator:
    """Random integer between 0 and 999 inclusive."""
    return lambda partial, index, options: fake.random_int(min=0, max=RANDOM_NUMBER_MAX)


def random_boolean(fake: Faker) -> FieldGenerator:
    """Random boolean with even odds."""
    return lambda partial, index, options: fake.pybool()


def faker_generator(fake: Faker, provider: str, *args: Any, **kwargs: Any) -> FieldGenerator:
    """Generator calling a named Faker provider on every invocation.

    The provider is looked up immediately so typos fail at declaration time.

    Args:
        fake: Faker instance to draw from
        provider: Provider method name, e.g. "email" or "date_time"
        *args: Positional arguments for the provider
        **kwargs: Keyword arguments for the provider

    Returns:
        FieldGenerator returning a fresh provider value per call

    Raises:
        AttributeError: If Faker has no provider with that name
    """
    method = getattr(fake, provider)
    return lambda partial, index, options: method(*args, **kwargs)
