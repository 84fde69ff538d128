"""Opt-in field validation.

Validators are rules attached to a single field name. They run only when
a build resolves ``skip_validation`` to False, and only against fields
that have a rule; nothing else about the built object is checked.

A rule takes the field's built value and returns a ValidationResult, or
a mapping with ``success`` and optional ``error_msg`` keys.

The required-key check is separate and best-effort: it only knows which
keys to expect when the caller passes them (or a class describing them)
to ``build(expected_keys=...)``.
"""

from __future__ import annotations

import dataclasses
import typing
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from mockbuilder.errors import MissingFieldError


class ValidationResult(BaseModel):
    """Outcome of a validation rule.

    Attributes:
        success: Whether the value passed
        error_msg: Message reported when the value failed

    Example:
        >>> ValidationResult(success=age >= 18, error_msg="Age must be at least 18")
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    success: bool = Field(description="Whether the value passed")
    error_msg: str | None = Field(default=None, description="Failure message")


ValidationRule: TypeAlias = Callable[[Any], "ValidationResult | Mapping[str, Any]"]


class ValidatorRegistry:
    """Validation rules keyed by field name.

    One rule per field; setting a rule again replaces it.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._rules: dict[str, ValidationRule] = {}

    def set(self, field_name: str, rule: ValidationRule) -> None:
        """Attach ``rule`` to ``field_name``."""
        self._rules[field_name] = rule

    def errors_for(self, obj: Mapping[str, Any], field_order: Iterable[str]) -> list[str]:
        """Run every applicable rule against one built object.

        Rules run in field declaration order; a name declared more than
        once is checked once, at its first position.

        Args:
            obj: The built object
            field_order: Field names in declaration order

        Returns:
            Error messages of failing rules, in field order
        """
        errors: list[str] = []
        seen: set[str] = set()
        for name in field_order:
            if name in seen or name not in self._rules:
                continue
            seen.add(name)
            result = _coerce_result(self._rules[name](obj.get(name)))
            if not result.success:
                if result.error_msg is None:
                    errors.append(f"Validation failed for field '{name}'")
                else:
                    errors.append(result.error_msg)
        return errors

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)


def _coerce_result(result: ValidationResult | Mapping[str, Any]) -> ValidationResult:
    if isinstance(result, ValidationResult):
        return result
    return ValidationResult.model_validate(dict(result))


def required_keys(shape: type | Iterable[str]) -> list[str]:
    """Work out which keys a built object is expected to have.

    Args:
        shape: Iterable of key names, or a class describing the object:
            TypedDict (required keys), pydantic model (required fields),
            dataclass (fields without defaults), or any annotated class.

    Returns:
        Expected key names

    Example:
        >>> class User(TypedDict):
        ...     id: int
        ...     nickname: NotRequired[str]
        >>> required_keys(User)
        ['id']
    """
    if not isinstance(shape, type):
        if isinstance(shape, str):
            return [shape]
        return list(shape)

    if typing.is_typeddict(shape):
        required = shape.__required_keys__  # type: ignore[attr-defined]
        return [key for key in shape.__annotations__ if key in required]

    if issubclass(shape, BaseModel):
        return [
            info.alias or name for name, info in shape.model_fields.items() if info.is_required()
        ]

    if dataclasses.is_dataclass(shape):
        return [
            f.name
            for f in dataclasses.fields(shape)
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
        ]

    return list(getattr(shape, "__annotations__", {}))


def check_required_keys(obj: Mapping[str, Any], keys: Iterable[str]) -> None:
    """Raise MissingFieldError for the first key absent from ``obj``.

    Raises:
        MissingFieldError: If any expected key is missing
    """
    for key in keys:
        if key not in obj:
            raise MissingFieldError(key)
