"""Fluent fixture builder for tests.

This package builds synthetic objects for tests from a chain of named
field declarations whose values come from constants or factories.

Key Components:
- builder: MockBuilder fluent API and the BuildExecutor pipeline
- generators: Constant/factory normalization, counters, Faker-backed defaults
- fields: Ordered field definitions owned by a builder
- presets: Named reusable templates (process-wide registry)
- validation: Opt-in per-field validation rules
- copying: Structural cloning of generated values
- config: Build options and their precedence

Example:
    >>> from mockbuilder import MockBuilder
    >>>
    >>> users = (
    ...     MockBuilder(seed=42)
    ...     .field("id").increment(1)
    ...     .field("name").faker("name")
    ...     .field("active").boolean(True)
    ...     .repeat(3)
    ...     .build()
    ... )

Example with presets and validation:
    >>> MockBuilder.define_preset("adult", {"age": 30})
    >>> builder = (
    ...     MockBuilder()
    ...     .preset("adult")
    ...     .validator("age", lambda age: {"success": age >= 18, "error_msg": "too young"})
    ... )
    >>> builder.build(skip_validation=False)
    {'age': 30}
"""

from __future__ import annotations

from mockbuilder.builder import BuildExecutor, FieldTypeApi, MockBuilder
from mockbuilder.config import BuilderSettings, BuildOptions, ResolvedBuildOptions
from mockbuilder.copying import clone
from mockbuilder.errors import (
    FieldValidationError,
    MissingFieldError,
    MockBuilderError,
    PresetNotFoundError,
)
from mockbuilder.fields import FieldDefinition, FieldRegistry
from mockbuilder.generators import Counter, resolve_generator
from mockbuilder.presets import PresetRegistry, default_registry, define_preset
from mockbuilder.validation import ValidationResult, ValidatorRegistry, required_keys

__version__ = "0.1.0"

__all__ = [
    "BuildExecutor",
    "BuildOptions",
    "BuilderSettings",
    "Counter",
    "FieldDefinition",
    "FieldRegistry",
    "FieldTypeApi",
    "FieldValidationError",
    "MissingFieldError",
    "MockBuilder",
    "MockBuilderError",
    "PresetNotFoundError",
    "PresetRegistry",
    "ResolvedBuildOptions",
    "ValidationResult",
    "ValidatorRegistry",
    "clone",
    "default_registry",
    "define_preset",
    "required_keys",
]
