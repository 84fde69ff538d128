"""Fluent builder for test fixtures.

MockBuilder collects named fields (constants or factories), then builds
one object or a list of objects from them:

    >>> builder = (
    ...     MockBuilder()
    ...     .field("id").increment(1)
    ...     .field("name").string("Alice")
    ...     .repeat(2)
    ... )
    >>> builder.build()
    [{'id': 1, 'name': 'Alice'}, {'id': 2, 'name': 'Alice'}]

Build pipeline (BuildExecutor):
1. Resolve options (per-call > instance > constructor > BuilderSettings)
2. For each object, run every field generator in declaration order,
   passing the partially built object so later fields can read earlier ones
3. Clone each generated value when deep copy is enabled, then assign it
4. Run field validators (and the optional required-key check) when
   validation is not skipped

Generator exceptions propagate unchanged and no partial result is returned.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from faker import Faker

from mockbuilder.config import (
    BuilderSettings,
    BuildOptions,
    ResolvedBuildOptions,
    resolve_options,
)
from mockbuilder.copying import clone
from mockbuilder.errors import FieldValidationError
from mockbuilder.fields import FieldDefinition, FieldRegistry
from mockbuilder.generators import (
    Counter,
    FieldGenerator,
    counter_generator,
    faker_generator,
    random_boolean,
    random_number,
    random_string,
)
from mockbuilder.presets import PresetRegistry, default_registry
from mockbuilder.validation import (
    ValidationRule,
    ValidatorRegistry,
    check_required_keys,
    required_keys,
)

logger = structlog.get_logger(__name__)

_MISSING: Any = object()


class BuildExecutor:
    """Runs one build() call against a builder's fields and validators.

    Attributes:
        fields: Field definitions in declaration order
        validators: Rules checked when validation is not skipped
        options: Options resolved for this call
    """

    def __init__(
        self,
        fields: FieldRegistry,
        validators: ValidatorRegistry,
        options: ResolvedBuildOptions,
    ) -> None:
        self.fields = fields
        self.validators = validators
        self.options = options

    def create_one(self, index: int | None = None) -> dict[str, Any]:
        """Build a single object.

        Args:
            index: Repetition index, None outside a batch

        Returns:
            The built object
        """
        obj: dict[str, Any] = {}
        for definition in self.fields:
            value = definition.generator(obj, index, self.options)
            obj[definition.name] = clone(value) if self.options.deep_copy else value
        return obj

    def run(
        self,
        repeat_count: int,
        expected_keys: type | Iterable[str] | None = None,
    ) -> dict[str, Any] | list[dict[str, Any]]:
        """Build the object, or ``repeat_count`` objects unless it is 1.

        Args:
            repeat_count: Number of objects; 1 returns a bare object
            expected_keys: Keys (or a class describing them) every object must have

        Returns:
            A single object when repeat_count is 1, otherwise a list

        Raises:
            FieldValidationError: If validation runs and any rule fails
            MissingFieldError: If validation runs and an expected key is absent
        """
        if repeat_count == 1:
            objects = [self.create_one()]
        else:
            objects = [self.create_one(index) for index in range(repeat_count)]

        if not self.options.skip_validation:
            self.validate(objects, expected_keys)

        logger.debug(
            "mock_built",
            fields=len(self.fields),
            count=len(objects),
            deep_copy=self.options.deep_copy,
        )
        if repeat_count == 1:
            return objects[0]
        return objects

    def validate(
        self,
        objects: list[dict[str, Any]],
        expected_keys: type | Iterable[str] | None = None,
    ) -> None:
        """Check built objects, failing the whole build on any error.

        Validator messages are collected across every object before
        raising, so a batch reports all of its failures at once.
        """
        field_order = self.fields.names()
        errors: list[str] = []
        for obj in objects:
            errors.extend(self.validators.errors_for(obj, field_order))
        if errors:
            logger.warning("mock_validation_failed", error_count=len(errors))
            raise FieldValidationError(errors)

        if expected_keys is None:
            return
        keys = required_keys(expected_keys)
        for obj in objects:
            check_required_keys(obj, keys)


class FieldTypeApi:
    """Typed setters for a field started with ``MockBuilder.field(name)``.

    Each setter registers the field and returns the builder for chaining.
    ``string()``, ``number()`` and ``boolean()`` called without a value
    generate random values from the builder's Faker instance.
    """

    def __init__(self, builder: MockBuilder, name: str) -> None:
        self._builder = builder
        self._name = name

    def string(self, value: Any = _MISSING) -> MockBuilder:
        """String constant or factory; random 4-character string by default."""
        if value is _MISSING:
            return self._add_generated(random_string(self._builder.faker))
        return self._builder.with_field(self._name, value)

    def number(self, value: Any = _MISSING) -> MockBuilder:
        """Number constant or factory; random integer in [0, 999] by default."""
        if value is _MISSING:
            return self._add_generated(random_number(self._builder.faker))
        return self._builder.with_field(self._name, value)

    def boolean(self, value: Any = _MISSING) -> MockBuilder:
        """Boolean constant or factory; random boolean by default."""
        if value is _MISSING:
            return self._add_generated(random_boolean(self._builder.faker))
        return self._builder.with_field(self._name, value)

    def array(self, value: Any) -> MockBuilder:
        """List constant or factory."""
        return self._builder.with_field(self._name, value)

    def object(self, value: Any) -> MockBuilder:
        """Dict constant or factory."""
        return self._builder.with_field(self._name, value)

    def increment(self, start: int | float = 1, step: int | float = 1) -> MockBuilder:
        """Counter starting at ``start`` and moving by ``step`` per generated value.

        The counter is created now and never reset, so consecutive builds
        (and the objects of a repeated build) receive consecutive values.

        Args:
            start: First value (default: 1)
            step: Amount added after each value, may be zero or negative (default: 1)

        Returns:
            The builder for chaining

        Example:
            >>> MockBuilder().field("id").increment(10, 5).repeat(3).build()
            [{'id': 10}, {'id': 15}, {'id': 20}]
        """
        counter = Counter(start=start, step=step)
        return self._builder.add_field(
            FieldDefinition(name=self._name, generator=counter_generator(counter), counter=counter)
        )

    def faker(self, provider: str, *args: Any, **kwargs: Any) -> MockBuilder:
        """Value from a Faker provider, e.g. ``.faker("email")``.

        Raises:
            AttributeError: If Faker has no provider with that name
        """
        return self._add_generated(
            faker_generator(self._builder.faker, provider, *args, **kwargs)
        )

    def _add_generated(self, generator: FieldGenerator) -> MockBuilder:
        return self._builder.add_field(FieldDefinition(name=self._name, generator=generator))


class MockBuilder:
    """Fluent builder producing fixture dicts from declared fields.

    Attributes:
        repeat_count: Number of objects build() produces (1 = bare object)

    Example:
        >>> user = (
        ...     MockBuilder(seed=42)
        ...     .with_field("first_name", "John")
        ...     .with_field("last_name", "Doe")
        ...     .with_field("email", lambda obj: f"{obj['first_name']}.{obj['last_name']}@example.com".lower())
        ...     .build()
        ... )
        >>> user["email"]
        'john.doe@example.com'
    """

    def __init__(
        self,
        deep_copy: bool | None = None,
        skip_validation: bool | None = None,
        *,
        seed: int | None = None,
        registry: PresetRegistry | None = None,
        settings: BuilderSettings | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            deep_copy: Constructor default for cloning generated values
            skip_validation: Constructor default for skipping validators
            seed: Seed for random default values (Faker ``seed_instance``)
            registry: Preset registry (default: process-wide ``default_registry``)
            settings: Global defaults (default: BuilderSettings from environment)
        """
        self._constructor_options = BuildOptions(
            deep_copy=deep_copy, skip_validation=skip_validation
        )
        self._instance_options = BuildOptions()
        self._settings = settings if settings is not None else BuilderSettings()
        self._registry = registry if registry is not None else default_registry
        self._fields = FieldRegistry()
        self._validators = ValidatorRegistry()
        self._seed = seed
        self._fake: Faker | None = None
        self.repeat_count = 1

    @property
    def faker(self) -> Faker:
        """Faker instance backing random defaults, created on first use."""
        if self._fake is None:
            self._fake = Faker()
            if self._seed is not None:
                self._fake.seed_instance(self._seed)
        return self._fake

    @property
    def field_names(self) -> list[str]:
        """Declared field names in order, repeats included."""
        return self._fields.names()

    def field(self, name: str) -> FieldTypeApi:
        """Start a typed field declaration.

        Example:
            >>> builder.field("age").number(30)
        """
        return FieldTypeApi(self, name)

    def with_field(self, name: str, value: Any) -> MockBuilder:
        """Declare a field from a constant or a factory.

        Callables are treated as factories and called at build time with
        up to three positional arguments: the partially built object, the
        repetition index (None for a single build) and the resolved options.
        Declaring a name again adds a second definition; both run and the
        later value wins.

        Args:
            name: Field name
            value: Constant, or factory callable

        Returns:
            The builder for chaining
        """
        self._fields.add_value(name, value)
        return self

    def add_field(self, definition: FieldDefinition) -> MockBuilder:
        """Append a prepared FieldDefinition, e.g. one owning a Counter."""
        self._fields.add(definition)
        return self

    def validator(self, name: str, rule: ValidationRule) -> MockBuilder:
        """Attach a validation rule to a field.

        Rules only run when a build resolves ``skip_validation`` to False.

        Args:
            name: Field the rule checks
            rule: Callable returning ValidationResult or {"success", "error_msg"}

        Returns:
            The builder for chaining
        """
        self._validators.set(name, rule)
        return self

    def repeat(self, count: int) -> MockBuilder:
        """Set how many objects build() returns.

        1 returns a single object; any other count returns a list of that
        length (0 returns an empty list). The last call wins.

        Raises:
            ValueError: If count is not a non-negative integer
        """
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError(f"Repeat count must be a non-negative integer, got {count!r}")
        self.repeat_count = count
        return self

    def extend(self, template: Mapping[str, Any]) -> MockBuilder:
        """Add one field per template entry, in template order.

        Example:
            >>> builder.extend({"role": "admin", "created_at": datetime.now})
        """
        self._fields.extend(template)
        return self

    def preset(self, name: str) -> MockBuilder:
        """Add the fields of a registered preset.

        Raises:
            PresetNotFoundError: If no preset is registered under ``name``
        """
        return self.extend(self._registry.get(name))

    @staticmethod
    def define_preset(name: str, template: Mapping[str, Any]) -> None:
        """Define a preset in the process-wide registry.

        A later definition with the same name replaces the earlier one.
        """
        default_registry.define(name, template)

    def deep_copy(self, enabled: bool) -> MockBuilder:
        """Enable or disable cloning of generated values for this builder."""
        self._instance_options = BuildOptions(
            deep_copy=enabled, skip_validation=self._instance_options.skip_validation
        )
        return self

    def skip_validation(self, skip: bool) -> MockBuilder:
        """Enable or disable skipping of field validators for this builder."""
        self._instance_options = BuildOptions(
            deep_copy=self._instance_options.deep_copy, skip_validation=skip
        )
        return self

    def resolve_options(
        self,
        options: BuildOptions | Mapping[str, Any] | None = None,
        *,
        deep_copy: bool | None = None,
        skip_validation: bool | None = None,
    ) -> ResolvedBuildOptions:
        """Options a build() call with the same arguments would use."""
        if options is not None and not isinstance(options, BuildOptions):
            options = BuildOptions.model_validate(dict(options))
        return resolve_options(
            BuildOptions(deep_copy=deep_copy, skip_validation=skip_validation),
            options,
            self._instance_options,
            self._constructor_options,
            defaults=self._settings,
        )

    def build(
        self,
        options: BuildOptions | Mapping[str, Any] | None = None,
        *,
        deep_copy: bool | None = None,
        skip_validation: bool | None = None,
        expected_keys: type | Iterable[str] | None = None,
    ) -> Any:
        """Build the object, or a list of objects when repeat count is not 1.

        Args:
            options: Per-call options (BuildOptions or a mapping)
            deep_copy: Per-call deep copy override, takes precedence over ``options``
            skip_validation: Per-call validation override, takes precedence over ``options``
            expected_keys: Keys, or a TypedDict/pydantic/dataclass type, that each
                built object must contain. Checked only when validation runs.

        Returns:
            dict for a repeat count of 1, otherwise list of dicts

        Raises:
            FieldValidationError: Validation ran and at least one rule failed
            MissingFieldError: Validation ran and an expected key is absent
            Exception: Anything raised by a field generator, unchanged
        """
        resolved = self.resolve_options(
            options, deep_copy=deep_copy, skip_validation=skip_validation
        )
        executor = BuildExecutor(self._fields, self._validators, resolved)
        return executor.run(self.repeat_count, expected_keys)
