"""Build option models and precedence resolution.

Options are layered, highest precedence first:
1. Per-call options passed to ``build()``
2. Instance settings changed with ``deep_copy()`` / ``skip_validation()``
3. Constructor arguments
4. Global defaults from ``BuilderSettings`` (environment, ``MOCKBUILDER_`` prefix)

A layer leaves an option unset with ``None``; the first layer that sets it wins.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEEP_COPY_DESCRIPTION = "Clone container values before assigning them"
SKIP_VALIDATION_DESCRIPTION = "Do not run registered field validators"


class BuilderSettings(BaseSettings):
    """Global defaults for every builder.

    Can be loaded from environment variables with MOCKBUILDER_ prefix.

    Example:
        >>> # From environment (MOCKBUILDER_DEEP_COPY=false)
        >>> settings = BuilderSettings()
        >>>
        >>> # Explicit
        >>> settings = BuilderSettings(skip_validation=False)
    """

    model_config = SettingsConfigDict(
        env_prefix="MOCKBUILDER_",
        extra="ignore",
    )

    deep_copy: bool = Field(default=True, description=DEEP_COPY_DESCRIPTION)
    skip_validation: bool = Field(default=True, description=SKIP_VALIDATION_DESCRIPTION)


class BuildOptions(BaseModel):
    """One layer of build options.

    Attributes:
        deep_copy: Clone generated values before assignment (None = inherit)
        skip_validation: Skip field validators (None = inherit)

    Example:
        >>> builder.build(BuildOptions(skip_validation=False))
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    deep_copy: bool | None = Field(default=None, description=DEEP_COPY_DESCRIPTION)
    skip_validation: bool | None = Field(default=None, description=SKIP_VALIDATION_DESCRIPTION)


class ResolvedBuildOptions(BaseModel):
    """Options in effect for a single build() call.

    This is the ``options`` argument handed to field factories.

    Attributes:
        deep_copy: Whether generated values are cloned before assignment
        skip_validation: Whether field validators are skipped
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    deep_copy: bool
    skip_validation: bool


def resolve_options(
    *layers: BuildOptions | None,
    defaults: BuilderSettings,
) -> ResolvedBuildOptions:
    """Resolve layered options into concrete values.

    Args:
        *layers: Option layers, highest precedence first. None layers are skipped.
        defaults: Global defaults used when no layer sets an option.

    Returns:
        ResolvedBuildOptions with every option set.

    Example:
        >>> resolve_options(
        ...     BuildOptions(deep_copy=False),
        ...     BuildOptions(deep_copy=True, skip_validation=False),
        ...     defaults=BuilderSettings(),
        ... )
        ResolvedBuildOptions(deep_copy=False, skip_validation=False)
    """
    present = [layer for layer in layers if layer is not None]

    def first_set(name: str, fallback: bool) -> bool:
        for layer in present:
            value = getattr(layer, name)
            if value is not None:
                return bool(value)
        return fallback

    return ResolvedBuildOptions(
        deep_copy=first_set("deep_copy", defaults.deep_copy),
        skip_validation=first_set("skip_validation", defaults.skip_validation),
    )
