"""Custom exception hierarchy for mockbuilder.

This module defines the exception classes raised by the builder:
- MockBuilderError: Base exception for all mockbuilder errors
- PresetNotFoundError: Raised when a named preset is not registered
- FieldValidationError: Raised when registered field validators fail
- MissingFieldError: Raised when a built object lacks an expected key

Exceptions raised by user-supplied generators are never wrapped; they
propagate to the caller of build() unchanged.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

logger = structlog.get_logger(__name__)


class MockBuilderError(Exception):
    """Base exception for mockbuilder.

    All mockbuilder exceptions inherit from this class. The message is
    safe to display in test output; technical details passed through
    ``internal_details`` are only logged.

    Args:
        user_message: Message describing the failure.
        internal_details: Optional technical details for logging.

    Example:
        >>> raise MockBuilderError(
        ...     "Build failed",
        ...     internal_details="field 'id' generator returned a coroutine",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize MockBuilderError with user message and optional details.

        Args:
            user_message: Message describing the failure.
            internal_details: Technical details for logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "mockbuilder_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class PresetNotFoundError(MockBuilderError):
    """Raised when a requested preset does not exist.

    Always includes the list of registered presets for actionable feedback.

    Attributes:
        preset_name: Name of the requested preset.
        available_presets: Names registered at the time of the lookup.

    Example:
        >>> raise PresetNotFoundError("admin", ["user", "guest"])
        # Message: "Preset 'admin' not found. Available: guest, user"
    """

    def __init__(
        self,
        preset_name: str,
        available_presets: Sequence[str] = (),
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize PresetNotFoundError.

        Args:
            preset_name: Name of the requested preset.
            available_presets: Names of the registered presets.
            internal_details: Technical details for logging only.
        """
        available = sorted(available_presets)
        available_str = ", ".join(available) if available else "none"
        user_message = f"Preset '{preset_name}' not found. Available: {available_str}"

        super().__init__(user_message, internal_details=internal_details)

        self.preset_name = preset_name
        self.available_presets = available


class FieldValidationError(MockBuilderError):
    """Raised when one or more field validators reject a built value.

    The message is every collected error message joined by a newline, in
    the order the failures were encountered (field declaration order
    within an object, repetition order across a batch).

    Attributes:
        errors: Collected validator messages.
    """

    def __init__(self, errors: Sequence[str]) -> None:
        """Initialize FieldValidationError.

        Args:
            errors: Validator messages in encounter order.
        """
        super().__init__("\n".join(errors))
        self.errors = list(errors)


class MissingFieldError(MockBuilderError):
    """Raised when a built object lacks a key the caller expected.

    Attributes:
        field_name: The missing key.
    """

    def __init__(self, field_name: str) -> None:
        """Initialize MissingFieldError.

        Args:
            field_name: The key absent from the built object.
        """
        super().__init__(f"Missing field '{field_name}' in built object.")
        self.field_name = field_name
