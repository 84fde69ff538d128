"""Shared pytest fixtures for mockbuilder tests."""

from __future__ import annotations

import sys
from collections.abc import Iterator

import pytest
import structlog

from mockbuilder import BuilderSettings, PresetRegistry, default_registry


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture.

    This fixture ensures structlog outputs to stdout so that capsys
    can capture the output in tests.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture(autouse=True)
def isolated_presets() -> Iterator[None]:
    """Clear the process-wide preset registry around every test."""
    default_registry.clear()
    yield
    default_registry.clear()


@pytest.fixture
def registry() -> PresetRegistry:
    """Return a fresh, builder-private preset registry."""
    return PresetRegistry()


@pytest.fixture
def default_settings() -> BuilderSettings:
    """Return global defaults unaffected by MOCKBUILDER_* environment variables."""
    return BuilderSettings(deep_copy=True, skip_validation=True)
