"""
Shared pytest fixtures and configuration for all tests.
"""
import logging
import os
from typing import Optional

import pytest
from hypothesis import settings, HealthCheck, Verbosity, Phase

import telemetry.service
from config.settings import clear_settings_cache
from session.memory_store import MemorySessionManager

# Default profile: balanced for local development
settings.register_profile(
    "default",
    max_examples=100,
    verbosity=Verbosity.normal,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    print_blob=True,
)

# CI profile: more thorough testing for continuous integration
settings.register_profile(
    "ci",
    max_examples=200,
    verbosity=Verbosity.verbose,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    print_blob=True,
    derandomize=True,
)

# Debug profile: minimal examples, no shrinking
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    print_blob=True,
    phases=[Phase.explicit, Phase.reuse, Phase.generate],
)

# Fast profile: quick smoke tests
settings.register_profile(
    "fast",
    max_examples=20,
    verbosity=Verbosity.normal,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))


@pytest.fixture(autouse=True)
def reset_global_state():
    """Reset cached settings, the telemetry singleton and root log handlers."""
    root_logger = logging.getLogger()
    saved_level = root_logger.level

    clear_settings_cache()
    telemetry.service._telemetry_service = None
    yield
    clear_settings_cache()
    telemetry.service._telemetry_service = None

    for handler in root_logger.handlers[:]:
        if isinstance(handler.formatter, telemetry.service.JSONFormatter):
            root_logger.removeHandler(handler)
    root_logger.setLevel(saved_level)


@pytest.fixture
def manager() -> MemorySessionManager:
    """A fresh session manager backed by the system CSPRNG."""
    return MemorySessionManager()


class ShortReadSource:
    """Random source that returns fewer bytes than requested."""

    def __init__(self, shortfall: int = 1):
        self.shortfall = shortfall
        self.calls = 0

    def __call__(self, n: int) -> bytes:
        self.calls += 1
        return b"\x00" * max(n - self.shortfall, 0)


class FailingSource:
    """Random source that raises on every call."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error or OSError("entropy pool unavailable")

    def __call__(self, n: int) -> bytes:
        raise self.error


@pytest.fixture
def short_read_source() -> ShortReadSource:
    return ShortReadSource()


@pytest.fixture
def failing_source() -> FailingSource:
    return FailingSource()
