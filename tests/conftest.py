# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import threading
from unittest.mock import MagicMock

import pytest


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "stress: mark test as a stress test")


@pytest.fixture
def manual_wall_clock():
    """A wall clock frozen at a fixed reading until the test moves it."""
    from corekit.runtime.clock import ManualWallClock

    return ManualWallClock(ticks=1_700_000_000_000_000_000)


@pytest.fixture
def clock(manual_wall_clock):
    """A ClockService driven by the manual wall clock."""
    from corekit.runtime.clock import ClockService

    return ClockService(wall_clock=manual_wall_clock)


@pytest.fixture
def system_clock():
    """A ClockService on the real system clock."""
    from corekit.runtime.clock import ClockService

    return ClockService()


@pytest.fixture
def compile_hook():
    """A hook mock recording on_compile and on_error calls."""
    hook = MagicMock()
    hook.on_compile = MagicMock()
    hook.on_error = MagicMock()
    return hook


@pytest.fixture
def registry(compile_hook):
    """A fresh TypeRegistry with the default interface map and a counting hook."""
    from corekit.types.registry import TypeRegistry

    return TypeRegistry(hooks=[compile_hook])


@pytest.fixture
def error_classes():
    """Provides a tuple of error classes for quick reference."""
    from corekit.core.errors import CoreKitError, InstantiationError, RegistrationError

    return (CoreKitError, InstantiationError, RegistrationError)


@pytest.fixture(autouse=True)
def cleanup_threads():
    yield
    # Cleanup any remaining threads after each test
    for thread in threading.enumerate():
        if thread != threading.current_thread() and thread.is_alive():
            thread.join(timeout=1.0)
