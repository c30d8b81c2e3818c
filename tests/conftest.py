"""Shared pytest configuration for the Underbar test suite."""

import pytest

from underbar import reset_config
from underbar.testing import CallRecorder, FakeClock


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "slow: waits on real timers (deselect with -m 'not slow')"
    )


@pytest.fixture(autouse=True)
def _restore_config():
    """Every test starts and ends with the default configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recorder():
    return CallRecorder()
