"""
Shared pytest fixtures and configuration for gawk tests.
"""

import pytest

from gawk import reset_config


@pytest.fixture(autouse=True)
def reset_gawk_config():
    """Restore the default configuration before each test to prevent state leakage."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def calls():
    """A list that a listener can append ``(node, source)`` pairs to."""
    return []


@pytest.fixture
def recorder(calls):
    """A listener recording every call into ``calls``."""

    def listener(node, source):
        calls.append((node, source))

    return listener
