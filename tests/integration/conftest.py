"""Shared fixtures for integration tests."""

import os

import pytest

from aipicks.client import ClientSettings

# Skip all integration tests unless RUN_AIPICKS_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_AIPICKS_NETWORK_TESTS") != "1",
    reason="Requires running backends. Set RUN_AIPICKS_NETWORK_TESTS=1 to run",
)


@pytest.fixture
def settings() -> ClientSettings:
    """Endpoints from ``AIPICKS_*`` environment variables."""
    return ClientSettings.from_env()
