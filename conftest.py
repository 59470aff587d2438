"""Root conftest for pytest configuration and shared fixtures.

Loaded before the colocated test packages under etsy_access/.
"""

import os

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables — must be set before any etsy_access module import
# Uses setdefault so real env vars are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("ETSY_ENVIRONMENT", "test")
os.environ.setdefault("ETSY_LOG_LEVEL", "DEBUG")


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested waits instead of waiting."""

    def __init__(self) -> None:
        self.calls: list = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Fake sleep for retry tests."""
    return RecordingSleep()


@pytest.fixture
def test_settings():
    """Settings with fixed consumer credentials and a fake API host."""
    from etsy_access.core.config import Settings

    return Settings(
        CONSUMER_KEY="CK",
        CONSUMER_SECRET="CS",
        RETRY_ATTEMPTS=3,
        API_BASE_URL="https://api.example.com",
    )
