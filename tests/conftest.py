"""
Shared fixtures: settings without env leakage and clients backed by
httpx.MockTransport.
"""

import httpx
import pytest

from arena_mcp.client import ArenaClient
from arena_mcp.config import ArenaSettings, LogSettings, MCPSettings, Settings


@pytest.fixture
def make_settings():
    def factory(**overrides) -> Settings:
        values = {
            "ARENA_ACCESS_TOKEN": "test-token",
            "ARENA_API_BASE_URL": "https://api.are.na",
            "ARENA_API_TIMEOUT_MS": 15_000,
            "ARENA_MAX_RETRIES": 5,
            "ARENA_BACKOFF_BASE_MS": 500,
            "ARENA_MAX_CONCURRENT_REQUESTS": 4,
            "ARENA_DEFAULT_PER_PAGE": 50,
            "ARENA_ENABLE_V2_SEARCH_FALLBACK": True,
        }
        values.update(overrides)
        return Settings(
            arena=ArenaSettings(**values),
            mcp=MCPSettings(),
            log=LogSettings(),
        )

    return factory


class SleepRecorder:
    """Stands in for asyncio.sleep and records requested delays."""

    def __init__(self):
        self.calls = []

    async def __call__(self, delay_ms: int) -> None:
        self.calls.append(delay_ms)


@pytest.fixture
def sleeps():
    return SleepRecorder()


@pytest.fixture
def make_client(make_settings, sleeps):
    """Build a client whose upstream is ``handler(request) -> Response``."""

    def factory(handler, **overrides) -> ArenaClient:
        return ArenaClient(
            make_settings(**overrides),
            transport=httpx.MockTransport(handler),
            sleep_ms=sleeps,
            random=lambda: 0,
        )

    return factory
