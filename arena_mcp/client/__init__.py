"""
Client Module - Are.na API Access

Request engine, retry policy, concurrency limiter and response normalizers.
"""

from arena_mcp.client.arena_client import ArenaClient, serialize_query
from arena_mcp.client.limiter import ConcurrencyLimiter
from arena_mcp.client.retry import (
    RetryAction,
    compute_retry_delay_ms,
    next_retry_action,
    parse_retry_after_seconds,
)

__all__ = [
    "ArenaClient",
    "serialize_query",
    "ConcurrencyLimiter",
    "RetryAction",
    "compute_retry_delay_ms",
    "next_retry_action",
    "parse_retry_after_seconds",
]

_client = None


def get_client(settings=None) -> ArenaClient:
    """Process-wide client, so every tool shares one limiter."""
    global _client
    if _client is None:
        _client = ArenaClient(settings)
    return _client
