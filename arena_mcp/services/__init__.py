"""
Services Module - Business Logic Layer

Provides channel identifier resolution on top of the API client.
"""

from arena_mcp.services.channel_resolver import (
    ChannelInput,
    ChannelResolver,
    parse_channel_input,
    verify_channel_owner,
)

__all__ = [
    "ChannelInput",
    "ChannelResolver",
    "parse_channel_input",
    "verify_channel_owner",
]
