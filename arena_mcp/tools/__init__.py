"""
Tools Module - MCP Tool Implementations

All 11 MCP tools for Are.na interaction.
"""

from arena_mcp.tools import search_arena
from arena_mcp.tools import get_channel_contents
from arena_mcp.tools import get_block_details
from arena_mcp.tools import get_block_connections
from arena_mcp.tools import get_user
from arena_mcp.tools import get_user_contents
from arena_mcp.tools import create_channel
from arena_mcp.tools import create_block
from arena_mcp.tools import connect_block
from arena_mcp.tools import disconnect_connection
from arena_mcp.tools import move_connection

__all__ = [
    "search_arena",
    "get_channel_contents",
    "get_block_details",
    "get_block_connections",
    "get_user",
    "get_user_contents",
    "create_channel",
    "create_block",
    "connect_block",
    "disconnect_connection",
    "move_connection",
]
