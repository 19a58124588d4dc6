"""
MCP Tool - create_channel

Create a channel for the authenticated user.
"""

from fastmcp import FastMCP
from typing import Optional

from arena_mcp.client import get_client
from arena_mcp.client.payloads import build_create_channel_payload
from arena_mcp.config import ARENA_WEB_URL
from arena_mcp.schemas import CreateChannelInput
from arena_mcp.schemas.writes import ChannelVisibility
from arena_mcp.tools.common import TOOL_ERRORS, error_result

router = FastMCP("create_channel")


@router.tool()
async def create_channel(
    title: str,
    visibility: Optional[ChannelVisibility] = None,
    description: Optional[str] = None,
    group_id: Optional[int] = None,
) -> dict:
    """
    Create a new channel.

    Args:
        title: Channel title
        visibility: public, private or closed (default closed)
        description: Optional description
        group_id: Create under this group instead of the user

    Returns:
        The created channel and its URL
    """
    try:
        payload = build_create_channel_payload(
            CreateChannelInput(
                title=title,
                visibility=visibility,
                description=description,
                group_id=group_id,
            )
        )
        channel = await get_client().create_channel(payload)
    except TOOL_ERRORS as e:
        return error_result(e, "create_channel")

    return {
        "channel": channel.model_dump(),
        "url": f"{ARENA_WEB_URL}/channel/{channel.slug}",
    }
