"""
MCP Tool - connect_block

Connect an existing block to channels.
"""

from fastmcp import FastMCP
from typing import List, Optional

from arena_mcp.client import get_client
from arena_mcp.client.payloads import build_connect_block_payload
from arena_mcp.schemas import ConnectBlockInput
from arena_mcp.tools.common import TOOL_ERRORS, error_result

router = FastMCP("connect_block")


@router.tool()
async def connect_block(
    block_id: int,
    channel_ids: List[int],
    position: Optional[int] = None,
) -> dict:
    """
    Connect an existing block to one or more channels.

    Args:
        block_id: Block ID
        channel_ids: Target channels (1-20)
        position: Optional position in the channels

    Returns:
        The new connection
    """
    try:
        payload = build_connect_block_payload(
            ConnectBlockInput(block_id=block_id, channel_ids=channel_ids, position=position)
        )
        connection = await get_client().connect_block(payload)
    except TOOL_ERRORS as e:
        return error_result(e, "connect_block", block_id)

    return {"connection": connection.model_dump()}
