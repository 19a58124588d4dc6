"""
MCP Tool - get_block_details

Read a block plus the channels it is connected to.
"""

from fastmcp import FastMCP

from arena_mcp.client import get_client
from arena_mcp.schemas import BlockConnectionsParams
from arena_mcp.tools.common import TOOL_ERRORS, error_result

router = FastMCP("get_block_details")


@router.tool()
async def get_block_details(id: int) -> dict:
    """
    Get complete metadata for a block and its first page of connections.

    Args:
        id: Block ID

    Returns:
        Block, connected channels and pagination
    """
    client = get_client()
    try:
        block = await client.get_block(id)
        connections = await client.get_block_connections(
            BlockConnectionsParams(id=id, page=1)
        )
    except TOOL_ERRORS as e:
        return error_result(e, "get_block_details", id)

    return {
        "block": block.model_dump(),
        "connections": [channel.model_dump() for channel in connections.data],
        "meta": connections.meta.model_dump(),
    }
