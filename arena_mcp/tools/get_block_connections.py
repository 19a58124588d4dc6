"""
MCP Tool - get_block_connections

List channels where a block appears.
"""

from fastmcp import FastMCP
from typing import Optional

from arena_mcp.client import get_client
from arena_mcp.schemas import BlockConnectionsParams
from arena_mcp.schemas.contents import ConnectionFilter, ConnectionSort
from arena_mcp.tools.common import TOOL_ERRORS, error_result

router = FastMCP("get_block_connections")


@router.tool()
async def get_block_connections(
    id: int,
    page: Optional[int] = None,
    per: Optional[int] = None,
    sort: Optional[ConnectionSort] = None,
    filter: Optional[ConnectionFilter] = None,
) -> dict:
    """
    List channels where a block appears.

    Args:
        id: Block ID
        page: Page number (default 1)
        per: Channels per page (1-100)
        sort: created_at_desc or created_at_asc
        filter: ALL, OWN or EXCLUDE_OWN

    Returns:
        Channels and pagination
    """
    client = get_client()
    try:
        result = await client.get_block_connections(
            BlockConnectionsParams(id=id, page=page, per=per, sort=sort, filter=filter)
        )
    except TOOL_ERRORS as e:
        return error_result(e, "get_block_connections", id)

    return {
        "channels": [channel.model_dump() for channel in result.data],
        "meta": result.meta.model_dump(),
    }
