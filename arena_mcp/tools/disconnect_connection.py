"""
MCP Tool - disconnect_connection

Remove a connection by ID.
"""

from fastmcp import FastMCP

from arena_mcp.client import get_client
from arena_mcp.tools.common import TOOL_ERRORS, error_result

router = FastMCP("disconnect_connection")


@router.tool()
async def disconnect_connection(connection_id: int) -> dict:
    """
    Remove a block or channel from a channel.

    Args:
        connection_id: Connection ID

    Returns:
        Confirmation
    """
    try:
        await get_client().disconnect_connection(connection_id)
    except TOOL_ERRORS as e:
        return error_result(e, "disconnect_connection", connection_id)

    return {"connection_id": connection_id, "disconnected": True}
