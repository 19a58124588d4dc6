"""
MCP Tool - move_connection

Reposition a connection within its channel.
"""

from fastmcp import FastMCP
from typing import Optional

from arena_mcp.client import get_client
from arena_mcp.client.payloads import build_move_connection_payload
from arena_mcp.schemas import MoveConnectionInput
from arena_mcp.schemas.writes import MoveMovement
from arena_mcp.tools.common import TOOL_ERRORS, error_result

router = FastMCP("move_connection")


@router.tool()
async def move_connection(
    connection_id: int,
    movement: MoveMovement,
    position: Optional[int] = None,
) -> dict:
    """
    Reposition a connection within a channel.

    Args:
        connection_id: Connection ID
        movement: insert_at, move_to_top, move_to_bottom, move_up or move_down
        position: Target position, required for insert_at

    Returns:
        The moved connection
    """
    try:
        payload = build_move_connection_payload(
            MoveConnectionInput(
                connection_id=connection_id, movement=movement, position=position
            )
        )
        connection = await get_client().move_connection(connection_id, payload)
    except TOOL_ERRORS as e:
        return error_result(e, "move_connection", connection_id)

    return {"connection": connection.model_dump()}
