"""
MCP Tool - get_user

Read a user profile with their most recent content.
"""

from fastmcp import FastMCP

from arena_mcp.client import get_client
from arena_mcp.schemas import UserContentsParams
from arena_mcp.tools.common import TOOL_ERRORS, error_result

router = FastMCP("get_user")


@router.tool()
async def get_user(id_or_slug: str) -> dict:
    """
    Get a user's profile and first page of content.

    Args:
        id_or_slug: User ID or slug

    Returns:
        User profile, recent contents and pagination
    """
    client = get_client()
    try:
        user = await client.get_user(id_or_slug)
        contents = await client.get_user_contents(
            UserContentsParams(id_or_slug=id_or_slug, page=1)
        )
    except TOOL_ERRORS as e:
        return error_result(e, "get_user", id_or_slug)

    return {
        "user": user.model_dump(),
        "recent_contents": [item.model_dump() for item in contents.data],
        "meta": contents.meta.model_dump(),
    }
