"""
MCP Tool - get_user_contents

List one page of a user's content.
"""

from fastmcp import FastMCP
from typing import Optional

from arena_mcp.client import get_client
from arena_mcp.schemas import UserContentsParams
from arena_mcp.schemas.contents import ContentSort, ContentTypeFilter
from arena_mcp.tools.common import TOOL_ERRORS, error_result

router = FastMCP("get_user_contents")


@router.tool()
async def get_user_contents(
    id_or_slug: str,
    page: Optional[int] = None,
    per: Optional[int] = None,
    sort: Optional[ContentSort] = None,
    type: Optional[ContentTypeFilter] = None,
) -> dict:
    """
    List blocks and channels created by a user.

    Args:
        id_or_slug: User ID or slug
        page: Page number (default 1)
        per: Items per page (1-100)
        sort: Content ordering
        type: Restrict to one content type

    Returns:
        User profile, contents and pagination
    """
    client = get_client()
    try:
        user = await client.get_user(id_or_slug)
        result = await client.get_user_contents(
            UserContentsParams(
                id_or_slug=id_or_slug, page=page, per=per, sort=sort, type=type
            )
        )
    except TOOL_ERRORS as e:
        return error_result(e, "get_user_contents", id_or_slug)

    return {
        "user": user.model_dump(),
        "contents": [item.model_dump() for item in result.data],
        "meta": result.meta.model_dump(),
    }
