"""
MCP Tool - get_channel_contents

Resolve a channel reference and read one page of its contents.
"""

from fastmcp import FastMCP
from typing import Optional

from arena_mcp.client import get_client
from arena_mcp.schemas import ChannelContentsParams
from arena_mcp.schemas.contents import ChannelContentSort
from arena_mcp.services import ChannelResolver
from arena_mcp.tools.common import TOOL_ERRORS, error_result

router = FastMCP("get_channel_contents")


@router.tool()
async def get_channel_contents(
    id_or_slug: str,
    page: Optional[int] = None,
    per: Optional[int] = None,
    sort: Optional[ChannelContentSort] = None,
    user_id: Optional[int] = None,
) -> dict:
    """
    Read a channel and one page of its blocks and sub-channels.

    Accepts a channel id, slug, owner/slug, are.na URL or exact title.

    Args:
        id_or_slug: Channel reference
        page: Page number (default 1)
        per: Items per page (1-100)
        sort: Content ordering
        user_id: Only items connected by this user

    Returns:
        Channel, how the reference was resolved, contents and pagination
    """
    client = get_client()
    try:
        resolution = await ChannelResolver(client).resolve(id_or_slug)
        result = await client.get_channel_contents(
            ChannelContentsParams(
                id_or_slug=resolution.id_or_slug,
                page=page,
                per=per,
                sort=sort,
                user_id=user_id,
            )
        )
    except TOOL_ERRORS as e:
        return error_result(e, "get_channel_contents", id_or_slug)

    channel = resolution.channel
    return {
        "channel": channel.model_dump(),
        "channel_resolution": {
            "input": id_or_slug,
            "resolved_id_or_slug": resolution.id_or_slug,
            "strategy": resolution.strategy,
            "expected_owner_slug": resolution.expected_owner_slug,
            "actual_owner_slug": channel.owner.slug if channel.owner else None,
            "search_source_api": resolution.search_source_api,
        },
        "contents": [item.model_dump() for item in result.data],
        "meta": result.meta.model_dump(),
    }
