"""
MCP Tool - search_arena

Search Are.na, falling back to the v2 API when v3 search is premium-gated.
"""

from fastmcp import FastMCP
from typing import List, Optional

from arena_mcp.client import get_client
from arena_mcp.schemas import SearchParams
from arena_mcp.schemas.search import SearchScope, SearchSort, SearchType
from arena_mcp.tools.common import TOOL_ERRORS, error_result

router = FastMCP("search_arena")

SEARCH_DEFAULT_PER = 10


@router.tool()
async def search_arena(
    query: str,
    type: Optional[SearchType] = None,
    scope: Optional[SearchScope] = None,
    page: Optional[int] = None,
    per: Optional[int] = None,
    sort: Optional[SearchSort] = None,
    user_id: Optional[int] = None,
    group_id: Optional[int] = None,
    channel_id: Optional[int] = None,
    ext: Optional[List[str]] = None,
    include_raw: bool = False,
) -> dict:
    """
    Search Are.na blocks, channels, users and groups.

    Uses the v3 search API and falls back to v2 when v3 requires Premium.

    Args:
        query: Search text
        type: Restrict to one entity or block type
        scope: all, my or following
        page: Page number (default 1)
        per: Results per page (1-100, default 10)
        sort: Result ordering
        user_id: Only content from this user
        group_id: Only content from this group
        channel_id: Only content from this channel
        ext: File extensions to match
        include_raw: Include the untouched upstream record per item

    Returns:
        Normalized items with pagination and the API generation used
    """
    client = get_client()
    try:
        params = SearchParams(
            query=query,
            type=type,
            scope=scope,
            page=page,
            per=per or SEARCH_DEFAULT_PER,
            sort=sort,
            user_id=user_id,
            group_id=group_id,
            channel_id=channel_id,
            ext=ext,
        )
        result = await client.search(params)
    except TOOL_ERRORS as e:
        return error_result(
            e,
            "search_arena",
            search_fallback_enabled=client.settings.arena.enable_v2_search_fallback,
        )

    exclude = None if include_raw else {"raw"}
    return {
        "source_api": result.source_api,
        "items": [item.model_dump(exclude=exclude) for item in result.items],
        "meta": result.meta.model_dump(),
        "count": len(result.items),
        "query": query,
    }
