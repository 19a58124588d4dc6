"""
MCP Tool - create_block

Create a block from text or a public URL and connect it to channels.
"""

from fastmcp import FastMCP
from typing import List, Optional

from arena_mcp.client import get_client
from arena_mcp.client.payloads import build_create_block_payload
from arena_mcp.schemas import CreateBlockInput
from arena_mcp.tools.common import TOOL_ERRORS, error_result

router = FastMCP("create_block")


@router.tool()
async def create_block(
    value: str,
    channel_ids: List[int],
    title: Optional[str] = None,
    description: Optional[str] = None,
    original_source_url: Optional[str] = None,
    original_source_title: Optional[str] = None,
    alt_text: Optional[str] = None,
    insert_at: Optional[int] = None,
) -> dict:
    """
    Create a text, link or media block.

    Local file paths are rejected; pass a public URL instead.

    Args:
        value: Text content or a public URL
        channel_ids: Channels to connect the block to (1-20)
        title: Optional title
        description: Optional description
        original_source_url: Where the content came from
        original_source_title: Title of the source
        alt_text: Alt text for images
        insert_at: Position in the channels

    Returns:
        The created block
    """
    try:
        payload = build_create_block_payload(
            CreateBlockInput(
                value=value,
                channel_ids=channel_ids,
                title=title,
                description=description,
                original_source_url=original_source_url,
                original_source_title=original_source_title,
                alt_text=alt_text,
                insert_at=insert_at,
            )
        )
        block = await get_client().create_block(payload)
    except TOOL_ERRORS as e:
        return error_result(e, "create_block")

    return {"block": block.model_dump()}
