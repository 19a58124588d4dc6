"""
MCP Prompts - Research Workflows

Canned instructions that chain the read tools into common Are.na tasks.
"""

from fastmcp import FastMCP
from pydantic import Field
from typing import Annotated, Optional

from arena_mcp.schemas.search import SearchScope

router = FastMCP("prompts")


@router.prompt(
    name="summarize_channel",
    description="Summarize recurring ideas, clusters, and tensions within a channel.",
)
def summarize_channel(
    id_or_slug: Annotated[str, Field(min_length=1)],
    focus: Optional[str] = None,
) -> str:
    focus_text = (
        f"Focus specifically on: {focus}." if focus else "Focus on recurring themes."
    )
    return " ".join([
        f"Read channel {id_or_slug} using get_channel_contents.",
        "Traverse additional pages if needed.",
        focus_text,
        "Return a synthesis with: key themes, notable blocks, and contradictions.",
    ])


@router.prompt(
    name="find_connections",
    description="Suggest channels where a block should be connected.",
)
def find_connections(
    block_id: Annotated[int, Field(gt=0)],
    max_suggestions: Annotated[Optional[int], Field(ge=1, le=10)] = None,
) -> str:
    limit = 3 if max_suggestions is None else max_suggestions
    return " ".join([
        f"Inspect block {block_id} using get_block_details.",
        "Review my recent channels via arena://me or get_user_contents(type=Channel).",
        f"Propose up to {limit} channel connections with a one-sentence rationale each.",
        "Do not create connections automatically unless asked.",
    ])


@router.prompt(
    name="second_brain_synthesis",
    description="Create a synthesis across Are.na content for a topic.",
)
def second_brain_synthesis(
    topic: Annotated[str, Field(min_length=1)],
    scope: Optional[SearchScope] = None,
) -> str:
    scope_text = (
        f'Limit search scope to "{scope}".' if scope else "Use full accessible scope."
    )
    return " ".join([
        f'Research topic "{topic}" in my Are.na graph.',
        scope_text,
        "Use search_arena and then drill into relevant channels/blocks.",
        "Produce a concise synthesis with cited block IDs and channel slugs.",
    ])
