"""
Schemas - Channel Models
"""

from typing import Literal, Optional

from arena_mcp.schemas.common import (
    ConnectionContext,
    EmbeddedUser,
    FrozenModel,
    NormalizedMarkdown,
)


class ChannelCounts(FrozenModel):
    """Channel totals; only present when every count is known."""
    blocks: int
    channels: int
    contents: int
    collaborators: int


class NormalizedChannel(FrozenModel):
    """A channel as returned by the v3 API."""
    type: Literal["Channel"]
    id: int
    slug: str
    title: str
    description: Optional[NormalizedMarkdown] = None
    state: Optional[str] = None
    visibility: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    owner: Optional[EmbeddedUser] = None
    counts: Optional[ChannelCounts] = None
    connection: Optional[ConnectionContext] = None


ResolutionStrategy = Literal[
    "direct",
    "url-extracted",
    "search-exact-slug",
    "search-exact-title",
    "search-single",
]


class ChannelResolution(FrozenModel):
    """A free-form channel reference resolved to a verified channel."""
    channel: NormalizedChannel
    id_or_slug: str
    strategy: ResolutionStrategy
    expected_owner_slug: Optional[str] = None
    search_source_api: Optional[Literal["v3", "v2-fallback"]] = None
