"""
Schemas Module - Pydantic Models

Normalized Are.na entities, request parameters and write inputs.
"""

from arena_mcp.schemas.common import (
    PaginationMeta,
    PaginatedResult,
    NormalizedMarkdown,
    EmbeddedUser,
    ConnectionContext,
)
from arena_mcp.schemas.channel import (
    ChannelCounts,
    NormalizedChannel,
    ChannelResolution,
)
from arena_mcp.schemas.block import (
    BLOCK_TYPES,
    NormalizedImage,
    NormalizedAttachment,
    NormalizedEmbed,
    NormalizedBlock,
)
from arena_mcp.schemas.user import UserCounts, NormalizedUser
from arena_mcp.schemas.search import (
    SearchParams,
    NormalizedSearchItem,
    NormalizedSearchResult,
)
from arena_mcp.schemas.contents import (
    NormalizedConnectable,
    ChannelContentsParams,
    BlockConnectionsParams,
    UserContentsParams,
    ConnectionResult,
)
from arena_mcp.schemas.writes import (
    CreateChannelInput,
    CreateBlockInput,
    ConnectBlockInput,
    MoveConnectionInput,
)

__all__ = [
    "PaginationMeta",
    "PaginatedResult",
    "NormalizedMarkdown",
    "EmbeddedUser",
    "ConnectionContext",
    "ChannelCounts",
    "NormalizedChannel",
    "ChannelResolution",
    "BLOCK_TYPES",
    "NormalizedImage",
    "NormalizedAttachment",
    "NormalizedEmbed",
    "NormalizedBlock",
    "UserCounts",
    "NormalizedUser",
    "SearchParams",
    "NormalizedSearchItem",
    "NormalizedSearchResult",
    "NormalizedConnectable",
    "ChannelContentsParams",
    "BlockConnectionsParams",
    "UserContentsParams",
    "ConnectionResult",
    "CreateChannelInput",
    "CreateBlockInput",
    "ConnectBlockInput",
    "MoveConnectionInput",
]
