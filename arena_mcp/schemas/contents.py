"""
Schemas - Connectables and Connections

Parameter models for list endpoints, the channel/block union and
connection write results.
"""

from pydantic import BaseModel, Field
from typing import Annotated, Any, Literal, Optional, Union

from arena_mcp.schemas.block import NormalizedBlock
from arena_mcp.schemas.channel import NormalizedChannel
from arena_mcp.schemas.common import FrozenModel

NormalizedConnectable = Annotated[
    Union[NormalizedChannel, NormalizedBlock],
    Field(discriminator="type"),
]

ContentTypeFilter = Literal[
    "Text", "Image", "Link", "Attachment", "Embed", "Channel", "Block",
]
ContentSort = Literal[
    "created_at_desc", "created_at_asc", "updated_at_desc", "updated_at_asc",
]
ChannelContentSort = Literal[
    "position_asc",
    "position_desc",
    "created_at_desc",
    "created_at_asc",
    "updated_at_desc",
    "updated_at_asc",
]
ConnectionSort = Literal["created_at_desc", "created_at_asc"]
ConnectionFilter = Literal["ALL", "OWN", "EXCLUDE_OWN"]


class ChannelContentsParams(BaseModel):
    id_or_slug: str = Field(min_length=1)
    page: Optional[int] = Field(default=None, ge=1)
    per: Optional[int] = Field(default=None, ge=1, le=100)
    sort: Optional[ChannelContentSort] = None
    user_id: Optional[int] = Field(default=None, gt=0)


class BlockConnectionsParams(BaseModel):
    id: int = Field(gt=0)
    page: Optional[int] = Field(default=None, ge=1)
    per: Optional[int] = Field(default=None, ge=1, le=100)
    sort: Optional[ConnectionSort] = None
    filter: Optional[ConnectionFilter] = None


class UserContentsParams(BaseModel):
    id_or_slug: str = Field(min_length=1)
    page: Optional[int] = Field(default=None, ge=1)
    per: Optional[int] = Field(default=None, ge=1, le=100)
    sort: Optional[ContentSort] = None
    type: Optional[ContentTypeFilter] = None


class ConnectionResult(FrozenModel):
    """Outcome of connecting or moving a connectable."""
    id: int
    connectable_id: Optional[int] = None
    connectable_type: Optional[str] = None
    channel_id: Optional[int] = None
    created_at: Optional[str] = None
    raw: Any = None
