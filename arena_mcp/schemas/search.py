"""
Schemas - Search Models

Pydantic models for search parameters and normalized results.
"""

from pydantic import BaseModel, Field
from typing import Any, List, Literal, Optional

from arena_mcp.schemas.block import BlockType
from arena_mcp.schemas.common import FrozenModel, PaginationMeta

SearchType = Literal[
    "All", "Text", "Image", "Link", "Attachment", "Embed",
    "Channel", "Block", "User", "Group",
]
SearchScope = Literal["all", "my", "following"]
SearchSort = Literal[
    "score_desc",
    "created_at_desc",
    "created_at_asc",
    "updated_at_desc",
    "updated_at_asc",
    "name_asc",
    "name_desc",
    "connections_count_desc",
    "random",
]
SourceApi = Literal["v3", "v2-fallback"]
EntityType = Literal["Block", "Channel", "User", "Group"]


class SearchParams(BaseModel):
    """Search query input."""
    query: str = Field(min_length=1)
    type: Optional[SearchType] = None
    scope: Optional[SearchScope] = None
    page: Optional[int] = Field(default=None, ge=1)
    per: Optional[int] = Field(default=None, ge=1, le=100)
    sort: Optional[SearchSort] = None
    after: Optional[str] = None
    seed: Optional[int] = Field(default=None, gt=0)
    user_id: Optional[int] = Field(default=None, gt=0)
    group_id: Optional[int] = Field(default=None, gt=0)
    channel_id: Optional[int] = Field(default=None, gt=0)
    ext: Optional[List[str]] = None


class NormalizedSearchItem(FrozenModel):
    """
    Single search hit of any entity type.

    ``raw`` keeps the untouched upstream record. It is best-effort and not
    covered by normalization: fields differ between v3 and v2.
    """
    id: int
    entity_type: EntityType
    title: str
    subtitle: Optional[str] = None
    slug: Optional[str] = None
    block_type: Optional[BlockType] = None
    url: Optional[str] = None
    raw: Any = None


class NormalizedSearchResult(FrozenModel):
    """Search results tagged with the API generation that served them."""
    source_api: SourceApi
    items: List[NormalizedSearchItem] = []
    meta: PaginationMeta = PaginationMeta()
