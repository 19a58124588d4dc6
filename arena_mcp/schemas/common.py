"""
Schemas - Shared Models

Pagination and embedded value objects reused across entities.
"""

from pydantic import BaseModel, ConfigDict
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class FrozenModel(BaseModel):
    """Immutable value record."""
    model_config = ConfigDict(frozen=True)


class PaginationMeta(FrozenModel):
    """Page position reported by list endpoints."""
    current_page: int = 1
    next_page: Optional[int] = None
    prev_page: Optional[int] = None
    per_page: int = 0
    total_pages: int = 1
    total_count: int = 0
    has_more_pages: bool = False


class PaginatedResult(FrozenModel, Generic[T]):
    """One page of normalized entities."""
    data: List[T] = []
    meta: PaginationMeta = PaginationMeta()


class NormalizedMarkdown(FrozenModel):
    """The same text in three renderings."""
    markdown: str
    html: str
    plain: str


class EmbeddedUser(FrozenModel):
    """User summary embedded in channels, blocks and connections."""
    id: int
    slug: str
    name: str
    avatar: Optional[str] = None
    initials: Optional[str] = None


class ConnectionContext(FrozenModel):
    """How a connectable sits inside the channel it was listed from."""
    id: int
    position: Optional[int] = None
    pinned: Optional[bool] = None
    connected_at: Optional[str] = None
    connected_by: Optional[EmbeddedUser] = None
