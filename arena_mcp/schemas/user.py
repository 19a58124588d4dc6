"""
Schemas - User Models
"""

from typing import Optional

from arena_mcp.schemas.common import FrozenModel, NormalizedMarkdown


class UserCounts(FrozenModel):
    """User totals; each count is independently optional."""
    channels: Optional[int] = None
    following: Optional[int] = None
    followers: Optional[int] = None
    blocks: Optional[int] = None


class NormalizedUser(FrozenModel):
    """A user profile."""
    id: int
    slug: str
    name: str
    avatar: Optional[str] = None
    initials: Optional[str] = None
    bio: Optional[NormalizedMarkdown] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    counts: Optional[UserCounts] = None
