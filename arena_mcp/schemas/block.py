"""
Schemas - Block Models

Blocks carry at most one populated type-specific payload
(content, image, attachment or embed).
"""

from typing import Literal, Optional

from arena_mcp.schemas.common import (
    ConnectionContext,
    EmbeddedUser,
    FrozenModel,
    NormalizedMarkdown,
)

BlockType = Literal["Text", "Image", "Link", "Attachment", "Embed", "PendingBlock"]
BLOCK_TYPES = ("Text", "Image", "Link", "Attachment", "Embed", "PendingBlock")


class NormalizedImage(FrozenModel):
    """Image payload with its resized variants."""
    src: Optional[str] = None
    small: Optional[str] = None
    medium: Optional[str] = None
    large: Optional[str] = None
    square: Optional[str] = None
    alt_text: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    content_type: Optional[str] = None
    filename: Optional[str] = None
    file_size: Optional[int] = None


class NormalizedAttachment(FrozenModel):
    """Uploaded file payload."""
    url: str
    filename: Optional[str] = None
    content_type: Optional[str] = None
    file_size: Optional[int] = None
    file_extension: Optional[str] = None


class NormalizedEmbed(FrozenModel):
    """oEmbed-style payload."""
    url: Optional[str] = None
    source_url: Optional[str] = None
    html: Optional[str] = None
    title: Optional[str] = None
    type: Optional[str] = None
    author_name: Optional[str] = None


class NormalizedBlock(FrozenModel):
    """A block as returned by the v3 API."""
    type: BlockType
    id: int
    title: Optional[str] = None
    description: Optional[NormalizedMarkdown] = None
    state: Optional[str] = None
    visibility: Optional[str] = None
    comment_count: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    user: Optional[EmbeddedUser] = None
    source_url: Optional[str] = None
    source_title: Optional[str] = None
    content: Optional[NormalizedMarkdown] = None
    image: Optional[NormalizedImage] = None
    attachment: Optional[NormalizedAttachment] = None
    embed: Optional[NormalizedEmbed] = None
    connection: Optional[ConnectionContext] = None
