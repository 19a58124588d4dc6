"""
Client - Response Normalizer

Converts loosely-typed Are.na JSON (v3 entities and the legacy v2 search
shape) into the frozen models in ``arena_mcp.schemas``.

Every function here accepts any value and never raises: missing or
malformed fields degrade to ``None`` or a neutral default.
"""

import math
from typing import Any, Dict, List, Optional

from arena_mcp.config import ARENA_WEB_URL
from arena_mcp.schemas import (
    BLOCK_TYPES,
    ChannelCounts,
    ConnectionContext,
    ConnectionResult,
    EmbeddedUser,
    NormalizedAttachment,
    NormalizedBlock,
    NormalizedChannel,
    NormalizedConnectable,
    NormalizedEmbed,
    NormalizedImage,
    NormalizedMarkdown,
    NormalizedSearchItem,
    NormalizedSearchResult,
    NormalizedUser,
    PaginatedResult,
    PaginationMeta,
    UserCounts,
)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _as_int(value: Any) -> Optional[int]:
    # bool is an int subclass; JSON true/false are not numbers
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def _as_bool(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _first(*values: Optional[str]) -> str:
    for value in values:
        if value is not None:
            return value
    return ""


def _block_type(value: Any) -> str:
    raw = _as_str(value)
    return raw if raw in BLOCK_TYPES else "PendingBlock"


def normalize_markdown(value: Any) -> Optional[NormalizedMarkdown]:
    """
    Normalize a rich-text field.

    A bare string fills all three renderings. An object fills the renderings
    it lacks from the ones it has, or yields ``None`` if it has none.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return NormalizedMarkdown(markdown=value, html=value, plain=value)

    record = _as_dict(value)
    markdown = _as_str(record.get("markdown"))
    html = _as_str(record.get("html"))
    plain = _as_str(record.get("plain"))
    if not markdown and not html and not plain:
        return None
    return NormalizedMarkdown(
        markdown=_first(markdown, plain, html),
        html=_first(html, markdown, plain),
        plain=_first(plain, markdown, html),
    )


def normalize_pagination_meta(value: Any) -> PaginationMeta:
    """
    Normalize list ``meta``.

    An explicit ``has_more_pages`` boolean is trusted; otherwise more pages
    exist when ``next_page`` is a positive number.
    """
    record = _as_dict(value)
    next_page = _as_int(record.get("next_page"))
    has_more_pages = _as_bool(record.get("has_more_pages"))
    if has_more_pages is None:
        has_more_pages = next_page is not None and next_page > 0

    current_page = _as_int(record.get("current_page"))
    per_page = _as_int(record.get("per_page"))
    total_pages = _as_int(record.get("total_pages"))
    total_count = _as_int(record.get("total_count"))
    return PaginationMeta(
        current_page=1 if current_page is None else current_page,
        next_page=next_page,
        prev_page=_as_int(record.get("prev_page")),
        per_page=0 if per_page is None else per_page,
        total_pages=1 if total_pages is None else total_pages,
        total_count=0 if total_count is None else total_count,
        has_more_pages=has_more_pages,
    )


def _normalize_embedded_user(value: Any) -> Optional[EmbeddedUser]:
    record = _as_dict(value)
    user_id = _as_int(record.get("id"))
    slug = _as_str(record.get("slug"))
    name = _as_str(record.get("name"))
    if user_id is None or slug is None or name is None:
        return None
    return EmbeddedUser(
        id=user_id,
        slug=slug,
        name=name,
        avatar=_as_str(record.get("avatar")),
        initials=_as_str(record.get("initials")),
    )


def _normalize_connection_context(value: Any) -> Optional[ConnectionContext]:
    record = _as_dict(value)
    connection_id = _as_int(record.get("id"))
    if connection_id is None:
        return None
    return ConnectionContext(
        id=connection_id,
        position=_as_int(record.get("position")),
        pinned=_as_bool(record.get("pinned")),
        connected_at=_as_str(record.get("connected_at")),
        connected_by=_normalize_embedded_user(record.get("connected_by")),
    )


def _normalize_image(value: Any) -> Optional[NormalizedImage]:
    record = _as_dict(value)
    if not record:
        return None

    def size_url(key: str) -> Optional[str]:
        return _as_str(_as_dict(record.get(key)).get("url"))

    return NormalizedImage(
        src=_as_str(record.get("src")),
        small=size_url("small"),
        medium=size_url("medium"),
        large=size_url("large"),
        square=size_url("square"),
        alt_text=_as_str(record.get("alt_text")),
        width=_as_int(record.get("width")),
        height=_as_int(record.get("height")),
        content_type=_as_str(record.get("content_type")),
        filename=_as_str(record.get("filename")),
        file_size=_as_int(record.get("file_size")),
    )


def _normalize_attachment(value: Any) -> Optional[NormalizedAttachment]:
    record = _as_dict(value)
    url = _as_str(record.get("url"))
    if url is None:
        return None
    return NormalizedAttachment(
        url=url,
        filename=_as_str(record.get("filename")),
        content_type=_as_str(record.get("content_type")),
        file_size=_as_int(record.get("file_size")),
        file_extension=_as_str(record.get("file_extension")),
    )


def _normalize_embed(value: Any) -> Optional[NormalizedEmbed]:
    record = _as_dict(value)
    if not record:
        return None
    return NormalizedEmbed(
        url=_as_str(record.get("url")),
        source_url=_as_str(record.get("source_url")),
        html=_as_str(record.get("html")),
        title=_as_str(record.get("title")),
        type=_as_str(record.get("type")),
        author_name=_as_str(record.get("author_name")),
    )


def _normalize_channel_counts(value: Any) -> Optional[ChannelCounts]:
    record = _as_dict(value)
    counts = {
        key: _as_int(record.get(key))
        for key in ("blocks", "channels", "contents", "collaborators")
    }
    if any(count is None for count in counts.values()):
        return None
    return ChannelCounts(**counts)


def normalize_channel(value: Any) -> NormalizedChannel:
    """Normalize a v3 channel record."""
    record = _as_dict(value)
    channel_id = _as_int(record.get("id")) or 0
    return NormalizedChannel(
        type="Channel",
        id=channel_id,
        slug=_first(_as_str(record.get("slug")), str(channel_id)),
        title=_first(_as_str(record.get("title")), f"Channel {channel_id}"),
        description=normalize_markdown(record.get("description")),
        state=_as_str(record.get("state")),
        visibility=_as_str(record.get("visibility")),
        created_at=_as_str(record.get("created_at")),
        updated_at=_as_str(record.get("updated_at")),
        owner=_normalize_embedded_user(record.get("owner")),
        counts=_normalize_channel_counts(record.get("counts")),
        connection=_normalize_connection_context(record.get("connection")),
    )


def normalize_block(value: Any) -> NormalizedBlock:
    """Normalize a v3 block record. Unknown types become ``PendingBlock``."""
    record = _as_dict(value)
    source = _as_dict(record.get("source"))
    return NormalizedBlock(
        type=_block_type(record.get("type")),
        id=_as_int(record.get("id")) or 0,
        title=_as_str(record.get("title")),
        description=normalize_markdown(record.get("description")),
        state=_as_str(record.get("state")),
        visibility=_as_str(record.get("visibility")),
        comment_count=_as_int(record.get("comment_count")),
        created_at=_as_str(record.get("created_at")),
        updated_at=_as_str(record.get("updated_at")),
        user=_normalize_embedded_user(record.get("user")),
        source_url=_as_str(source.get("url")),
        source_title=_as_str(source.get("title")),
        content=normalize_markdown(record.get("content")),
        image=_normalize_image(record.get("image")),
        attachment=_normalize_attachment(record.get("attachment")),
        embed=_normalize_embed(record.get("embed")),
        connection=_normalize_connection_context(record.get("connection")),
    )


def normalize_connectable(value: Any) -> NormalizedConnectable:
    """Normalize a channel or block according to its ``type`` tag."""
    if _as_dict(value).get("type") == "Channel":
        return normalize_channel(value)
    return normalize_block(value)


def normalize_user(value: Any) -> NormalizedUser:
    """Normalize a v3 user record."""
    record = _as_dict(value)
    raw_counts = _as_dict(record.get("counts"))
    counts = {
        key: _as_int(raw_counts.get(key))
        for key in ("channels", "following", "followers", "blocks")
    }
    has_counts = any(count is not None for count in counts.values())
    return NormalizedUser(
        id=_as_int(record.get("id")) or 0,
        slug=_first(_as_str(record.get("slug")), ""),
        name=_first(_as_str(record.get("name")), ""),
        avatar=_as_str(record.get("avatar")),
        initials=_as_str(record.get("initials")),
        bio=normalize_markdown(record.get("bio")),
        created_at=_as_str(record.get("created_at")),
        updated_at=_as_str(record.get("updated_at")),
        counts=UserCounts(**counts) if has_counts else None,
    )


def normalize_connectable_list(response: Any) -> PaginatedResult[NormalizedConnectable]:
    """Normalize a mixed channel/block list, keeping upstream order."""
    record = _as_dict(response)
    return PaginatedResult[NormalizedConnectable](
        data=[normalize_connectable(item) for item in _as_list(record.get("data"))],
        meta=normalize_pagination_meta(record.get("meta")),
    )


def normalize_channel_list(response: Any) -> PaginatedResult[NormalizedChannel]:
    record = _as_dict(response)
    return PaginatedResult[NormalizedChannel](
        data=[normalize_channel(item) for item in _as_list(record.get("data"))],
        meta=normalize_pagination_meta(record.get("meta")),
    )


def _web_url(entity_type: str, slug: Optional[str]) -> Optional[str]:
    if not slug:
        return None
    if entity_type == "Channel":
        return f"{ARENA_WEB_URL}/channel/{slug}"
    if entity_type == "User":
        return f"{ARENA_WEB_URL}/{slug}"
    if entity_type == "Group":
        return f"{ARENA_WEB_URL}/group/{slug}"
    return None


def _named_search_item(
    entity_type: str,
    item_id: int,
    title: str,
    slug: Optional[str],
    raw: Any,
) -> NormalizedSearchItem:
    prefixes = {"Channel": "channel/", "User": "@", "Group": "group/"}
    return NormalizedSearchItem(
        id=item_id,
        entity_type=entity_type,
        title=title,
        subtitle=f"{prefixes[entity_type]}{slug}" if slug else None,
        slug=slug,
        block_type=None,
        url=_web_url(entity_type, slug),
        raw=raw,
    )


def _block_search_item(
    record: Dict[str, Any], item_id: int, type_value: Any, raw: Any
) -> NormalizedSearchItem:
    block_type = _block_type(type_value)
    return NormalizedSearchItem(
        id=item_id,
        entity_type="Block",
        title=_first(_as_str(record.get("title")), f"{block_type} block {item_id}"),
        subtitle=_as_str(_as_dict(record.get("source")).get("url")),
        slug=None,
        block_type=block_type,
        url=None,
        raw=raw,
    )


def _search_item_from_v3(value: Any) -> NormalizedSearchItem:
    record = _as_dict(value)
    kind = _as_str(record.get("type"))
    item_id = _as_int(record.get("id")) or 0
    slug = _as_str(record.get("slug"))

    if kind == "Channel":
        title = _first(_as_str(record.get("title")), f"Channel {item_id}")
        return _named_search_item("Channel", item_id, title, slug, value)
    if kind in ("User", "Group"):
        title = _first(_as_str(record.get("name")), f"{kind} {item_id}")
        return _named_search_item(kind, item_id, title, slug, value)
    return _block_search_item(record, item_id, kind, value)


def normalize_search_response_v3(response: Any) -> NormalizedSearchResult:
    """Normalize a ``/v3/search`` response."""
    record = _as_dict(response)
    return NormalizedSearchResult(
        source_api="v3",
        items=[_search_item_from_v3(item) for item in _as_list(record.get("data"))],
        meta=normalize_pagination_meta(record.get("meta")),
    )


def _search_item_from_v2(entity_type: str, value: Any) -> NormalizedSearchItem:
    record = _as_dict(value)
    item_id = _as_int(record.get("id")) or 0
    slug = _as_str(record.get("slug"))

    if entity_type == "Channel":
        title = _first(_as_str(record.get("title")), f"Channel {item_id}")
        return _named_search_item("Channel", item_id, title, slug, value)
    if entity_type == "User":
        title = _first(
            _as_str(record.get("full_name")),
            _as_str(record.get("username")),
            f"User {item_id}",
        )
        return _named_search_item("User", item_id, title, slug, value)
    return _block_search_item(record, item_id, record.get("class"), value)


def normalize_search_response_v2(response: Any) -> NormalizedSearchResult:
    """
    Normalize a legacy ``/v2/search`` response.

    v2 keys results by kind and has no list meta, so items are concatenated
    as blocks, channels, users and paging is derived from
    ``current_page``/``total_pages``.
    """
    record = _as_dict(response)
    per = _as_int(record.get("per"))
    current_page = _as_int(record.get("current_page"))
    total_pages = _as_int(record.get("total_pages"))
    length = _as_int(record.get("length"))
    current_page = 1 if current_page is None else current_page
    total_pages = 1 if total_pages is None else total_pages

    items = (
        [_search_item_from_v2("Block", item) for item in _as_list(record.get("blocks"))]
        + [_search_item_from_v2("Channel", item) for item in _as_list(record.get("channels"))]
        + [_search_item_from_v2("User", item) for item in _as_list(record.get("users"))]
    )
    return NormalizedSearchResult(
        source_api="v2-fallback",
        items=items,
        meta=PaginationMeta(
            current_page=current_page,
            next_page=current_page + 1 if current_page < total_pages else None,
            prev_page=current_page - 1 if current_page > 1 else None,
            per_page=24 if per is None else per,
            total_pages=total_pages,
            total_count=0 if length is None else length,
            has_more_pages=current_page < total_pages,
        ),
    )


def normalize_connection_result(response: Any) -> ConnectionResult:
    record = _as_dict(response)
    return ConnectionResult(
        id=_as_int(record.get("id")) or 0,
        connectable_id=_as_int(record.get("connectable_id")),
        connectable_type=_as_str(record.get("connectable_type")),
        channel_id=_as_int(record.get("channel_id")),
        created_at=_as_str(record.get("created_at")),
        raw=response,
    )
