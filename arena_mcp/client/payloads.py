"""
Client - Write Payloads

Builds request bodies for the v3 mutation endpoints from validated inputs.
"""

import re
from typing import Any, Dict, List

from arena_mcp.schemas import (
    ConnectBlockInput,
    CreateBlockInput,
    CreateChannelInput,
    MoveConnectionInput,
)

MAX_CHANNEL_IDS = 20

_WINDOWS_PATH_RE = re.compile(r"^[A-Za-z]:\\")


def _check_channel_ids(channel_ids: List[int]) -> None:
    if not channel_ids:
        raise ValueError("channel_ids must contain at least one channel ID.")
    if len(channel_ids) > MAX_CHANNEL_IDS:
        raise ValueError(f"channel_ids cannot exceed {MAX_CHANNEL_IDS} IDs.")


def looks_like_local_file_path(value: str) -> bool:
    if value.startswith("file://"):
        return True
    if value.startswith(("/", "./", "../")):
        return True
    return bool(_WINDOWS_PATH_RE.match(value))


def _with_optional(payload: Dict[str, Any], source, fields) -> Dict[str, Any]:
    for name in fields:
        value = getattr(source, name)
        if value is not None:
            payload[name] = value
    return payload


def build_create_channel_payload(data: CreateChannelInput) -> Dict[str, Any]:
    payload = {
        "title": data.title,
        "visibility": data.visibility or "closed",
    }
    return _with_optional(payload, data, ("description", "group_id"))


def build_create_block_payload(data: CreateBlockInput) -> Dict[str, Any]:
    """
    Body for ``POST /v3/blocks``.

    Raises:
        ValueError: bad channel id count, or ``value`` is a local file path
            (uploads are not supported; a public URL is required).
    """
    _check_channel_ids(data.channel_ids)
    if looks_like_local_file_path(data.value):
        raise ValueError(
            "Local file uploads are not supported by this server. "
            "Provide a public URL in `value` instead."
        )

    payload = {"value": data.value, "channel_ids": list(data.channel_ids)}
    return _with_optional(
        payload,
        data,
        (
            "title",
            "description",
            "original_source_url",
            "original_source_title",
            "alt_text",
            "insert_at",
        ),
    )


def build_connect_block_payload(data: ConnectBlockInput) -> Dict[str, Any]:
    _check_channel_ids(data.channel_ids)
    payload = {
        "connectable_id": data.block_id,
        "connectable_type": "Block",
        "channel_ids": list(data.channel_ids),
    }
    return _with_optional(payload, data, ("position",))


def build_move_connection_payload(data: MoveConnectionInput) -> Dict[str, Any]:
    if data.movement == "insert_at" and data.position is None:
        raise ValueError("position is required when movement is insert_at.")
    return _with_optional({"movement": data.movement}, data, ("position",))
