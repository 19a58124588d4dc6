"""
MCP Resources - Are.na Entities

Read-only ``arena://`` views of channels, blocks, users and the
authenticated account.
"""

from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError

from arena_mcp.client import get_client
from arena_mcp.errors import ErrorContext, to_user_facing_error
from arena_mcp.schemas import (
    BlockConnectionsParams,
    ChannelContentsParams,
    UserContentsParams,
)
from arena_mcp.services import ChannelResolver
from arena_mcp.tools.common import TOOL_ERRORS

router = FastMCP("resources")


def _resource_error(error: BaseException, operation: str, uri: str) -> ResourceError:
    return ResourceError(
        to_user_facing_error(error, ErrorContext(operation=operation, target=uri))
    )


@router.resource(
    "arena://channel/{id_or_slug}",
    name="arena-channel",
    description="Read a channel and its latest contents.",
    mime_type="application/json",
)
async def channel_resource(id_or_slug: str) -> dict:
    client = get_client()
    try:
        resolution = await ChannelResolver(client).resolve(id_or_slug)
        contents = await client.get_channel_contents(
            ChannelContentsParams(id_or_slug=resolution.id_or_slug, page=1)
        )
    except TOOL_ERRORS as e:
        raise _resource_error(e, "arena://channel", f"arena://channel/{id_or_slug}") from e

    return {
        "channel": resolution.channel.model_dump(),
        "strategy": resolution.strategy,
        "contents": [item.model_dump() for item in contents.data],
        "meta": contents.meta.model_dump(),
    }


@router.resource(
    "arena://block/{id}",
    name="arena-block",
    description="Read full details for a block and where it is connected.",
    mime_type="application/json",
)
async def block_resource(id: str) -> dict:
    uri = f"arena://block/{id}"
    client = get_client()
    try:
        block_id = int(id)
    except ValueError as e:
        raise ResourceError(f"Invalid block ID: {id}") from e

    try:
        block = await client.get_block(block_id)
        connections = await client.get_block_connections(
            BlockConnectionsParams(id=block_id, page=1)
        )
    except TOOL_ERRORS as e:
        raise _resource_error(e, "arena://block", uri) from e

    return {
        "block": block.model_dump(),
        "connections": [channel.model_dump() for channel in connections.data],
    }


@router.resource(
    "arena://user/{id_or_slug}",
    name="arena-user",
    description="Read user profile and recent content.",
    mime_type="application/json",
)
async def user_resource(id_or_slug: str) -> dict:
    client = get_client()
    try:
        user = await client.get_user(id_or_slug)
        contents = await client.get_user_contents(
            UserContentsParams(id_or_slug=id_or_slug, page=1)
        )
    except TOOL_ERRORS as e:
        raise _resource_error(e, "arena://user", f"arena://user/{id_or_slug}") from e

    return {
        "user": user.model_dump(),
        "contents": [item.model_dump() for item in contents.data],
        "meta": contents.meta.model_dump(),
    }


@router.resource(
    "arena://me",
    name="arena-me",
    description="Read the currently authenticated user profile and latest channels.",
    mime_type="application/json",
)
async def me_resource() -> dict:
    client = get_client()
    try:
        me = await client.get_me()
        channels = await client.get_user_contents(
            UserContentsParams(id_or_slug=me.slug, page=1, type="Channel")
        )
    except TOOL_ERRORS as e:
        raise _resource_error(e, "arena://me", "arena://me") from e

    return {
        "user": me.model_dump(),
        "channels": [item.model_dump() for item in channels.data],
        "meta": channels.meta.model_dump(),
    }
