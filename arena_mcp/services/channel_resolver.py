"""
Services - Channel Resolver

Turns what a person pastes (id, slug, ``owner/slug``, are.na URL or a
channel title) into a verified channel.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import unquote, urlsplit

from arena_mcp.client import ArenaClient, get_client
from arena_mcp.config import ARENA_WEB_HOSTS
from arena_mcp.errors import (
    AmbiguousChannelError,
    ArenaApiError,
    OwnerMismatchError,
)
from arena_mcp.schemas import (
    ChannelResolution,
    NormalizedChannel,
    NormalizedSearchItem,
    SearchParams,
)

logger = logging.getLogger(__name__)

SEARCH_CANDIDATE_LIMIT = 10
MAX_LISTED_CANDIDATES = 5


@dataclass(frozen=True)
class ChannelInput:
    """Identifier extracted from raw input, before any network call."""
    identifier: str
    from_url: bool = False
    expected_owner_slug: Optional[str] = None


def _segments(path: str) -> List[str]:
    return [segment.strip() for segment in path.split("/") if segment.strip()]


def _parse_owner_slug(raw_input: str) -> ChannelInput:
    trimmed = raw_input.strip()
    segments = _segments(trimmed)
    if len(segments) >= 2:
        return ChannelInput(
            identifier=segments[1],
            expected_owner_slug=segments[0].lower() or None,
        )
    return ChannelInput(identifier=trimmed)


def parse_channel_input(raw_input: str) -> ChannelInput:
    """
    Extract the channel identifier and any owner constraint.

    ``https://www.are.na/channel/<slug>`` gives the slug alone,
    ``https://www.are.na/<owner>/<slug>`` and ``owner/slug`` also pin the
    owner. Block URLs and other hosts go through the ``owner/slug`` rules.
    """
    trimmed = raw_input.strip()
    if not trimmed:
        return ChannelInput(identifier=trimmed)

    try:
        parts = urlsplit(trimmed)
    except ValueError:
        return _parse_owner_slug(trimmed)
    if not (parts.scheme and parts.netloc):
        return _parse_owner_slug(trimmed)
    if (parts.hostname or "").lower() not in ARENA_WEB_HOSTS:
        return _parse_owner_slug(trimmed)

    segments = _segments(parts.path)
    if not segments or segments[0] == "block":
        return _parse_owner_slug(trimmed)
    if segments[0] == "channel" and len(segments) >= 2:
        return ChannelInput(identifier=unquote(segments[1]), from_url=True)
    if len(segments) >= 2:
        return ChannelInput(
            identifier=unquote(segments[1]),
            from_url=True,
            expected_owner_slug=unquote(segments[0]).lower() or None,
        )
    return ChannelInput(identifier=unquote(segments[0]), from_url=True)


def verify_channel_owner(
    channel: NormalizedChannel,
    expected_owner_slug: Optional[str],
    raw_input: str,
) -> None:
    """
    Fail unless the channel belongs to the expected owner.

    A channel without an owner slug fails too: content under the wrong
    assumed owner is worse than no content.
    """
    if not expected_owner_slug:
        return
    actual = channel.owner.slug.lower() if channel.owner and channel.owner.slug else None
    if actual != expected_owner_slug:
        raise OwnerMismatchError(raw_input, expected_owner_slug, actual)


class ChannelResolver:
    """Resolves channel references, searching when direct lookup 404s."""

    def __init__(self, client: Optional[ArenaClient] = None):
        self.client = client or get_client()

    async def resolve(self, raw_input: str) -> ChannelResolution:
        """
        Resolve ``raw_input`` to a channel.

        Tries a direct lookup first. Only a 404 leads to a scoped search,
        which picks (in order) a unique exact slug match, a unique exact
        title match, or a sole candidate.

        Raises:
            OwnerMismatchError: the channel's owner differs from the one
                named in the input, or is unknown.
            AmbiguousChannelError: the search left several candidates.
            ArenaApiError: the direct lookup failed for any reason other
                than 404, or 404 with no search candidates.
        """
        parsed = parse_channel_input(raw_input)

        try:
            channel = await self.client.get_channel(parsed.identifier)
        except ArenaApiError as exc:
            if exc.status != 404:
                raise
            return await self._resolve_by_search(raw_input, parsed, exc)

        verify_channel_owner(channel, parsed.expected_owner_slug, raw_input)
        return ChannelResolution(
            channel=channel,
            id_or_slug=parsed.identifier,
            strategy="url-extracted" if parsed.from_url else "direct",
            expected_owner_slug=parsed.expected_owner_slug,
        )

    async def _resolve_by_search(
        self,
        raw_input: str,
        parsed: ChannelInput,
        not_found: ArenaApiError,
    ) -> ChannelResolution:
        query = raw_input.strip()
        logger.info("Channel %r not found directly, searching", query)
        result = await self.client.search(
            SearchParams(
                query=query,
                type="Channel",
                scope="my",
                per=SEARCH_CANDIDATE_LIMIT,
                sort="score_desc",
            )
        )
        candidates = [item for item in result.items if item.entity_type == "Channel"]

        identifier = parsed.identifier.lower()
        by_slug = [c for c in candidates if c.slug is not None and c.slug.lower() == identifier]
        if len(by_slug) == 1:
            return await self._select(by_slug[0], "search-exact-slug", raw_input, parsed, result.source_api)

        by_title = [c for c in candidates if c.title.strip().lower() == query.lower()]
        if len(by_title) == 1:
            return await self._select(by_title[0], "search-exact-title", raw_input, parsed, result.source_api)

        if len(candidates) == 1:
            return await self._select(candidates[0], "search-single", raw_input, parsed, result.source_api)

        if len(candidates) > 1:
            raise AmbiguousChannelError(
                raw_input,
                [
                    {"title": c.title, "slug": c.slug, "id": c.id}
                    for c in candidates[:MAX_LISTED_CANDIDATES]
                ],
            )

        raise not_found

    async def _select(
        self,
        candidate: NormalizedSearchItem,
        strategy: str,
        raw_input: str,
        parsed: ChannelInput,
        source_api: str,
    ) -> ChannelResolution:
        id_or_slug = candidate.slug or str(candidate.id)
        channel = await self.client.get_channel(id_or_slug)
        verify_channel_owner(channel, parsed.expected_owner_slug, raw_input)
        return ChannelResolution(
            channel=channel,
            id_or_slug=id_or_slug,
            strategy=strategy,
            expected_owner_slug=parsed.expected_owner_slug,
            search_source_api=source_api,
        )
