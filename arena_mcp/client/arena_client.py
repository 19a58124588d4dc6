"""
Client - Are.na API Client

Async HTTP client for the Are.na v3 API with bounded concurrency,
exponential-backoff retries and the v2 search fallback.
"""

import asyncio
import logging
import random as _random
from typing import Any, Awaitable, Callable, Dict, Optional
from urllib.parse import quote

import httpx

from arena_mcp.config import clamp_per_page, get_settings
from arena_mcp.errors import ArenaApiError
from arena_mcp.client.limiter import ConcurrencyLimiter
from arena_mcp.client.normalize import (
    normalize_block,
    normalize_channel,
    normalize_channel_list,
    normalize_connectable_list,
    normalize_connection_result,
    normalize_search_response_v2,
    normalize_search_response_v3,
    normalize_user,
)
from arena_mcp.client.retry import next_retry_action, parse_retry_after_seconds
from arena_mcp.schemas import (
    BlockConnectionsParams,
    ChannelContentsParams,
    ConnectionResult,
    NormalizedBlock,
    NormalizedChannel,
    NormalizedSearchResult,
    NormalizedUser,
    PaginatedResult,
    SearchParams,
    UserContentsParams,
)

logger = logging.getLogger(__name__)


async def _sleep_ms(delay_ms: int) -> None:
    await asyncio.sleep(delay_ms / 1000)


def serialize_query(query: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """
    Flatten query parameters for the wire.

    ``None`` values and empty lists are dropped, lists are comma-joined and
    booleans are sent as ``true``/``false``.
    """
    params: Dict[str, str] = {}
    for key, value in (query or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            if not value:
                continue
            params[key] = ",".join(str(item) for item in value)
        elif isinstance(value, bool):
            params[key] = "true" if value else "false"
        else:
            params[key] = str(value)
    return params


def _parse_body(response: httpx.Response) -> Any:
    if response.status_code == 204:
        return None
    content_type = response.headers.get("content-type", "")
    try:
        if "application/json" in content_type:
            return response.json()
        return response.text
    except ValueError:
        return None


def _v2_search_kind(search_type: Optional[str]) -> Optional[str]:
    """Map a v3 search type onto the coarser v2 ``kind`` filter."""
    if not search_type or search_type in ("All", "Group"):
        return None
    if search_type == "Channel":
        return "channels"
    if search_type == "User":
        return "users"
    return "blocks"


class ArenaClient:
    """
    Are.na API client.

    All requests share one ``ConcurrencyLimiter``; callers past the limit
    wait in FIFO order. ``transport``, ``sleep_ms`` and ``random`` are
    injection points for tests.
    """

    def __init__(
        self,
        settings=None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep_ms: Optional[Callable[[int], Awaitable[None]]] = None,
        random: Optional[Callable[[], float]] = None,
    ):
        self.settings = settings or get_settings()
        self.limiter = ConcurrencyLimiter(
            self.settings.arena.max_concurrent_requests
        )
        self._transport = transport
        self._sleep_ms = sleep_ms or _sleep_ms
        self._random = random or _random.random
        self._http: Optional[httpx.AsyncClient] = None

    @property
    def http(self) -> httpx.AsyncClient:
        """Lazy load the underlying httpx client."""
        if self._http is None:
            arena = self.settings.arena
            self._http = httpx.AsyncClient(
                base_url=arena.api_base_url,
                timeout=arena.api_timeout_ms / 1000,
                transport=self._transport,
                headers={
                    "Authorization": f"Bearer {arena.access_token}",
                    "Accept": "application/json",
                },
            )
        return self._http

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def __aenter__(self) -> "ArenaClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # Request engine
    async def request(
        self,
        method: str,
        path: str,
        query: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
        expect_no_content: bool = False,
    ) -> Any:
        """
        Issue a request and return the parsed body.

        Retries 429, 5xx and transport failures (timeouts included) up to
        ``ARENA_MAX_RETRIES`` times. A 204 with ``expect_no_content`` returns
        ``None``.

        Raises:
            ArenaApiError: non-2xx response that is not retryable or has
                exhausted the retry budget.
            httpx.TransportError: the last transport failure, unchanged,
                once the retry budget is spent.
        """
        arena = self.settings.arena
        params = serialize_query(query)
        request_kwargs: Dict[str, Any] = {"params": params}
        if method == "POST":
            request_kwargs["json"] = body or {}
            request_kwargs["headers"] = {"Content-Type": "application/json"}

        async with self.limiter:
            attempt = 0
            while True:
                try:
                    response = await self.http.request(method, path, **request_kwargs)
                except httpx.TransportError as exc:
                    action = next_retry_action(
                        attempt,
                        arena.max_retries,
                        arena.backoff_base_ms,
                        random=self._random,
                    )
                    if action is None:
                        logger.error(
                            "%s %s failed after %d attempt(s): %r",
                            method, path, attempt + 1, exc,
                        )
                        raise
                    logger.warning(
                        "%s %s transport error %r, retry %d in %dms",
                        method, path, exc, attempt + 1, action.delay_ms,
                    )
                    attempt += 1
                    await self._sleep_ms(action.delay_ms)
                    continue

                if expect_no_content and response.status_code == 204:
                    return None

                parsed = _parse_body(response)
                if response.is_success:
                    return parsed

                retry_after = parse_retry_after_seconds(
                    response.headers.get("retry-after")
                )
                error = ArenaApiError(
                    f"Are.na API request failed with {response.status_code}",
                    status=response.status_code,
                    response_body=parsed,
                    retry_after_seconds=retry_after,
                    url=str(response.url),
                )
                action = next_retry_action(
                    attempt,
                    arena.max_retries,
                    arena.backoff_base_ms,
                    status=response.status_code,
                    retry_after_seconds=retry_after,
                    random=self._random,
                )
                if action is None:
                    if error.retryable:
                        logger.error(
                            "%s %s gave up after %d attempt(s) with %d",
                            method, error.url, attempt + 1, error.status,
                        )
                    raise error
                logger.warning(
                    "%s %s returned %d, retry %d in %dms",
                    method, error.url, error.status, attempt + 1, action.delay_ms,
                )
                attempt += 1
                await self._sleep_ms(action.delay_ms)

    def _per(self, per: Optional[int]) -> int:
        return clamp_per_page(per if per is not None else self.settings.arena.default_per_page)

    # Reads
    async def get_me(self) -> NormalizedUser:
        return normalize_user(await self.request("GET", "/v3/me"))

    async def get_channel(self, id_or_slug: str) -> NormalizedChannel:
        payload = await self.request("GET", f"/v3/channels/{quote(str(id_or_slug), safe='')}")
        return normalize_channel(payload)

    async def get_channel_contents(self, params: ChannelContentsParams) -> PaginatedResult:
        """One page of a channel's blocks and channels, in channel order."""
        payload = await self.request(
            "GET",
            f"/v3/channels/{quote(params.id_or_slug, safe='')}/contents",
            query={
                "page": params.page or 1,
                "per": self._per(params.per),
                "sort": params.sort or "created_at_desc",
                "user_id": params.user_id,
            },
        )
        return normalize_connectable_list(payload)

    async def get_block(self, block_id: int) -> NormalizedBlock:
        return normalize_block(await self.request("GET", f"/v3/blocks/{block_id}"))

    async def get_block_connections(self, params: BlockConnectionsParams) -> PaginatedResult:
        """Channels a block is connected to."""
        payload = await self.request(
            "GET",
            f"/v3/blocks/{params.id}/connections",
            query={
                "page": params.page or 1,
                "per": self._per(params.per),
                "sort": params.sort or "created_at_desc",
                "filter": params.filter or "ALL",
            },
        )
        return normalize_channel_list(payload)

    async def get_user(self, id_or_slug: str) -> NormalizedUser:
        payload = await self.request("GET", f"/v3/users/{quote(str(id_or_slug), safe='')}")
        return normalize_user(payload)

    async def get_user_contents(self, params: UserContentsParams) -> PaginatedResult:
        payload = await self.request(
            "GET",
            f"/v3/users/{quote(params.id_or_slug, safe='')}/contents",
            query={
                "page": params.page or 1,
                "per": self._per(params.per),
                "sort": params.sort or "created_at_desc",
                "type": params.type,
            },
        )
        return normalize_connectable_list(payload)

    # Search
    async def search(self, params: SearchParams) -> NormalizedSearchResult:
        """
        Search with v3, falling back to v2 when v3 is premium-gated.

        Only a 403 from v3 with ``ARENA_ENABLE_V2_SEARCH_FALLBACK`` on
        triggers the fallback; every other failure propagates.
        """
        try:
            payload = await self.search_v3(params)
        except ArenaApiError as exc:
            if exc.status != 403 or not self.settings.arena.enable_v2_search_fallback:
                raise
            logger.info("v3 search returned 403, falling back to v2 search")
            return normalize_search_response_v2(await self.search_v2(params))
        return normalize_search_response_v3(payload)

    async def search_v3(self, params: SearchParams) -> Any:
        return await self.request(
            "GET",
            "/v3/search",
            query={
                "query": params.query,
                "type": params.type,
                "scope": params.scope,
                "page": params.page or 1,
                "per": self._per(params.per),
                "sort": params.sort,
                "after": params.after,
                "seed": params.seed,
                "user_id": params.user_id,
                "group_id": params.group_id,
                "channel_id": params.channel_id,
                "ext": params.ext,
            },
        )

    async def search_v2(self, params: SearchParams) -> Any:
        return await self.request(
            "GET",
            "/v2/search",
            query={
                "q": params.query,
                "page": params.page or 1,
                "per": self._per(params.per),
                "kind": _v2_search_kind(params.type),
            },
        )

    # Writes (v3 only, no fallback)
    async def create_channel(self, payload: Dict[str, Any]) -> NormalizedChannel:
        return normalize_channel(await self.request("POST", "/v3/channels", body=payload))

    async def create_block(self, payload: Dict[str, Any]) -> NormalizedBlock:
        return normalize_block(await self.request("POST", "/v3/blocks", body=payload))

    async def connect_block(self, payload: Dict[str, Any]) -> ConnectionResult:
        response = await self.request("POST", "/v3/connections", body=payload)
        return normalize_connection_result(response)

    async def disconnect_connection(self, connection_id: int) -> None:
        await self.request(
            "DELETE",
            f"/v3/connections/{connection_id}",
            expect_no_content=True,
        )

    async def move_connection(
        self, connection_id: int, payload: Dict[str, Any]
    ) -> ConnectionResult:
        response = await self.request(
            "POST", f"/v3/connections/{connection_id}/move", body=payload
        )
        return normalize_connection_result(response)
