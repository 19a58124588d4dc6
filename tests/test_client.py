"""
Tests for the Are.na API client: retries, search fallback and typed
operations against a scripted upstream.
"""

import httpx
import pytest

from arena_mcp.errors import ArenaApiError
from arena_mcp.schemas import (
    ChannelContentsParams,
    NormalizedBlock,
    NormalizedChannel,
    SearchParams,
)

from helpers import ScriptedHandler, reply

USER_BODY = {
    "id": 1,
    "slug": "tester",
    "name": "Tester",
    "avatar": None,
    "initials": "T",
    "counts": {"channels": 1},
}

V2_SEARCH_BODY = {
    "current_page": 1,
    "total_pages": 1,
    "length": 1,
    "per": 24,
    "blocks": [{"id": 7, "title": "Fallback Block", "class": "Text"}],
    "channels": [],
    "users": [],
}


class TestRetries:
    """Tests for the retrying request engine."""

    @pytest.mark.asyncio
    async def test_honors_retry_after_on_429(self, make_client, sleeps):
        """Retry-After: 1 sleeps exactly 1000ms before the retry."""
        handler = ScriptedHandler(
            reply(429, {"error": "rate limited"}, {"retry-after": "1"}),
            reply(200, USER_BODY),
        )
        client = make_client(handler, ARENA_MAX_RETRIES=2)

        user = await client.get_me()

        assert user.slug == "tester"
        assert handler.call_count == 2
        assert sleeps.calls == [1000]

    @pytest.mark.asyncio
    async def test_stops_after_max_retries(self, make_client, sleeps):
        """A persistent 503 is raised after the budget is spent."""
        handler = ScriptedHandler(reply(503, {"error": "server unavailable"}))
        client = make_client(handler, ARENA_MAX_RETRIES=2, ARENA_BACKOFF_BASE_MS=100)

        with pytest.raises(ArenaApiError) as exc_info:
            await client.get_me()

        assert exc_info.value.status == 503
        assert handler.call_count == 3
        assert sleeps.calls == [100, 200]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [429, 500, 502, 599])
    @pytest.mark.parametrize("failures,max_retries", [(1, 3), (3, 3), (5, 3), (2, 0)])
    async def test_attempt_count(self, make_client, status, failures, max_retries):
        """Retryable statuses cost min(failures, max_retries) + 1 calls."""
        replies = [reply(status, {"error": "boom"})] * failures + [reply(200, USER_BODY)]
        handler = ScriptedHandler(*replies)
        client = make_client(handler, ARENA_MAX_RETRIES=max_retries)

        if failures <= max_retries:
            user = await client.get_me()
            assert user.id == 1
        else:
            with pytest.raises(ArenaApiError) as exc_info:
                await client.get_me()
            assert exc_info.value.status == status

        assert handler.call_count == min(failures, max_retries) + 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 401, 403, 404, 422])
    async def test_client_errors_are_not_retried(self, make_client, sleeps, status):
        """4xx responses other than 429 fail on the first attempt."""
        handler = ScriptedHandler(
            reply(status, {"details": {"message": "nope"}}),
            reply(200, USER_BODY),
        )
        client = make_client(handler)

        with pytest.raises(ArenaApiError) as exc_info:
            await client.get_me()

        error = exc_info.value
        assert error.status == status
        assert error.response_body == {"details": {"message": "nope"}}
        assert error.url == "https://api.are.na/v3/me"
        assert handler.call_count == 1
        assert sleeps.calls == []

    @pytest.mark.asyncio
    async def test_transport_errors_use_backoff(self, make_client, sleeps):
        """Timeouts and connection errors retry with exponential delays."""
        handler = ScriptedHandler(
            httpx.ReadTimeout("timed out"),
            httpx.ConnectError("refused"),
            reply(200, USER_BODY),
        )
        client = make_client(handler, ARENA_BACKOFF_BASE_MS=100)

        user = await client.get_me()

        assert user.name == "Tester"
        assert handler.call_count == 3
        assert sleeps.calls == [100, 200]

    @pytest.mark.asyncio
    async def test_transport_error_reraised_unchanged(self, make_client):
        """After the budget, the original transport exception surfaces."""
        error = httpx.ConnectError("refused")
        handler = ScriptedHandler(error)
        client = make_client(handler, ARENA_MAX_RETRIES=1)

        with pytest.raises(httpx.ConnectError) as exc_info:
            await client.get_me()

        assert exc_info.value is error
        assert handler.call_count == 2

    @pytest.mark.asyncio
    async def test_text_error_body(self, make_client):
        """Non-JSON error bodies are kept as text."""
        handler = ScriptedHandler(reply(400, text="bad request"))
        client = make_client(handler)

        with pytest.raises(ArenaApiError) as exc_info:
            await client.get_me()

        assert exc_info.value.response_body == "bad request"

    @pytest.mark.asyncio
    async def test_malformed_json_body_becomes_none(self, make_client):
        """A JSON content type with an unparseable body yields None."""
        handler = ScriptedHandler(
            lambda: httpx.Response(
                400, content=b"{not json", headers={"content-type": "application/json"}
            )
        )
        client = make_client(handler)

        with pytest.raises(ArenaApiError) as exc_info:
            await client.get_me()

        assert exc_info.value.response_body is None


class TestRequestShape:
    """Tests for headers, query serialization and bodies."""

    @pytest.mark.asyncio
    async def test_headers_and_query(self, make_client):
        """Bearer token on every request; None dropped, lists joined."""
        handler = ScriptedHandler(reply(200, {"ok": True}))
        client = make_client(handler)

        await client.request(
            "GET",
            "/v3/search",
            query={"query": "cats", "ext": ["png", "jpg"], "user_id": None, "page": 2},
        )

        request = handler.requests[0]
        assert request.headers["authorization"] == "Bearer test-token"
        assert request.url.params["query"] == "cats"
        assert request.url.params["ext"] == "png,jpg"
        assert request.url.params["page"] == "2"
        assert "user_id" not in request.url.params

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self, make_client):
        """POST declares JSON and defaults the body to an empty object."""
        handler = ScriptedHandler(reply(201, {"id": 5, "title": "New"}))
        client = make_client(handler)

        await client.request("POST", "/v3/channels")

        request = handler.requests[0]
        assert request.method == "POST"
        assert request.headers["content-type"] == "application/json"
        assert request.content == b"{}"

    @pytest.mark.asyncio
    async def test_disconnect_handles_204(self, make_client):
        """204 with expect_no_content resolves to None."""
        handler = ScriptedHandler(reply(204))
        client = make_client(handler)

        result = await client.disconnect_connection(33)

        assert result is None
        assert handler.call_count == 1
        assert handler.requests[0].method == "DELETE"
        assert handler.requests[0].url.path == "/v3/connections/33"

    @pytest.mark.asyncio
    async def test_identifiers_are_url_encoded(self, make_client):
        """Slugs are escaped into a single path segment."""
        handler = ScriptedHandler(reply(200, {"id": 3, "slug": "a/b"}))
        client = make_client(handler)

        await client.get_channel("a/b c")

        assert handler.requests[0].url.raw_path.startswith(b"/v3/channels/a%2Fb%20c")


class TestSearchFallback:
    """Tests for the v3 to v2 search fallback."""

    @pytest.mark.asyncio
    async def test_falls_back_to_v2_on_403(self, make_client):
        """A premium 403 from v3 is answered from the v2 endpoint."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/v3/search":
                return httpx.Response(403, json={"error": "premium required"})
            return httpx.Response(200, json=V2_SEARCH_BODY)

        client = make_client(handler)

        result = await client.search(SearchParams(query="fallback test"))

        assert result.source_api == "v2-fallback"
        assert result.items[0].id == 7
        assert result.items[0].block_type == "Text"

    @pytest.mark.asyncio
    async def test_403_propagates_when_disabled(self, make_client):
        """With fallback off the 403 reaches the caller."""
        handler = ScriptedHandler(reply(403, {"error": "premium required"}))
        client = make_client(handler, ARENA_ENABLE_V2_SEARCH_FALLBACK=False)

        with pytest.raises(ArenaApiError) as exc_info:
            await client.search(SearchParams(query="no-fallback"))

        assert exc_info.value.status == 403
        assert handler.call_count == 1

    @pytest.mark.asyncio
    async def test_other_errors_do_not_fall_back(self, make_client):
        """Only 403 triggers the fallback."""
        handler = ScriptedHandler(reply(500, {"error": "boom"}))
        client = make_client(handler, ARENA_MAX_RETRIES=0)

        with pytest.raises(ArenaApiError) as exc_info:
            await client.search(SearchParams(query="x"))

        assert exc_info.value.status == 500
        assert [r.url.path for r in handler.requests] == ["/v3/search"]

    @pytest.mark.asyncio
    async def test_v3_success_is_tagged(self, make_client):
        """A successful v3 search is tagged v3."""
        handler = ScriptedHandler(
            reply(200, {"data": [{"id": 1, "type": "Channel", "slug": "c", "title": "C"}]})
        )
        client = make_client(handler)

        result = await client.search(SearchParams(query="c", per=50))

        assert result.source_api == "v3"
        assert result.items[0].url == "https://www.are.na/channel/c"
        assert handler.requests[0].url.params["per"] == "50"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "search_type,kind",
        [("Channel", "channels"), ("User", "users"), ("Image", "blocks"),
         ("Block", "blocks"), ("All", None), ("Group", None), (None, None)],
    )
    async def test_v2_kind_mapping(self, make_client, search_type, kind):
        """v2 receives the coarser kind filter."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.url.path == "/v3/search":
                return httpx.Response(403, json={"error": "premium required"})
            return httpx.Response(200, json=V2_SEARCH_BODY)

        client = make_client(handler)

        await client.search(SearchParams(query="q", type=search_type))

        v2_params = seen[-1].url.params
        assert seen[-1].url.path == "/v2/search"
        assert v2_params["q"] == "q"
        assert v2_params.get("kind") == kind


class TestTypedOperations:
    """Tests for normalized read and write operations."""

    @pytest.mark.asyncio
    async def test_channel_contents_with_pagination(self, make_client):
        """Channel contents are normalized with their meta."""
        handler = ScriptedHandler(
            reply(200, {
                "data": [
                    {
                        "id": 100,
                        "type": "Text",
                        "title": "Example",
                        "content": {"markdown": "hello", "html": "<p>hello</p>", "plain": "hello"},
                    },
                    {"id": 200, "type": "Channel", "slug": "nested", "title": "Nested"},
                ],
                "meta": {
                    "current_page": 1,
                    "next_page": 2,
                    "prev_page": None,
                    "per_page": 50,
                    "total_pages": 2,
                    "total_count": 75,
                    "has_more_pages": True,
                },
            })
        )
        client = make_client(handler)

        result = await client.get_channel_contents(
            ChannelContentsParams(id_or_slug="test-channel", page=1)
        )

        assert result.meta.current_page == 1
        assert result.meta.has_more_pages is True
        assert isinstance(result.data[0], NormalizedBlock)
        assert result.data[0].type == "Text"
        assert isinstance(result.data[1], NormalizedChannel)
        params = handler.requests[0].url.params
        assert params["per"] == "50"
        assert params["sort"] == "created_at_desc"

    @pytest.mark.asyncio
    async def test_create_block_returns_normalized_block(self, make_client):
        handler = ScriptedHandler(
            reply(201, {
                "id": 22,
                "type": "Text",
                "title": "Created",
                "content": {"markdown": "Body", "html": "<p>Body</p>", "plain": "Body"},
                "source": None,
            })
        )
        client = make_client(handler)

        block = await client.create_block({"value": "Body", "channel_ids": [1]})

        assert block.id == 22
        assert block.type == "Text"

    @pytest.mark.asyncio
    async def test_create_block_403_has_no_fallback(self, make_client):
        """Writes fail hard on 403."""
        handler = ScriptedHandler(
            reply(403, {"error": "Forbidden", "details": {"message": "Cannot add to this channel"}})
        )
        client = make_client(handler)

        with pytest.raises(ArenaApiError) as exc_info:
            await client.create_block({"value": "https://mcp.so", "channel_ids": [3167929]})

        assert exc_info.value.status == 403
        assert handler.call_count == 1
        assert handler.requests[0].url.path == "/v3/blocks"

    @pytest.mark.asyncio
    async def test_move_connection(self, make_client):
        handler = ScriptedHandler(
            reply(200, {"id": 9, "connectable_id": 4, "connectable_type": "Block", "channel_id": 2})
        )
        client = make_client(handler)

        connection = await client.move_connection(9, {"movement": "move_to_top"})

        assert connection.id == 9
        assert connection.channel_id == 2
        assert handler.requests[0].url.path == "/v3/connections/9/move"
