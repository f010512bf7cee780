"""Tests for the shared cached-GET primitive."""
import asyncio

import httpx

from cosmic_atlas.schemas.envelope import APIResponse
from cosmic_atlas.services.api_client import APIClient


def make_client(upstream, cache, ttl=60):
    return APIClient("TEST", "https://vendor.example", ttl, cache=cache, http_client=upstream.client())


class TestCachedGet:

    def test_fresh_fetch_then_cache_hit(self, upstream, cache):
        """Second call inside the TTL is served from cache and flagged as cached."""
        upstream.add("/thing", {"value": 42})
        client = make_client(upstream, cache)

        async def run():
            first = await client.cached_get("/thing", {"q": "1"}, "thing:1")
            second = await client.cached_get("/thing", {"q": "1"}, "thing:1")
            return first, second

        first, second = asyncio.run(run())
        assert first.success and first.data == {"value": 42}
        assert first.metadata.cached is False
        assert second.metadata.cached is True
        assert second.data == {"value": 42}
        assert second.metadata.timestamp == first.metadata.timestamp
        assert len(upstream.calls) == 1

    def test_params_sent(self, upstream, cache):
        upstream.add("/thing", {})
        client = make_client(upstream, cache)
        asyncio.run(client.cached_get("/thing", {"a": "b", "n": 3}, "k"))
        sent = upstream.calls[0].url.params
        assert sent["a"] == "b"
        assert sent["n"] == "3"

    def test_key_namespaced_by_source(self, upstream, cache):
        upstream.add("/thing", [1, 2])
        client = make_client(upstream, cache)
        asyncio.run(client.cached_get("/thing", cache_key="list"))
        assert asyncio.run(cache.get("TEST:list"))["data"] == [1, 2]

    def test_http_error_is_failure_envelope(self, upstream, cache):
        upstream.add("/thing", {"error": "down"}, status=503)
        client = make_client(upstream, cache)

        resp = asyncio.run(client.cached_get("/thing", cache_key="k"))
        assert resp.success is False
        assert resp.error.code == "HTTP_ERROR"
        assert resp.error.status_code == 503
        assert resp.data is None

    def test_failures_not_cached(self, upstream, cache):
        upstream.add("/thing", {}, status=500)
        client = make_client(upstream, cache)

        async def run():
            await client.cached_get("/thing", cache_key="k")
            upstream.add("/thing", {"ok": True})
            return await client.cached_get("/thing", cache_key="k")

        resp = asyncio.run(run())
        assert resp.success and resp.metadata.cached is False
        assert len(upstream.calls) == 2

    def test_timeout(self, upstream, cache):
        upstream.add("/thing", exc=httpx.ReadTimeout("slow"))
        resp = asyncio.run(make_client(upstream, cache).cached_get("/thing"))
        assert resp.error.code == "TIMEOUT"

    def test_network_error(self, upstream, cache):
        upstream.add("/thing", exc=httpx.ConnectError("refused"))
        resp = asyncio.run(make_client(upstream, cache).cached_get("/thing"))
        assert resp.error.code == "NETWORK_ERROR"

    def test_invalid_json(self, cache):
        def handler(request):
            return httpx.Response(200, content=b"<html>oops</html>")

        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = APIClient("TEST", "https://vendor.example", 60, cache=cache, http_client=http)
        resp = asyncio.run(client.cached_get("/thing"))
        assert resp.error.code == "INVALID_RESPONSE"

    def test_absolute_url_bypasses_base(self, upstream, cache):
        upstream.add("/other.json", {"ok": 1})
        client = make_client(upstream, cache)
        asyncio.run(client.cached_get("http://elsewhere.example/other.json"))
        assert upstream.calls[0].url.host == "elsewhere.example"

    def test_injected_http_client_left_open(self, upstream, cache):
        http = upstream.client()
        client = APIClient("TEST", "https://vendor.example", 60, cache=cache, http_client=http)
        asyncio.run(client.aclose())
        assert http.is_closed is False


class TestAggregate:

    def test_all_success(self, upstream, cache):
        client = make_client(upstream, cache)
        resp = client.aggregate(
            {"a": APIResponse.ok(1, "TEST"), "b": APIResponse.ok(2, "TEST")},
            "AGG_ERROR",
            "failed",
        )
        assert resp.success
        assert resp.data == {"a": 1, "b": 2}
        assert resp.metadata.cached is False

    def test_one_failure_drops_everything(self, upstream, cache):
        client = make_client(upstream, cache)
        resp = client.aggregate(
            {"a": APIResponse.ok(1, "TEST"), "b": APIResponse.fail("TIMEOUT", "t", "TEST")},
            "AGG_ERROR",
            "failed",
        )
        assert resp.success is False
        assert resp.data is None
        assert resp.error.code == "AGG_ERROR"
        assert resp.error.message == "failed"
        assert "failed" not in resp.error.model_dump()
