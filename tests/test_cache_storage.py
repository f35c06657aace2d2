"""Tests for the service worker cache storage."""

import httpx
import pytest

from bdc.service_worker.cache_storage import (
    InMemoryCacheStorage,
    cache_key,
    copy_response,
)


def _get(url, method="GET"):
    return httpx.Request(method, url)


class TestCacheKey:
    def test_key_is_method_and_full_url(self):
        assert cache_key(_get("https://bdc.example.com/a?x=1", "get")) == (
            "GET",
            "https://bdc.example.com/a?x=1",
        )

    def test_query_string_is_not_normalized(self):
        assert cache_key(_get("https://bdc.example.com/a?x=1")) != cache_key(
            _get("https://bdc.example.com/a?x=2")
        )


class TestCopyResponse:
    def test_copies_status_headers_and_body(self):
        original = httpx.Response(
            201, headers={"X-Test": "1", "Content-Type": "text/plain"}, content=b"hello"
        )
        copy = copy_response(original)
        assert copy is not original
        assert copy.status_code == 201
        assert copy.headers["x-test"] == "1"
        assert copy.content == b"hello"

    def test_drops_transfer_headers(self):
        original = httpx.Response(200, content=b"abc")
        original.headers["Content-Encoding"] = "identity"
        copy = copy_response(original)
        assert "content-encoding" not in copy.headers
        assert copy.headers["content-length"] == "3"


class TestInMemoryCacheBucket:
    @pytest.mark.asyncio
    async def test_put_and_match(self, storage):
        bucket = await storage.open("v1")
        request = _get("https://bdc.example.com/static/app.js")
        await bucket.put(request, httpx.Response(200, content=b"app"))

        cached = await bucket.match(_get("https://bdc.example.com/static/app.js"))
        assert cached is not None
        assert cached.content == b"app"

    @pytest.mark.asyncio
    async def test_match_hands_out_independent_copies(self, storage):
        bucket = await storage.open("v1")
        request = _get("https://bdc.example.com/")
        await bucket.put(request, httpx.Response(200, content=b"shell"))

        first = await bucket.match(request)
        await first.aread()
        first.headers["X-Mutated"] = "yes"
        second = await bucket.match(request)
        assert second is not first
        assert second.content == b"shell"
        assert "x-mutated" not in second.headers

    @pytest.mark.asyncio
    async def test_match_is_method_specific(self, storage):
        bucket = await storage.open("v1")
        await bucket.put(_get("https://bdc.example.com/"), httpx.Response(200, content=b"x"))
        assert await bucket.match(_get("https://bdc.example.com/", "HEAD")) is None

    @pytest.mark.asyncio
    async def test_last_writer_wins(self, storage):
        bucket = await storage.open("v1")
        request = _get("https://bdc.example.com/")
        await bucket.put(request, httpx.Response(200, content=b"old"))
        await bucket.put(request, httpx.Response(200, content=b"new"))
        assert (await bucket.match(request)).content == b"new"
        assert len(await bucket.keys()) == 1

    @pytest.mark.asyncio
    async def test_delete(self, storage):
        bucket = await storage.open("v1")
        request = _get("https://bdc.example.com/")
        await bucket.put(request, httpx.Response(200, content=b"x"))
        assert await bucket.delete(request) is True
        assert await bucket.delete(request) is False
        assert await bucket.match(request) is None


class TestInMemoryCacheStorage:
    @pytest.mark.asyncio
    async def test_open_creates_once(self):
        storage = InMemoryCacheStorage()
        assert await storage.has("v1") is False
        first = await storage.open("v1")
        assert await storage.open("v1") is first
        assert await storage.keys() == ["v1"]

    @pytest.mark.asyncio
    async def test_delete(self, storage):
        await storage.open("v1")
        assert await storage.delete("v1") is True
        assert await storage.delete("v1") is False
        assert await storage.keys() == []

    @pytest.mark.asyncio
    async def test_match_searches_all_buckets(self, storage):
        old = await storage.open("v1")
        await storage.open("v2")
        request = _get("https://bdc.example.com/logo.png")
        await old.put(request, httpx.Response(200, content=b"png"))

        cached = await storage.match(request)
        assert cached is not None
        assert cached.content == b"png"
        assert await storage.match(_get("https://bdc.example.com/missing")) is None
