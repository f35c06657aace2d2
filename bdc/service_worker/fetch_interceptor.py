"""Fetch Interceptor: offline-aware request resolution.

Requests that pass the filters (same origin, GET, not development tooling)
are resolved by one of two policies:

* API requests go to the network first, then the cache, then an offline
  JSON error or the offline page.
* Everything else is served cache first; misses go to the network and
  successful responses are written through to the cache.
"""

from __future__ import annotations

import json
import logging
from enum import Enum

import httpx

from bdc.service_worker.cache_storage import CacheStorage, copy_response
from bdc.service_worker.config import ServiceWorkerConfig
from bdc.service_worker.events import FetchEvent
from bdc.service_worker.network import Fetcher

logger = logging.getLogger(__name__)

OFFLINE_JSON_BODY = {"error": "You are offline"}


class RequestPolicy(str, Enum):
    API = "api"
    STATIC = "static"


def offline_json_response() -> httpx.Response:
    return httpx.Response(
        503,
        headers={"Content-Type": "application/json"},
        content=json.dumps(OFFLINE_JSON_BODY, separators=(",", ":")).encode("utf-8"),
    )


def service_unavailable() -> httpx.Response:
    return httpx.Response(503, content=b"")


class FetchInterceptor:
    def __init__(self, storage: CacheStorage, fetch: Fetcher, config: ServiceWorkerConfig):
        self.storage = storage
        self.fetch = fetch
        self.config = config
        origin = httpx.URL(config.origin)
        self._origin = (origin.scheme, origin.host, origin.port)

    def should_handle(self, request: httpx.Request) -> bool:
        url = request.url
        if (url.scheme, url.host, url.port) != self._origin:
            return False
        if request.method.upper() != "GET":
            return False
        raw = str(url)
        return not any(pattern in raw for pattern in self.config.dev_tooling_patterns)

    def classify(self, request: httpx.Request) -> RequestPolicy:
        if self.config.api_prefix in str(request.url):
            return RequestPolicy.API
        return RequestPolicy.STATIC

    async def handle(self, event: FetchEvent) -> httpx.Response | None:
        """Resolve the event's request, or return None to leave it alone."""
        request = event.request
        if not self.should_handle(request):
            return None
        if self.classify(request) is RequestPolicy.API:
            return await self.network_first(event)
        return await self.cache_first(event)

    async def network_first(self, event: FetchEvent) -> httpx.Response:
        request = event.request
        try:
            return await self.fetch(request)
        except httpx.HTTPError as exc:
            logger.debug("Network failed for %s, trying cache: %s", request.url, exc)

        cached = await self.storage.match(request)
        if cached is not None:
            return cached

        if "application/json" in request.headers.get("accept", ""):
            return offline_json_response()
        return await self.offline_page() or service_unavailable()

    async def cache_first(self, event: FetchEvent) -> httpx.Response:
        request = event.request
        cached = await self.storage.match(request)
        if cached is not None:
            return cached

        try:
            response = await self.fetch(request)
        except httpx.HTTPError as exc:
            logger.debug("Network failed for %s: %s", request.url, exc)
            if event.is_navigation:
                offline = await self.offline_page()
                if offline is not None:
                    return offline
            return service_unavailable()

        if response.is_success:
            # Copy before the caller reads the body; the write is not awaited here
            await response.aread()
            event.wait_until(self._store(request, copy_response(response)))
        return response

    async def _store(self, request: httpx.Request, response: httpx.Response) -> None:
        bucket = await self.storage.open(self.config.cache_name)
        await bucket.put(request, response)

    async def offline_page(self) -> httpx.Response | None:
        request = httpx.Request("GET", self.config.absolute_url(self.config.offline_url))
        return await self.storage.match(request)
