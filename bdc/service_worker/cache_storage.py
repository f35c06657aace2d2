"""Cache storage abstraction for the service worker.

A storage holds named buckets; a bucket maps an exact request key
``(method, url)`` to a stored response. Stored responses are private copies:
``match`` always hands out a fresh copy so a caller reading the body can
never consume the stored entry.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

logger = logging.getLogger(__name__)

CacheKey = tuple[str, str]

# Body is stored decoded, so transfer headers describing the encoded body are dropped
_STRIPPED_HEADERS = ("content-encoding", "content-length", "transfer-encoding")


def cache_key(request: httpx.Request) -> CacheKey:
    """Exact lookup key for *request*: method plus the full URL."""
    return (request.method.upper(), str(request.url))


def copy_response(response: httpx.Response) -> httpx.Response:
    """Return an independent response with the same status, headers and body.

    The body of *response* must already be read.
    """
    headers = httpx.Headers(
        [
            (name, value)
            for name, value in response.headers.multi_items()
            if name.lower() not in _STRIPPED_HEADERS
        ]
    )
    return httpx.Response(
        status_code=response.status_code,
        headers=headers,
        content=response.content,
    )


class CacheBucket(ABC):
    """One named cache generation."""

    @abstractmethod
    async def match(self, request: httpx.Request) -> httpx.Response | None:
        """Return a copy of the stored response for *request*, if any."""
        ...  # pragma: no cover

    @abstractmethod
    async def put(self, request: httpx.Request, response: httpx.Response) -> None:
        """Store *response* under *request*, replacing any previous entry."""
        ...  # pragma: no cover

    @abstractmethod
    async def delete(self, request: httpx.Request) -> bool:
        """Remove the entry for *request*. Returns True if one existed."""
        ...  # pragma: no cover

    @abstractmethod
    async def keys(self) -> list[CacheKey]:
        """List the keys of every stored entry."""
        ...  # pragma: no cover


class CacheStorage(ABC):
    """Collection of named buckets."""

    @abstractmethod
    async def open(self, name: str) -> CacheBucket:
        """Return the bucket called *name*, creating it if needed."""
        ...  # pragma: no cover

    @abstractmethod
    async def has(self, name: str) -> bool:
        ...  # pragma: no cover

    @abstractmethod
    async def delete(self, name: str) -> bool:
        """Drop the bucket called *name*. Returns True if it existed."""
        ...  # pragma: no cover

    @abstractmethod
    async def keys(self) -> list[str]:
        """Bucket names in creation order."""
        ...  # pragma: no cover

    async def match(self, request: httpx.Request) -> httpx.Response | None:
        """Search every bucket, oldest first, for *request*."""
        for name in await self.keys():
            bucket = await self.open(name)
            response = await bucket.match(request)
            if response is not None:
                return response
        return None


class InMemoryCacheBucket(CacheBucket):
    def __init__(self, name: str):
        self.name = name
        self._entries: dict[CacheKey, httpx.Response] = {}

    async def match(self, request: httpx.Request) -> httpx.Response | None:
        stored = self._entries.get(cache_key(request))
        if stored is None:
            return None
        return copy_response(stored)

    async def put(self, request: httpx.Request, response: httpx.Response) -> None:
        await response.aread()
        self._entries[cache_key(request)] = copy_response(response)

    async def delete(self, request: httpx.Request) -> bool:
        return self._entries.pop(cache_key(request), None) is not None

    async def keys(self) -> list[CacheKey]:
        return list(self._entries)


class InMemoryCacheStorage(CacheStorage):
    """Process-local storage; contents live as long as the object."""

    def __init__(self) -> None:
        self._buckets: dict[str, InMemoryCacheBucket] = {}

    async def open(self, name: str) -> CacheBucket:
        bucket = self._buckets.get(name)
        if bucket is None:
            bucket = InMemoryCacheBucket(name)
            self._buckets[name] = bucket
            logger.debug("Opened new cache bucket %s", name)
        return bucket

    async def has(self, name: str) -> bool:
        return name in self._buckets

    async def delete(self, name: str) -> bool:
        return self._buckets.pop(name, None) is not None

    async def keys(self) -> list[str]:
        return list(self._buckets)
