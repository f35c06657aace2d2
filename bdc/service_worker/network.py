"""Network access for the worker, backed by httpx."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

import httpx

Fetcher = Callable[[httpx.Request], Awaitable[httpx.Response]]


class HttpxFetcher:
    """Send requests through a shared ``httpx.AsyncClient``.

    Raises ``httpx.HTTPError`` subclasses on network failure; HTTP error
    statuses are returned as normal responses.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, timeout: float = 10.0):
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        return await self.client.send(request)

    async def aclose(self) -> None:
        await self.client.aclose()
