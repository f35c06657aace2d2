"""Cache Manager: app shell pre-caching and stale generation cleanup."""

from __future__ import annotations

import asyncio
import logging

import httpx

from bdc.service_worker.cache_storage import CacheBucket, CacheStorage
from bdc.service_worker.config import ServiceWorkerConfig
from bdc.service_worker.network import Fetcher

logger = logging.getLogger(__name__)


class CacheManager:
    """Owns the single cache bucket named by ``config.cache_name``."""

    def __init__(self, storage: CacheStorage, fetch: Fetcher, config: ServiceWorkerConfig):
        self.storage = storage
        self.fetch = fetch
        self.config = config

    @property
    def cache_name(self) -> str:
        return self.config.cache_name

    async def open(self) -> CacheBucket:
        return await self.storage.open(self.cache_name)

    async def install(self) -> int:
        """Pre-cache the asset manifest.

        Assets are fetched concurrently and stored one by one. A failing asset
        is logged and skipped. Returns the number of assets stored.
        """
        urls = self.config.precache_urls
        try:
            bucket = await self.open()
        except Exception as exc:
            logger.warning("Could not open cache %s: %r", self.cache_name, exc)
            return 0
        results = await asyncio.gather(*(self._precache(bucket, url) for url in urls))
        cached = sum(1 for ok in results if ok)
        logger.info("Cached %d/%d app shell assets in %s", cached, len(urls), self.cache_name)
        return cached

    async def _precache(self, bucket: CacheBucket, path: str) -> bool:
        request = httpx.Request("GET", self.config.absolute_url(path))
        try:
            response = await self.fetch(request)
        except httpx.HTTPError as exc:
            logger.warning("Cache install error for %s: %s", path, exc)
            return False
        if not response.is_success:
            logger.warning(
                "Cache install error for %s: HTTP %s", path, response.status_code
            )
            return False
        try:
            await bucket.put(request, response)
        except Exception as exc:
            logger.warning("Cache install error for %s: %r", path, exc)
            return False
        return True

    async def activate(self) -> list[str]:
        """Delete every bucket other than the current generation."""
        removed: list[str] = []
        for name in await self.storage.keys():
            if name == self.cache_name:
                continue
            if await self.storage.delete(name):
                logger.info("Removing old cache: %s", name)
                removed.append(name)
        return removed
