"""Service worker runtime: lifecycle state machine and hook wiring."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any

import httpx

from bdc.service_worker.cache_manager import CacheManager
from bdc.service_worker.cache_storage import CacheStorage, InMemoryCacheStorage
from bdc.service_worker.clients import ClientRegistry
from bdc.service_worker.config import ServiceWorkerConfig
from bdc.service_worker.dispatcher import NotificationDispatcher
from bdc.service_worker.events import (
    ActivateEvent,
    FetchEvent,
    InstallEvent,
    MessageEvent,
    NotificationEvent,
    PushEvent,
)
from bdc.service_worker.fetch_interceptor import FetchInterceptor, service_unavailable
from bdc.service_worker.messages import SKIP_WAITING
from bdc.service_worker.network import Fetcher, HttpxFetcher
from bdc.service_worker.registration import DisplayedNotification, NotificationRegistration
from bdc.service_worker.renderer import NotificationRenderer

logger = logging.getLogger(__name__)


class WorkerState(str, Enum):
    PARSED = "parsed"
    INSTALLING = "installing"
    INSTALLED = "installed"
    ACTIVATING = "activating"
    ACTIVATED = "activated"
    REDUNDANT = "redundant"


class ServiceWorker:
    """One worker version and the hooks a hosting runtime calls on it.

    Every hook settles the work its event registered before returning and
    none of them raises.
    """

    def __init__(
        self,
        config: ServiceWorkerConfig | None = None,
        storage: CacheStorage | None = None,
        fetch: Fetcher | None = None,
        clients: ClientRegistry | None = None,
        registration: NotificationRegistration | None = None,
    ):
        self.config = config or ServiceWorkerConfig.from_settings()
        self.storage = storage or InMemoryCacheStorage()
        self.fetcher = fetch or HttpxFetcher()
        self.clients = clients or ClientRegistry()
        self.registration = registration or NotificationRegistration()

        self.cache_manager = CacheManager(self.storage, self.fetcher, self.config)
        self.interceptor = FetchInterceptor(self.storage, self.fetcher, self.config)
        self.renderer = NotificationRenderer(self.config, self.registration, self.clients)
        self.dispatcher = NotificationDispatcher(self.config, self.clients)

        self.state = WorkerState.PARSED
        self._skip_waiting = False
        self._background: set[asyncio.Task[Any]] = set()

    @property
    def is_active(self) -> bool:
        return self.state is WorkerState.ACTIVATED

    # ── Lifecycle ──

    async def install(self) -> WorkerState:
        self.state = WorkerState.INSTALLING
        event = InstallEvent()
        event.wait_until(self.cache_manager.install())
        errors = await event.settle()
        if errors:
            logger.error("Service worker install failed: %r", errors[0])
            self.state = WorkerState.REDUNDANT
            return self.state

        self.state = WorkerState.INSTALLED
        logger.info("Service worker installed (%s)", self.config.cache_name)
        if self.config.skip_waiting_on_install or self._skip_waiting:
            await self.activate()
        return self.state

    async def activate(self) -> WorkerState:
        """Remove stale caches, then take control of every client.

        Safe to run again on an already active worker.
        """
        if self.state not in (WorkerState.INSTALLED, WorkerState.ACTIVATED):
            logger.debug("Activation ignored in state %s", self.state.value)
            return self.state
        self.state = WorkerState.ACTIVATING
        event = ActivateEvent()
        event.wait_until(self._activate(event))
        await event.settle()
        self.state = WorkerState.ACTIVATED
        logger.info("Service worker activated (%s)", self.config.cache_name)
        return self.state

    async def _activate(self, event: ActivateEvent) -> None:
        await self.cache_manager.activate()
        # Claim only after cleanup so no page is served from a stale cache
        claimed = await self.clients.claim()
        logger.debug("Claimed %d client(s)", claimed)

    async def skip_waiting(self) -> WorkerState:
        self._skip_waiting = True
        if self.state is WorkerState.INSTALLED:
            return await self.activate()
        return self.state

    # ── Hooks ──

    async def fetch(
        self, request: httpx.Request, mode: str = "no-cors"
    ) -> httpx.Response | None:
        """Resolve *request* or return None to let it go to the network."""
        if not self.is_active:
            return None
        event = FetchEvent(request, mode=mode)
        try:
            response = await self.interceptor.handle(event)
        except Exception:
            logger.exception("Unhandled error while fetching %s", request.url)
            response = await self._fallback(event)
        # Cache writes finish in the background; the response is not held up
        if event.pending:
            task = asyncio.ensure_future(event.settle())
            self._background.add(task)
            task.add_done_callback(self._background.discard)
        return response

    async def _fallback(self, event: FetchEvent) -> httpx.Response:
        if event.is_navigation:
            try:
                offline = await self.interceptor.offline_page()
            except Exception:
                logger.exception("Offline page lookup failed")
                offline = None
            if offline is not None:
                return offline
        return service_unavailable()

    async def drain(self) -> None:
        """Wait for background work started by earlier fetches."""
        while self._background:
            await asyncio.gather(*list(self._background))

    async def push(self, data: bytes | str | None) -> DisplayedNotification | None:
        event = PushEvent(data)
        shown = event.wait_until(self.renderer.show(event.data))
        await event.settle()
        if shown.cancelled() or shown.exception() is not None:
            return None
        return shown.result()

    async def notification_click(
        self, notification: DisplayedNotification, action: str = ""
    ) -> str | None:
        event = NotificationEvent(notification, action)
        routed = event.wait_until(self.dispatcher.click(notification, action))
        await event.settle()
        if routed.cancelled() or routed.exception() is not None:
            return None
        return routed.result()

    async def notification_close(self, notification: DisplayedNotification) -> None:
        event = NotificationEvent(notification)
        event.wait_until(self.dispatcher.close(notification))
        await event.settle()

    async def message(self, data: Any, source: Any = None) -> None:
        event = MessageEvent(data, source)
        if isinstance(data, dict) and data.get("type") == SKIP_WAITING:
            event.wait_until(self.skip_waiting())
        await event.settle()
