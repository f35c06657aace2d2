"""Lifecycle events handed to the worker's hooks.

Work that must finish before the runtime may stop the worker is registered
with ``wait_until``; the runtime then awaits ``settle()``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any, TypeVar

import httpx

if TYPE_CHECKING:
    from bdc.service_worker.registration import DisplayedNotification

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ExtendableEvent:
    def __init__(self) -> None:
        self._pending: list[asyncio.Future[Any]] = []

    def wait_until(self, work: Awaitable[T]) -> asyncio.Future[T]:
        """Keep the event alive until *work* completes."""
        future = asyncio.ensure_future(work)
        self._pending.append(future)
        return future

    @property
    def pending(self) -> int:
        return sum(1 for f in self._pending if not f.done())

    async def settle(self) -> list[BaseException]:
        """Wait for all registered work, including work added while waiting.

        Failures are logged and returned, never raised.
        """
        errors: list[BaseException] = []
        while self._pending:
            batch, self._pending = self._pending, []
            results = await asyncio.gather(*batch, return_exceptions=True)
            for result in results:
                if isinstance(result, BaseException):
                    logger.warning("%s work failed: %r", type(self).__name__, result)
                    errors.append(result)
        return errors


class InstallEvent(ExtendableEvent):
    pass


class ActivateEvent(ExtendableEvent):
    pass


class FetchEvent(ExtendableEvent):
    def __init__(self, request: httpx.Request, mode: str = "no-cors"):
        super().__init__()
        self.request = request
        self.mode = mode

    @property
    def is_navigation(self) -> bool:
        return self.mode == "navigate"


class PushEvent(ExtendableEvent):
    def __init__(self, data: bytes | str | None):
        super().__init__()
        self.data = data


class NotificationEvent(ExtendableEvent):
    """Click or close on a displayed notification."""

    def __init__(self, notification: DisplayedNotification, action: str = ""):
        super().__init__()
        self.notification = notification
        self.action = action


class MessageEvent(ExtendableEvent):
    def __init__(self, data: Any, source: Any = None):
        super().__init__()
        self.data = data
        self.source = source
