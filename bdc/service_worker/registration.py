"""The surface notifications are shown on."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from bdc.service_worker.actions import NotificationAction

logger = logging.getLogger(__name__)


@dataclass
class NotificationOptions:
    body: str
    icon: str
    badge: str
    tag: str
    data: dict[str, Any] = field(default_factory=dict)
    require_interaction: bool = False
    actions: list[NotificationAction] = field(default_factory=list)
    vibrate: list[int] = field(default_factory=list)
    image: str | None = None
    timestamp: int = 0


@dataclass
class DisplayedNotification:
    title: str
    options: NotificationOptions
    closed: bool = False

    @property
    def data(self) -> dict[str, Any]:
        return self.options.data

    @property
    def tag(self) -> str:
        return self.options.tag

    def close(self) -> None:
        self.closed = True


class NotificationRegistration:
    """Keeps the notifications currently on screen.

    Showing a notification replaces any open one with the same tag.
    """

    def __init__(self) -> None:
        self._notifications: list[DisplayedNotification] = []

    async def show_notification(
        self, title: str, options: NotificationOptions
    ) -> DisplayedNotification:
        displayed = DisplayedNotification(title=title, options=options)
        self._notifications = [
            n for n in self._notifications if not n.closed and n.tag != options.tag
        ]
        self._notifications.append(displayed)
        logger.debug("Showing notification %r (tag=%s)", title, options.tag)
        return displayed

    def get_notifications(self, tag: str | None = None) -> list[DisplayedNotification]:
        return [
            n
            for n in self._notifications
            if not n.closed and (tag is None or n.tag == tag)
        ]
