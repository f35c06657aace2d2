"""Notification Dispatcher: routes clicks and closes on notifications."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from bdc.service_worker.actions import NotificationActionKind
from bdc.service_worker.clients import Client, ClientRegistry
from bdc.service_worker.config import ServiceWorkerConfig
from bdc.service_worker.messages import clicked_message, closed_message
from bdc.service_worker.registration import DisplayedNotification

logger = logging.getLogger(__name__)

RouteBuilder = Callable[[dict[str, Any]], str]


def _entity_route(collection: str, id_field: str) -> RouteBuilder:
    def build(data: dict[str, Any]) -> str:
        entity_id = data.get(id_field)
        if entity_id in (None, ""):
            return f"/{collection}"
        return f"/{collection}/{entity_id}"

    return build


ACTION_ROUTES: dict[NotificationActionKind, RouteBuilder] = {
    NotificationActionKind.VIEW_LEAD: _entity_route("leads", "leadId"),
    NotificationActionKind.VIEW_APPOINTMENT: _entity_route("appointments", "appointmentId"),
    NotificationActionKind.VIEW_VEHICLE: _entity_route("vehicles", "vehicleId"),
    NotificationActionKind.VIEW_COMMUNICATION: _entity_route(
        "communications", "communicationId"
    ),
    NotificationActionKind.VIEW_DETAILS: lambda data: data.get("link") or "/notifications",
}


def resolve_url(data: dict[str, Any] | None, action: str | None) -> str | None:
    """Destination path for a click, or None when the click is a dismiss.

    An explicit ``url`` in the data bag always wins over the action.
    """
    data = data or {}
    if action == NotificationActionKind.DISMISS.value:
        return None
    if data.get("url"):
        return data["url"]
    if action:
        try:
            kind = NotificationActionKind(action)
        except ValueError:
            return data.get("link") or "/"
        return ACTION_ROUTES[kind](data)
    return data.get("link") or "/"


class NotificationDispatcher:
    def __init__(self, config: ServiceWorkerConfig, clients: ClientRegistry):
        self.config = config
        self.clients = clients

    async def click(
        self, notification: DisplayedNotification, action: str = ""
    ) -> str | None:
        """Close *notification* and navigate to its destination.

        Returns the resolved path, or None when nothing was navigated.
        """
        notification.close()
        data = notification.data or {}
        url = resolve_url(data, action)
        if url is None:
            logger.debug("Notification %s dismissed", data.get("id"))
            return None

        await asyncio.gather(
            self.clients.broadcast(clicked_message(data.get("id"), action or "default")),
            self._focus_or_open(url),
        )
        return url

    async def close(self, notification: DisplayedNotification) -> bool:
        """Report a dismissed notification. Returns True if a message was sent."""
        notification_id = (notification.data or {}).get("id")
        if notification_id is None:
            return False
        await self.clients.broadcast(closed_message(notification_id))
        return True

    async def _focus_or_open(self, url: str) -> Client:
        target = self.config.absolute_url(url)
        for client in self.clients.match_all():
            if client.url == target:
                return await client.focus()
        logger.debug("Opening new window at %s", target)
        return await self.clients.open_window(target)
