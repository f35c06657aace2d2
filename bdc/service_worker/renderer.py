"""Notification Renderer: turns push payloads into displayed notifications."""

from __future__ import annotations

import json
import logging
import time
from typing import Any

from pydantic import ValidationError

from bdc.schemas.push_payload import PushPayload
from bdc.service_worker.actions import NotificationAction, actions_for_type
from bdc.service_worker.clients import ClientRegistry
from bdc.service_worker.config import ServiceWorkerConfig
from bdc.service_worker.messages import displayed_message
from bdc.service_worker.registration import (
    DisplayedNotification,
    NotificationOptions,
    NotificationRegistration,
)

logger = logging.getLogger(__name__)

# Top-level payload fields the click handler reads from the data bag
_ROUTING_FIELDS = (
    "id",
    "type",
    "link",
    "leadId",
    "appointmentId",
    "vehicleId",
    "communicationId",
)


def _decode(data: bytes | str | None) -> str | None:
    if data is None:
        return None
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def _validate_fields(raw: dict[str, Any]) -> PushPayload:
    try:
        return PushPayload.model_validate(raw)
    except ValidationError as exc:
        invalid = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}
    # A field may arrive under its wire alias or its attribute name
    for name, field in PushPayload.model_fields.items():
        if name in invalid or field.alias in invalid:
            invalid.update({name, field.alias or name})
    logger.debug("Dropping invalid push payload fields: %s", ", ".join(sorted(invalid)))
    return PushPayload.model_validate({k: v for k, v in raw.items() if k not in invalid})


class NotificationRenderer:
    def __init__(
        self,
        config: ServiceWorkerConfig,
        registration: NotificationRegistration,
        clients: ClientRegistry,
    ):
        self.config = config
        self.registration = registration
        self.clients = clients

    def parse(self, data: bytes | str | None) -> PushPayload:
        """Parse raw push data.

        A JSON object keeps every valid field; fields that fail validation
        are dropped and fall back to their defaults. Anything else degrades
        to a plain text notification.
        """
        text = _decode(data)
        try:
            raw = json.loads(text) if text is not None else None
            if not isinstance(raw, dict):
                raise ValueError("push payload is not a JSON object")
            return _validate_fields(raw)
        except (ValueError, ValidationError) as exc:
            logger.debug("Unstructured push payload, using text fallback: %s", exc)
            return PushPayload(
                title=self.config.fallback_title,
                body=text or self.config.fallback_body,
                icon=self.config.default_icon,
            )

    def _data_bag(self, payload: PushPayload) -> dict[str, Any]:
        bag = dict(payload.data or {})
        wire = payload.to_wire()
        for name in _ROUTING_FIELDS:
            if name in wire and name not in bag:
                bag[name] = wire[name]
        return bag

    def _actions(self, payload: PushPayload) -> list[NotificationAction]:
        derived = actions_for_type(payload.type)
        if derived is not None:
            return derived
        return [
            NotificationAction(action=a.action, title=a.title, icon=a.icon)
            for a in payload.actions or []
        ]

    def render(self, payload: PushPayload) -> tuple[str, NotificationOptions]:
        """Build the title and display options for *payload*."""
        cfg = self.config
        title = payload.title or cfg.default_title
        options = NotificationOptions(
            body=payload.body or cfg.default_body,
            icon=payload.icon or cfg.default_icon,
            badge=cfg.badge,
            tag=payload.tag or cfg.default_tag,
            data=self._data_bag(payload),
            require_interaction=bool(payload.require_interaction),
            actions=self._actions(payload),
            vibrate=list(payload.vibrate or cfg.default_vibrate),
            image=payload.image,
            timestamp=payload.timestamp or int(time.time() * 1000),
        )
        return title, options

    async def show(self, data: bytes | str | None) -> DisplayedNotification:
        """Show the notification, then tell every controlled window about it."""
        payload = self.parse(data)
        title, options = self.render(payload)
        displayed = await self.registration.show_notification(title, options)
        delivered = await self.clients.broadcast(
            displayed_message(
                payload.id, title, options.body, options.timestamp, payload.type
            )
        )
        logger.info("Displayed notification %s to %d client(s)", payload.id, delivered)
        return displayed
