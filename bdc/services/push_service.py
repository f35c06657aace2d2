"""Web Push delivery to a user's subscribed devices."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

import requests
from pywebpush import WebPushException, webpush
from sqlalchemy.orm import Session

from bdc.core.config import settings
from bdc.models.notification import (
    Notification,
    NotificationPriority,
    NotificationType,
)
from bdc.models.notification_preference import NotificationPreference
from bdc.models.push_subscription import PushSubscription
from bdc.models.shared import as_utc
from bdc.repositories.push_subscription_repository import PushSubscriptionRepository
from bdc.schemas.push_payload import PushPayload

logger = logging.getLogger(__name__)

# Push service answers meaning the subscription no longer exists
GONE_STATUS_CODES = (404, 410)

_URGENCY = {
    NotificationPriority.LOW.value: "low",
    NotificationPriority.NORMAL.value: "normal",
    NotificationPriority.HIGH.value: "high",
    NotificationPriority.URGENT.value: "high",
}

_ENTITY_ID_FIELDS = {
    NotificationType.LEAD.value: "lead_id",
    NotificationType.APPOINTMENT.value: "appointment_id",
    NotificationType.VEHICLE.value: "vehicle_id",
    NotificationType.COMMUNICATION.value: "communication_id",
}

_SOUND_BY_PRIORITY = {
    NotificationPriority.LOW.value: "/sounds/notification-low.mp3",
    NotificationPriority.NORMAL.value: "/sounds/notification-normal.mp3",
    NotificationPriority.HIGH.value: "/sounds/notification-high.mp3",
    NotificationPriority.URGENT.value: "/sounds/notification-high.mp3",
}


@dataclass
class PushResult:
    sent: int = 0
    failed: int = 0
    removed: int = 0

    @property
    def delivered(self) -> bool:
        return self.sent > 0


def build_payload(
    notification: Notification,
    preference: NotificationPreference | None = None,
    with_sound: bool = False,
) -> PushPayload:
    """Build the push payload the service worker renders for *notification*."""
    data: dict[str, Any] = dict(notification.data or {})  # type: ignore[arg-type]
    data.setdefault("notificationId", str(notification.id))
    data.setdefault("priority", notification.priority)
    if notification.link:
        data.setdefault("link", notification.link)
    if with_sound:
        custom = (preference.custom_sounds or {}) if preference is not None else {}
        data["sound"] = custom.get(notification.type) or _SOUND_BY_PRIORITY.get(
            str(notification.priority), _SOUND_BY_PRIORITY[NotificationPriority.NORMAL.value]
        )
        data["volume"] = preference.sound_volume if preference is not None else 0.5
    if preference is not None and preference.show_only_when_hidden:
        data["showOnlyWhenHidden"] = True

    entity_ids: dict[str, Any] = {}
    id_field = _ENTITY_ID_FIELDS.get(str(notification.type))
    if id_field and notification.related_id:
        entity_ids[id_field] = notification.related_id

    require_interaction = notification.priority == NotificationPriority.URGENT.value or bool(
        preference is not None and preference.require_interaction
    )
    created = as_utc(notification.created_at)  # type: ignore[arg-type]
    return PushPayload(
        id=str(notification.id),
        title=notification.title,
        body=notification.message,
        tag=f"{notification.type}-{notification.id}",
        data=data,
        require_interaction=require_interaction,
        timestamp=int(created.timestamp() * 1000),
        type=notification.type,
        link=notification.link,
        **entity_ids,
    )


class PushService:
    """Sends push payloads with pywebpush and prunes dead subscriptions."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PushSubscriptionRepository(db)

    @property
    def vapid_claims(self) -> dict[str, str]:
        return {"sub": settings.VAPID_CLAIMS_SUBJECT}

    def send_to_user(
        self, user_id: UUID, payload: PushPayload, urgency: str = "normal"
    ) -> PushResult:
        """Send *payload* to every subscription of *user_id*."""
        result = PushResult()
        if not settings.push_enabled:
            logger.info("VAPID keys not configured, skipping push for user %s", user_id)
            return result

        subscriptions = self.repo.get_by_user(user_id)
        if not subscriptions:
            return result

        body = json.dumps(payload.to_wire())
        for subscription in subscriptions:
            try:
                self._send(subscription, body, urgency)
            except WebPushException as exc:
                status = getattr(exc.response, "status_code", None)
                if status in GONE_STATUS_CODES:
                    logger.info(
                        "Removing expired push subscription %s (HTTP %s)",
                        subscription.id,
                        status,
                    )
                    self.repo.delete_by_id(subscription.id)  # type: ignore[arg-type]
                    result.removed += 1
                else:
                    logger.warning(
                        "Push delivery to %s failed: %s", subscription.id, exc
                    )
                    result.failed += 1
                continue
            except requests.RequestException as exc:
                logger.warning("Push delivery to %s failed: %s", subscription.id, exc)
                result.failed += 1
                continue
            self.repo.touch(subscription)
            result.sent += 1

        logger.info(
            "Push for user %s: %d sent, %d failed, %d removed",
            user_id,
            result.sent,
            result.failed,
            result.removed,
        )
        return result

    def send_notification(
        self,
        notification: Notification,
        preference: NotificationPreference | None = None,
        with_sound: bool = False,
    ) -> PushResult:
        payload = build_payload(notification, preference, with_sound=with_sound)
        urgency = _URGENCY.get(str(notification.priority), "normal")
        return self.send_to_user(notification.user_id, payload, urgency)  # type: ignore[arg-type]

    def _send(self, subscription: PushSubscription, body: str, urgency: str) -> None:
        webpush(
            subscription_info={
                "endpoint": subscription.endpoint,
                "keys": {"p256dh": subscription.p256dh, "auth": subscription.auth},
            },
            data=body,
            vapid_private_key=settings.VAPID_PRIVATE_KEY,
            vapid_claims=dict(self.vapid_claims),
            ttl=settings.PUSH_TTL_SECONDS,
            headers={"Urgency": urgency},
        )
