"""Preference gate: decides which channels may deliver a notification."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from bdc.models.notification import NotificationChannel, NotificationType
from bdc.models.notification_preference import NotificationPreference
from bdc.repositories.notification_preference_repository import (
    NotificationPreferenceRepository,
)
from bdc.schemas.notification_preference import NotificationPreferenceUpdate

logger = logging.getLogger(__name__)


class PreferenceService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationPreferenceRepository(db)

    def get(self, user_id: UUID) -> NotificationPreference:
        return self.repo.get_or_create(user_id)

    def update(
        self, user_id: UUID, data: NotificationPreferenceUpdate
    ) -> NotificationPreference:
        preference = self.repo.update(user_id, data)
        logger.info("Updated notification preferences for user %s", user_id)
        return preference

    def allows(
        self, user_id: UUID, channel: NotificationChannel, notification_type: str
    ) -> bool:
        return self.get(user_id).allows(channel.value, notification_type)

    def channels_for(
        self, user_id: UUID, notification_type: str
    ) -> list[NotificationChannel]:
        """Channels enabled for *notification_type*, in declaration order.

        An unknown type is allowed nowhere.
        """
        try:
            NotificationType(notification_type)
        except ValueError:
            return []
        preference = self.get(user_id)
        return [
            channel
            for channel in NotificationChannel
            if preference.allows(channel.value, notification_type)
        ]
