"""Repository for NotificationPreference data access."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bdc.models.notification import NotificationChannel
from bdc.models.notification_preference import (
    NotificationPreference,
    default_channel_preferences,
)
from bdc.schemas.notification_preference import NotificationPreferenceUpdate

CHANNEL_FIELDS = [channel.value for channel in NotificationChannel]


class NotificationPreferenceRepository:
    """Repository for NotificationPreference model."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_user(self, user_id: UUID) -> NotificationPreference | None:
        return (
            self.db.query(NotificationPreference)
            .filter(NotificationPreference.user_id == user_id)
            .first()
        )

    def get_or_create(self, user_id: UUID) -> NotificationPreference:
        """Return the user's preferences, creating the defaults on first access."""
        preference = self.get_by_user(user_id)
        if preference is not None:
            return preference

        preference = NotificationPreference(user_id=user_id)
        self.db.add(preference)
        try:
            self.db.commit()
        except IntegrityError:
            # Another request created the row first
            self.db.rollback()
            existing = self.get_by_user(user_id)
            if existing is None:
                raise
            return existing
        self.db.refresh(preference)
        return preference

    def update(
        self, user_id: UUID, data: NotificationPreferenceUpdate
    ) -> NotificationPreference:
        """Merge a partial update into the user's preferences."""
        preference = self.get_or_create(user_id)
        update_data = data.model_dump(exclude_unset=True, mode="json")

        for channel in CHANNEL_FIELDS:
            channel_update = update_data.pop(channel, None)
            if channel_update is None:
                continue
            setattr(
                preference,
                channel,
                _merge_channel(getattr(preference, channel), channel, channel_update),
            )

        custom_sounds = update_data.pop("custom_sounds", None)
        if custom_sounds is not None:
            preference.custom_sounds = {**(preference.custom_sounds or {}), **custom_sounds}

        for key, value in update_data.items():
            if value is not None:
                setattr(preference, key, value)

        self.db.commit()
        self.db.refresh(preference)
        return preference


def _merge_channel(
    current: dict[str, Any] | None, channel: str, update: dict[str, Any]
) -> dict[str, Any]:
    """Build a new channel dict so the JSON column sees a changed value."""
    base = current or default_channel_preferences(channel)
    merged = {
        "enabled": base.get("enabled", False),
        "types": dict(base.get("types", {})),
    }
    if update.get("enabled") is not None:
        merged["enabled"] = update["enabled"]
    if update.get("types"):
        merged["types"].update(update["types"])
    return merged
