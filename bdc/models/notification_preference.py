"""NotificationPreference model - per-user channel x type delivery matrix.

Each channel column holds ``{"enabled": bool, "types": {<type>: bool}}``.
A notification goes out through a channel only when the channel is enabled
and its type entry is true.
"""

import copy
from typing import Any

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, UniqueConstraint, func

from bdc.core.database import Base
from bdc.models.notification import NotificationChannel, NotificationType
from bdc.models.shared import UUIDType, generate_uuid


def _matrix(enabled: bool, **types: bool) -> dict[str, Any]:
    return {
        "enabled": enabled,
        "types": {t.value: types.get(t.value, enabled) for t in NotificationType},
    }


DEFAULT_CHANNEL_PREFERENCES: dict[str, dict[str, Any]] = {
    NotificationChannel.EMAIL.value: _matrix(True),
    NotificationChannel.BROWSER.value: _matrix(True),
    NotificationChannel.PUSH.value: _matrix(True),
    NotificationChannel.SMS.value: _matrix(
        False,
        lead=False,
        appointment=True,
        vehicle=False,
        communication=False,
        system=False,
    ),
    NotificationChannel.SOUND.value: _matrix(True),
}


def default_channel_preferences(channel: str) -> dict[str, Any]:
    """Return a fresh copy of the defaults for one channel."""
    return copy.deepcopy(DEFAULT_CHANNEL_PREFERENCES[channel])


class NotificationPreference(Base):
    """NotificationPreference model - exactly one row per user."""

    __tablename__ = "notification_preferences"
    __table_args__ = (
        UniqueConstraint("user_id", name="uq_notification_preferences_user_id"),
    )

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    user_id = Column(UUIDType, nullable=False, index=True)

    email = Column(JSON, nullable=False, default=lambda: default_channel_preferences("email"))
    sms = Column(JSON, nullable=False, default=lambda: default_channel_preferences("sms"))
    browser = Column(
        JSON, nullable=False, default=lambda: default_channel_preferences("browser")
    )
    push = Column(JSON, nullable=False, default=lambda: default_channel_preferences("push"))
    sound = Column(JSON, nullable=False, default=lambda: default_channel_preferences("sound"))

    sound_volume = Column(Float, nullable=False, default=0.5)
    require_interaction = Column(Boolean, nullable=False, default=False)
    show_only_when_hidden = Column(Boolean, nullable=False, default=False)
    custom_sounds = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def allows(self, channel: str, notification_type: str) -> bool:
        """Return True when *channel* may deliver a notification of *notification_type*."""
        if channel not in DEFAULT_CHANNEL_PREFERENCES:
            return False
        matrix = getattr(self, channel) or {}
        if not matrix.get("enabled", False):
            return False
        return bool(matrix.get("types", {}).get(notification_type, False))
