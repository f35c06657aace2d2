"""Notification model - a single alert delivered to one user."""

from enum import Enum

from sqlalchemy import JSON, Boolean, Column, DateTime, String

from bdc.core.database import Base
from bdc.models.shared import UUIDType, generate_uuid, utc_now


class NotificationType(str, Enum):
    LEAD = "lead"
    APPOINTMENT = "appointment"
    VEHICLE = "vehicle"
    COMMUNICATION = "communication"
    SYSTEM = "system"


class NotificationPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class NotificationChannel(str, Enum):
    EMAIL = "email"
    SMS = "sms"
    BROWSER = "browser"
    PUSH = "push"
    SOUND = "sound"


class Notification(Base):
    """Notification model - stores notifications for dealership users."""

    __tablename__ = "notifications"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    user_id = Column(UUIDType, nullable=False, index=True)
    type = Column(String(20), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    message = Column(String(1000), nullable=False)
    priority = Column(String(10), nullable=False, default=NotificationPriority.NORMAL.value)
    read = Column(Boolean, nullable=False, default=False, index=True)
    read_at = Column(DateTime(timezone=True), nullable=True)
    link = Column(String(2048), nullable=True)
    related_model = Column(String(50), nullable=True)
    related_id = Column(String(64), nullable=True)
    data = Column(JSON, nullable=False, default=dict)

    delivered_email = Column(Boolean, nullable=False, default=False)
    delivered_sms = Column(Boolean, nullable=False, default=False)
    delivered_browser = Column(Boolean, nullable=False, default=False)
    delivered_push = Column(Boolean, nullable=False, default=False)
    delivered_sound = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
