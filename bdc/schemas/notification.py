"""Pydantic schemas for Notification."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from bdc.models.notification import NotificationPriority, NotificationType


class NotificationCreate(BaseModel):
    user_id: UUID | None = None
    type: NotificationType
    title: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=1, max_length=1000)
    priority: NotificationPriority = NotificationPriority.NORMAL
    link: str | None = Field(default=None, max_length=2048)
    related_model: str | None = Field(default=None, max_length=50)
    related_id: str | None = Field(default=None, max_length=64)
    data: dict[str, Any] = Field(default_factory=dict)
    expires_at: datetime | None = None


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    type: str
    title: str
    message: str
    priority: str
    read: bool
    read_at: datetime | None = None
    link: str | None = None
    related_model: str | None = None
    related_id: str | None = None
    data: dict[str, Any]
    delivered_email: bool
    delivered_sms: bool
    delivered_browser: bool
    delivered_push: bool
    delivered_sound: bool
    created_at: datetime
    expires_at: datetime


class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse]
    unread_count: int
    current_page: int
    total_pages: int
    total_notifications: int


class NotificationCountResponse(BaseModel):
    unread_count: int


class NotificationIdsRequest(BaseModel):
    notification_ids: list[UUID]


class BulkUpdateResponse(BaseModel):
    message: str
    modified_count: int


class BulkDeleteResponse(BaseModel):
    message: str
    deleted_count: int


class MessageResponse(BaseModel):
    message: str
