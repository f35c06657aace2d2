"""Pydantic schemas for NotificationPreference."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from bdc.models.notification import NotificationType


class ChannelPreferenceUpdate(BaseModel):
    enabled: bool | None = None
    types: dict[NotificationType, bool] | None = None


class ChannelPreferenceResponse(BaseModel):
    enabled: bool
    types: dict[str, bool]


class NotificationPreferenceUpdate(BaseModel):
    email: ChannelPreferenceUpdate | None = None
    sms: ChannelPreferenceUpdate | None = None
    browser: ChannelPreferenceUpdate | None = None
    push: ChannelPreferenceUpdate | None = None
    sound: ChannelPreferenceUpdate | None = None
    sound_volume: float | None = Field(default=None, ge=0.0, le=1.0)
    require_interaction: bool | None = None
    show_only_when_hidden: bool | None = None
    custom_sounds: dict[NotificationType, str] | None = None


class NotificationPreferenceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    email: ChannelPreferenceResponse
    sms: ChannelPreferenceResponse
    browser: ChannelPreferenceResponse
    push: ChannelPreferenceResponse
    sound: ChannelPreferenceResponse
    sound_volume: float
    require_interaction: bool
    show_only_when_hidden: bool
    custom_sounds: dict[str, str]
    updated_at: datetime | None = None
