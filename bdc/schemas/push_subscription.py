"""Pydantic schemas for PushSubscription."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PushSubscriptionKeys(BaseModel):
    p256dh: str = Field(min_length=1, max_length=255)
    auth: str = Field(min_length=1, max_length=255)


class PushSubscriptionCreate(BaseModel):
    """Browser ``PushSubscription.toJSON()`` shape plus an optional device label."""

    model_config = ConfigDict(populate_by_name=True)

    endpoint: str = Field(min_length=1, max_length=2048)
    expiration_time: datetime | None = Field(default=None, alias="expirationTime")
    keys: PushSubscriptionKeys
    device_label: str | None = Field(default=None, max_length=100, alias="deviceLabel")


class PushSubscriptionUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    endpoint: str = Field(min_length=1, max_length=2048)
    expiration_time: datetime | None = Field(default=None, alias="expirationTime")
    keys: PushSubscriptionKeys | None = None
    device_label: str | None = Field(default=None, max_length=100, alias="deviceLabel")


class PushSubscriptionDelete(BaseModel):
    endpoint: str = Field(min_length=1, max_length=2048)


class PushSubscriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    endpoint: str
    expiration_time: datetime | None = None
    device_label: str | None = None
    last_used_at: datetime | None = None
    created_at: datetime | None = None


class VapidPublicKeyResponse(BaseModel):
    public_key: str


class TestPushResponse(BaseModel):
    sent: int
