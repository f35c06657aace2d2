"""Repository for Notification CRUD operations."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Query, Session

from bdc.core.config import settings
from bdc.core.sorting import apply_order_by
from bdc.models.notification import (
    Notification,
    NotificationChannel,
    NotificationPriority,
    NotificationType,
)
from bdc.models.shared import as_utc, generate_uuid, utc_now


class NotificationRepository:
    def __init__(self, db: Session):
        self.db = db

    def _live(self, now: datetime | None = None) -> Query:  # type: ignore[type-arg]
        """Base query that hides notifications past their expiry."""
        return self.db.query(Notification).filter(
            Notification.expires_at > (now or utc_now())
        )

    def create(
        self,
        *,
        user_id: UUID,
        type: str,
        title: str,
        message: str,
        priority: str = NotificationPriority.NORMAL.value,
        link: str | None = None,
        related_model: str | None = None,
        related_id: str | None = None,
        data: dict[str, Any] | None = None,
        created_at: datetime | None = None,
        expires_at: datetime | None = None,
    ) -> Notification:
        notification_type = NotificationType(type)
        notification_priority = NotificationPriority(priority)
        created = created_at or utc_now()
        expires = expires_at or created + timedelta(days=settings.NOTIFICATION_TTL_DAYS)
        if as_utc(expires) < as_utc(created):
            raise ValueError("expires_at must not be earlier than created_at")

        notification = Notification(
            id=generate_uuid(),
            user_id=user_id,
            type=notification_type.value,
            title=title,
            message=message,
            priority=notification_priority.value,
            link=link,
            related_model=related_model,
            related_id=related_id,
            data=dict(data or {}),
            created_at=created,
            expires_at=expires,
        )
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def get_by_id(
        self, notification_id: UUID, user_id: UUID | None = None
    ) -> Notification | None:
        query = self._live().filter(Notification.id == notification_id)
        if user_id is not None:
            query = query.filter(Notification.user_id == user_id)
        return query.first()

    def _filtered(
        self,
        user_id: UUID,
        type: str | None = None,
        read: bool | None = None,
    ) -> Query:  # type: ignore[type-arg]
        query = self._live().filter(Notification.user_id == user_id)
        if type is not None:
            query = query.filter(Notification.type == type)
        if read is not None:
            query = query.filter(Notification.read == read)
        return query

    def get_all(
        self,
        user_id: UUID,
        skip: int = 0,
        limit: int = 20,
        type: str | None = None,
        read: bool | None = None,
        sort_field: str | None = None,
        sort_direction: str | None = None,
    ) -> list[Notification]:
        query = self._filtered(user_id, type=type, read=read)
        query = apply_order_by(query, Notification, sort_field, sort_direction)
        return query.offset(skip).limit(limit).all()

    def count(
        self,
        user_id: UUID,
        type: str | None = None,
        read: bool | None = None,
    ) -> int:
        return self._filtered(user_id, type=type, read=read).count()

    def count_unread(self, user_id: UUID) -> int:
        return self._filtered(user_id, read=False).count()

    def mark_as_read(self, notification_id: UUID) -> Notification | None:
        notification = self.get_by_id(notification_id)
        if notification is None:
            return None
        # read_at is written once; later calls leave it untouched
        if not notification.read:
            notification.read = True  # type: ignore[assignment]
            notification.read_at = utc_now()  # type: ignore[assignment]
            self.db.commit()
            self.db.refresh(notification)
        return notification

    def mark_many_as_read(self, user_id: UUID, notification_ids: Iterable[UUID]) -> int:
        ids = list(notification_ids)
        if not ids:
            return 0
        count = (
            self._filtered(user_id, read=False)
            .filter(Notification.id.in_(ids))
            .update({"read": True, "read_at": utc_now()}, synchronize_session=False)
        )
        self.db.commit()
        return count

    def mark_all_as_read(self, user_id: UUID) -> int:
        count = self._filtered(user_id, read=False).update(
            {"read": True, "read_at": utc_now()}, synchronize_session=False
        )
        self.db.commit()
        return count

    def mark_delivered(
        self, notification: Notification, channels: Iterable[NotificationChannel]
    ) -> Notification:
        for channel in channels:
            setattr(notification, f"delivered_{channel.value}", True)
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def delete(self, notification_id: UUID, user_id: UUID) -> bool:
        notification = self.get_by_id(notification_id, user_id=user_id)
        if notification is None:
            return False
        self.db.delete(notification)
        self.db.commit()
        return True

    def delete_many(self, user_id: UUID, notification_ids: Iterable[UUID]) -> int:
        ids = list(notification_ids)
        if not ids:
            return 0
        count = (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.id.in_(ids))
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return count

    def delete_all(self, user_id: UUID) -> int:
        count = (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return count

    def delete_expired(self, now: datetime | None = None) -> int:
        count = (
            self.db.query(Notification)
            .filter(Notification.expires_at <= (now or utc_now()))
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return count
