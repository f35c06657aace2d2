"""Notification API endpoints."""

import logging
import math
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from bdc.core.auth import get_current_user
from bdc.core.database import get_db
from bdc.models.notification import NotificationType
from bdc.repositories.notification_repository import NotificationRepository
from bdc.schemas.notification import (
    BulkDeleteResponse,
    BulkUpdateResponse,
    NotificationCountResponse,
    NotificationCreate,
    NotificationIdsRequest,
    NotificationListResponse,
    NotificationResponse,
)
from bdc.services.notification_service import NotificationService
from bdc.tasks import enqueue_push_delivery

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/",
    response_model=NotificationListResponse,
    summary="List notifications",
)
async def list_notifications(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    type: NotificationType | None = None,
    read: bool | None = None,
    sort_field: str | None = Query(default=None),
    sort_direction: str | None = Query(default=None),
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> NotificationListResponse:
    """List the caller's notifications, newest first by default."""
    repo = NotificationRepository(db)
    type_value = type.value if type is not None else None
    notifications = repo.get_all(
        user_id=user_id,
        skip=(page - 1) * limit,
        limit=limit,
        type=type_value,
        read=read,
        sort_field=sort_field,
        sort_direction=sort_direction,
    )
    total = repo.count(user_id, type=type_value, read=read)
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in notifications],
        unread_count=repo.count_unread(user_id),
        current_page=page,
        total_pages=math.ceil(total / limit),
        total_notifications=total,
    )


@router.post(
    "/",
    response_model=NotificationResponse,
    status_code=201,
    summary="Create a notification",
    responses={400: {"description": "Invalid notification"}},
)
async def create_notification(
    data: NotificationCreate,
    defer_delivery: bool = Query(default=False),
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> NotificationResponse:
    """Create a notification and deliver it through the owner's enabled channels.

    Without an explicit ``user_id`` the notification goes to the caller. With
    ``defer_delivery`` the notification is stored now and delivered by the
    background worker.
    """
    service = NotificationService(db)
    try:
        notification = service.notify(
            user_id=data.user_id or user_id,
            type=data.type.value,
            title=data.title,
            message=data.message,
            priority=data.priority.value,
            link=data.link,
            related_model=data.related_model,
            related_id=data.related_id,
            data=data.data,
            expires_at=data.expires_at,
            deliver=not defer_delivery,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    if defer_delivery:
        await enqueue_push_delivery(notification.id)  # type: ignore[arg-type]
    return NotificationResponse.model_validate(notification)


@router.get(
    "/unread_count",
    response_model=NotificationCountResponse,
    summary="Get unread notification count",
)
async def get_unread_count(
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> NotificationCountResponse:
    repo = NotificationRepository(db)
    return NotificationCountResponse(unread_count=repo.count_unread(user_id))


@router.post(
    "/mark-read",
    response_model=BulkUpdateResponse,
    summary="Mark several notifications as read",
)
async def mark_many_as_read(
    data: NotificationIdsRequest,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> BulkUpdateResponse:
    repo = NotificationRepository(db)
    count = repo.mark_many_as_read(user_id, data.notification_ids)
    return BulkUpdateResponse(
        message=f"{count} notifications marked as read", modified_count=count
    )


@router.put(
    "/read-all",
    response_model=BulkUpdateResponse,
    summary="Mark all notifications as read",
)
async def mark_all_as_read(
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> BulkUpdateResponse:
    repo = NotificationRepository(db)
    count = repo.mark_all_as_read(user_id)
    return BulkUpdateResponse(message="All notifications marked as read", modified_count=count)


@router.delete(
    "/clear-all",
    response_model=BulkDeleteResponse,
    summary="Delete all notifications",
)
async def clear_all(
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> BulkDeleteResponse:
    repo = NotificationRepository(db)
    count = repo.delete_all(user_id)
    logger.info("Cleared %d notifications for user %s", count, user_id)
    return BulkDeleteResponse(message="All notifications cleared", deleted_count=count)


@router.delete(
    "/",
    response_model=BulkDeleteResponse,
    summary="Delete several notifications",
)
async def delete_many(
    data: NotificationIdsRequest,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> BulkDeleteResponse:
    repo = NotificationRepository(db)
    count = repo.delete_many(user_id, data.notification_ids)
    return BulkDeleteResponse(message=f"{count} notifications deleted", deleted_count=count)


@router.get(
    "/{notification_id}",
    response_model=NotificationResponse,
    summary="Get a notification",
    responses={404: {"description": "Notification not found"}},
)
async def get_notification(
    notification_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> NotificationResponse:
    repo = NotificationRepository(db)
    notification = repo.get_by_id(notification_id, user_id=user_id)
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found")
    return NotificationResponse.model_validate(notification)


@router.put(
    "/{notification_id}/read",
    response_model=NotificationResponse,
    summary="Mark a notification as read",
    responses={404: {"description": "Notification not found"}},
)
async def mark_as_read(
    notification_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> NotificationResponse:
    """Mark a single notification as read. Repeating the call changes nothing."""
    repo = NotificationRepository(db)
    if repo.get_by_id(notification_id, user_id=user_id) is None:
        raise HTTPException(status_code=404, detail="Notification not found")
    updated = repo.mark_as_read(notification_id)
    return NotificationResponse.model_validate(updated)


@router.delete(
    "/{notification_id}",
    status_code=204,
    summary="Delete a notification",
    responses={404: {"description": "Notification not found"}},
)
async def delete_notification(
    notification_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> None:
    repo = NotificationRepository(db)
    if not repo.delete(notification_id, user_id):
        raise HTTPException(status_code=404, detail="Notification not found")
