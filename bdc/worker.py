import logging
from typing import Any
from uuid import UUID

from arq import cron

from bdc.core.database import SessionLocal
from bdc.repositories.notification_repository import NotificationRepository
from bdc.services.notification_service import NotificationService
from bdc.tasks import redis_settings

logger = logging.getLogger(__name__)


async def purge_expired_notifications_task(ctx: dict[str, Any]) -> int:
    """Background task: delete notifications past their expiry.

    Runs hourly. Expired rows are already hidden from every query; this
    only reclaims the storage.
    """
    db = SessionLocal()
    try:
        count = NotificationRepository(db).delete_expired()
        if count > 0:
            logger.info("Purged %d expired notifications", count)
        return count
    finally:
        db.close()


async def deliver_push_task(ctx: dict[str, Any], notification_id: str) -> bool:
    """Background task: deliver one stored notification.

    Returns True when push delivery reached at least one device.
    """
    db = SessionLocal()
    try:
        service = NotificationService(db)
        notification = service.deliver_by_id(UUID(notification_id))
        return bool(notification is not None and notification.delivered_push)
    finally:
        db.close()


class WorkerSettings:
    functions = [
        purge_expired_notifications_task,
        deliver_push_task,
    ]
    cron_jobs = [
        cron(purge_expired_notifications_task, minute={0}),  # hourly
    ]
    redis_settings = redis_settings
