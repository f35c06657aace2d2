from bdc.models.notification import (
    Notification,
    NotificationChannel,
    NotificationPriority,
    NotificationType,
)
from bdc.models.notification_preference import NotificationPreference
from bdc.models.push_subscription import PushSubscription

__all__ = [
    "Notification",
    "NotificationChannel",
    "NotificationPreference",
    "NotificationPriority",
    "NotificationType",
    "PushSubscription",
]
