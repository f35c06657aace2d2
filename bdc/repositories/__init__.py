from bdc.repositories.notification_preference_repository import (
    NotificationPreferenceRepository,
)
from bdc.repositories.notification_repository import NotificationRepository
from bdc.repositories.push_subscription_repository import PushSubscriptionRepository

__all__ = [
    "NotificationPreferenceRepository",
    "NotificationRepository",
    "PushSubscriptionRepository",
]
