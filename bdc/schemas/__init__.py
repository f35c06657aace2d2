from bdc.schemas.notification import (
    BulkDeleteResponse,
    BulkUpdateResponse,
    MessageResponse,
    NotificationCountResponse,
    NotificationCreate,
    NotificationIdsRequest,
    NotificationListResponse,
    NotificationResponse,
)
from bdc.schemas.notification_preference import (
    ChannelPreferenceResponse,
    ChannelPreferenceUpdate,
    NotificationPreferenceResponse,
    NotificationPreferenceUpdate,
)
from bdc.schemas.push_payload import NotificationActionSchema, PushPayload
from bdc.schemas.push_subscription import (
    PushSubscriptionCreate,
    PushSubscriptionDelete,
    PushSubscriptionKeys,
    PushSubscriptionResponse,
    PushSubscriptionUpdate,
    TestPushResponse,
    VapidPublicKeyResponse,
)

__all__ = [
    "BulkDeleteResponse",
    "BulkUpdateResponse",
    "ChannelPreferenceResponse",
    "ChannelPreferenceUpdate",
    "MessageResponse",
    "NotificationActionSchema",
    "NotificationCountResponse",
    "NotificationCreate",
    "NotificationIdsRequest",
    "NotificationListResponse",
    "NotificationPreferenceResponse",
    "NotificationPreferenceUpdate",
    "NotificationResponse",
    "PushPayload",
    "PushSubscriptionCreate",
    "PushSubscriptionDelete",
    "PushSubscriptionKeys",
    "PushSubscriptionResponse",
    "PushSubscriptionUpdate",
    "TestPushResponse",
    "VapidPublicKeyResponse",
]
