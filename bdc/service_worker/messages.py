"""Messages exchanged between the worker and its client contexts."""

from enum import Enum
from typing import Any

SKIP_WAITING = "SKIP_WAITING"


class LifecycleMessageType(str, Enum):
    DISPLAYED = "NOTIFICATION_DISPLAYED"
    CLICKED = "NOTIFICATION_CLICKED"
    CLOSED = "NOTIFICATION_CLOSED"


def lifecycle_message(message_type: LifecycleMessageType, **notification: Any) -> dict[str, Any]:
    return {"type": message_type.value, "notification": notification}


def displayed_message(
    notification_id: Any, title: str, body: str, timestamp: int, notification_type: str | None
) -> dict[str, Any]:
    return lifecycle_message(
        LifecycleMessageType.DISPLAYED,
        id=notification_id,
        title=title,
        body=body,
        timestamp=timestamp,
        type=notification_type,
    )


def clicked_message(notification_id: Any, action: str) -> dict[str, Any]:
    return lifecycle_message(LifecycleMessageType.CLICKED, id=notification_id, action=action)


def closed_message(notification_id: Any) -> dict[str, Any]:
    return lifecycle_message(LifecycleMessageType.CLOSED, id=notification_id)
