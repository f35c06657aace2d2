"""Notification action buttons derived from the notification type."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from bdc.models.notification import NotificationType


class NotificationActionKind(str, Enum):
    VIEW_LEAD = "view_lead"
    VIEW_APPOINTMENT = "view_appointment"
    VIEW_VEHICLE = "view_vehicle"
    VIEW_COMMUNICATION = "view_communication"
    VIEW_DETAILS = "view_details"
    DISMISS = "dismiss"


@dataclass(frozen=True)
class NotificationAction:
    action: str
    title: str
    icon: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


ActionBuilder = Callable[[], list[NotificationAction]]

DISMISS_ACTION = NotificationAction(NotificationActionKind.DISMISS.value, "Dismiss")


def _view_then_dismiss(kind: NotificationActionKind, title: str) -> ActionBuilder:
    def build() -> list[NotificationAction]:
        return [NotificationAction(kind.value, title), DISMISS_ACTION]

    return build


ACTION_BUILDERS: dict[NotificationType, ActionBuilder] = {
    NotificationType.LEAD: _view_then_dismiss(NotificationActionKind.VIEW_LEAD, "View Lead"),
    NotificationType.APPOINTMENT: _view_then_dismiss(
        NotificationActionKind.VIEW_APPOINTMENT, "View Details"
    ),
    NotificationType.VEHICLE: _view_then_dismiss(
        NotificationActionKind.VIEW_VEHICLE, "View Vehicle"
    ),
    NotificationType.COMMUNICATION: _view_then_dismiss(
        NotificationActionKind.VIEW_COMMUNICATION, "View Message"
    ),
    NotificationType.SYSTEM: _view_then_dismiss(NotificationActionKind.VIEW_DETAILS, "Details"),
}


def actions_for_type(notification_type: str | None) -> list[NotificationAction] | None:
    """Return the action set for *notification_type*.

    ``None`` means the type is absent or not one of the known types.
    """
    if notification_type is None:
        return None
    try:
        kind = NotificationType(notification_type)
    except ValueError:
        return None
    return ACTION_BUILDERS[kind]()
