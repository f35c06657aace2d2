"""Service for creating notifications and delivering them to users."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from bdc.models.notification import (
    Notification,
    NotificationChannel,
    NotificationPriority,
    NotificationType,
)
from bdc.repositories.notification_repository import NotificationRepository
from bdc.services.preference_service import PreferenceService
from bdc.services.push_service import PushService

logger = logging.getLogger(__name__)

# Channels this service has no transport for
_UNSUPPORTED_CHANNELS = (NotificationChannel.EMAIL, NotificationChannel.SMS)


class NotificationService:
    """Creates notifications from dealership events and delivers them."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository(db)
        self.preferences = PreferenceService(db)
        self.push = PushService(db)

    def notify(
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
        expires_at: datetime | None = None,
        deliver: bool = True,
    ) -> Notification:
        """Create a notification and, unless *deliver* is False, send it out."""
        notification = self.repo.create(
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            priority=priority,
            link=link,
            related_model=related_model,
            related_id=related_id,
            data=data,
            expires_at=expires_at,
        )
        logger.debug("Created %s notification %s for user %s", type, notification.id, user_id)
        if deliver:
            notification = self.deliver(notification)
        return notification

    def deliver(self, notification: Notification) -> Notification:
        """Send *notification* through every channel its owner allows.

        Push is the only transport. The browser and sound channels ride on
        the push message, so they count as delivered when push does.
        """
        user_id: UUID = notification.user_id  # type: ignore[assignment]
        channels = self.preferences.channels_for(user_id, str(notification.type))
        if not channels:
            logger.info("No channels enabled for notification %s", notification.id)
            return notification

        for channel in _UNSUPPORTED_CHANNELS:
            if channel in channels:
                logger.debug(
                    "No %s transport configured, skipping notification %s",
                    channel.value,
                    notification.id,
                )

        if NotificationChannel.PUSH not in channels:
            return notification

        preference = self.preferences.get(user_id)
        with_sound = NotificationChannel.SOUND in channels
        result = self.push.send_notification(notification, preference, with_sound=with_sound)
        if not result.delivered:
            return notification

        delivered = [NotificationChannel.PUSH]
        if NotificationChannel.BROWSER in channels:
            delivered.append(NotificationChannel.BROWSER)
        if with_sound:
            delivered.append(NotificationChannel.SOUND)
        return self.repo.mark_delivered(notification, delivered)

    def deliver_by_id(self, notification_id: UUID) -> Notification | None:
        notification = self.repo.get_by_id(notification_id)
        if notification is None:
            logger.warning("Notification %s not found for delivery", notification_id)
            return None
        return self.deliver(notification)

    def notify_new_lead(
        self,
        *,
        user_id: UUID,
        lead_id: str,
        lead_name: str,
        action: str = "created",
        **kwargs: Any,
    ) -> Notification:
        """Notify about a lead being created, updated or assigned."""
        titles = {
            "created": ("New Lead Created", f"New lead created: {lead_name}"),
            "updated": ("Lead Updated", f"Lead updated: {lead_name}"),
            "assigned": ("Lead Assigned to You", f"Lead assigned to you: {lead_name}"),
        }
        title, message = titles.get(action, ("Lead Activity", f"Lead activity: {lead_name}"))
        return self.notify(
            user_id=user_id,
            type=NotificationType.LEAD.value,
            title=title,
            message=message,
            link=f"/leads/{lead_id}",
            related_model="lead",
            related_id=str(lead_id),
            **kwargs,
        )

    def notify_appointment_reminder(
        self,
        *,
        user_id: UUID,
        appointment_id: str,
        starts_at: datetime,
        action: str = "reminder",
        **kwargs: Any,
    ) -> Notification:
        """Notify about an appointment; reminders are high priority."""
        when = starts_at.strftime("%a, %b %d %I:%M %p")
        priority = NotificationPriority.NORMAL.value
        if action == "reminder":
            title = "Appointment Reminder"
            message = f"Reminder: You have an appointment scheduled for {when}"
            priority = NotificationPriority.HIGH.value
        elif action == "created":
            title, message = "New Appointment Scheduled", f"New appointment scheduled for {when}"
        elif action == "cancelled":
            title, message = "Appointment Cancelled", f"Appointment for {when} has been cancelled"
        else:
            title, message = "Appointment Updated", f"Appointment updated for {when}"
        return self.notify(
            user_id=user_id,
            type=NotificationType.APPOINTMENT.value,
            title=title,
            message=message,
            priority=priority,
            link=f"/appointments/{appointment_id}",
            related_model="appointment",
            related_id=str(appointment_id),
            **kwargs,
        )

    def notify_message_received(
        self,
        *,
        user_id: UUID,
        lead_id: str,
        lead_name: str,
        communication_id: str,
        channel: str = "email",
        **kwargs: Any,
    ) -> Notification:
        """Notify that a lead responded to a communication."""
        if channel == "email":
            title, message = "Lead Email Response", f"{lead_name} responded to your email"
        elif channel == "sms":
            title, message = "Lead SMS Response", f"{lead_name} responded to your SMS"
        else:
            title = "Lead Response"
            message = f"{lead_name} responded to your communication"
        return self.notify(
            user_id=user_id,
            type=NotificationType.COMMUNICATION.value,
            title=title,
            message=message,
            priority=NotificationPriority.HIGH.value,
            link=f"/leads/{lead_id}/communications",
            related_model="communication",
            related_id=str(communication_id),
            data={"leadId": str(lead_id)},
            **kwargs,
        )

    def notify_vehicle_update(
        self,
        *,
        user_id: UUID,
        vehicle_id: str,
        vehicle_label: str,
        action: str = "updated",
        **kwargs: Any,
    ) -> Notification:
        """Notify about inventory changes; price changes are high priority."""
        titles = {
            "created": ("New Vehicle Added", f"New vehicle added: {vehicle_label}"),
            "updated": ("Vehicle Updated", f"Vehicle updated: {vehicle_label}"),
            "price_change": ("Vehicle Price Changed", f"Price updated for {vehicle_label}"),
            "sold": ("Vehicle Sold", f"Vehicle has been sold: {vehicle_label}"),
        }
        title, message = titles.get(action, ("Vehicle Update", f"Update for {vehicle_label}"))
        priority = (
            NotificationPriority.HIGH.value
            if action == "price_change"
            else NotificationPriority.NORMAL.value
        )
        return self.notify(
            user_id=user_id,
            type=NotificationType.VEHICLE.value,
            title=title,
            message=message,
            priority=priority,
            link=f"/vehicles/{vehicle_id}",
            related_model="vehicle",
            related_id=str(vehicle_id),
            **kwargs,
        )

    def notify_system(
        self,
        *,
        user_id: UUID,
        title: str,
        message: str,
        priority: str = NotificationPriority.NORMAL.value,
        link: str | None = None,
        **kwargs: Any,
    ) -> Notification:
        return self.notify(
            user_id=user_id,
            type=NotificationType.SYSTEM.value,
            title=title,
            message=message,
            priority=priority,
            link=link,
            **kwargs,
        )
