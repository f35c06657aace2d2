"""Repository for PushSubscription data access."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy.orm import Session

from bdc.models.push_subscription import PushSubscription
from bdc.models.shared import utc_now
from bdc.schemas.push_subscription import PushSubscriptionCreate, PushSubscriptionUpdate


class PushSubscriptionRepository:
    """Repository for PushSubscription model."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, subscription_id: UUID) -> PushSubscription | None:
        return (
            self.db.query(PushSubscription)
            .filter(PushSubscription.id == subscription_id)
            .first()
        )

    def get_by_user(self, user_id: UUID) -> list[PushSubscription]:
        return (
            self.db.query(PushSubscription)
            .filter(PushSubscription.user_id == user_id)
            .order_by(PushSubscription.created_at.desc())
            .all()
        )

    def get_by_endpoint(self, user_id: UUID, endpoint: str) -> PushSubscription | None:
        return (
            self.db.query(PushSubscription)
            .filter(
                PushSubscription.user_id == user_id,
                PushSubscription.endpoint == endpoint,
            )
            .first()
        )

    def upsert(self, user_id: UUID, data: PushSubscriptionCreate) -> PushSubscription:
        """Create the subscription, or refresh keys when the endpoint is known."""
        subscription = self.get_by_endpoint(user_id, data.endpoint)
        if subscription is None:
            subscription = PushSubscription(user_id=user_id, endpoint=data.endpoint)
            self.db.add(subscription)

        subscription.p256dh = data.keys.p256dh  # type: ignore[assignment]
        subscription.auth = data.keys.auth  # type: ignore[assignment]
        subscription.expiration_time = data.expiration_time  # type: ignore[assignment]
        if data.device_label is not None:
            subscription.device_label = data.device_label  # type: ignore[assignment]

        self.db.commit()
        self.db.refresh(subscription)
        return subscription

    def update(self, user_id: UUID, data: PushSubscriptionUpdate) -> PushSubscription | None:
        subscription = self.get_by_endpoint(user_id, data.endpoint)
        if subscription is None:
            return None

        update_data = data.model_dump(exclude_unset=True, exclude={"endpoint", "keys"})
        for key, value in update_data.items():
            setattr(subscription, key, value)
        if data.keys is not None:
            subscription.p256dh = data.keys.p256dh  # type: ignore[assignment]
            subscription.auth = data.keys.auth  # type: ignore[assignment]

        self.db.commit()
        self.db.refresh(subscription)
        return subscription

    def touch(self, subscription: PushSubscription, when: datetime | None = None) -> None:
        subscription.last_used_at = when or utc_now()  # type: ignore[assignment]
        self.db.commit()

    def delete(self, user_id: UUID, endpoint: str) -> bool:
        subscription = self.get_by_endpoint(user_id, endpoint)
        if subscription is None:
            return False
        self.db.delete(subscription)
        self.db.commit()
        return True

    def delete_by_id(self, subscription_id: UUID) -> bool:
        subscription = self.get_by_id(subscription_id)
        if subscription is None:
            return False
        self.db.delete(subscription)
        self.db.commit()
        return True
