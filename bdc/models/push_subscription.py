"""PushSubscription model - one device's Web Push registration."""

from sqlalchemy import Column, DateTime, String, UniqueConstraint, func

from bdc.core.database import Base
from bdc.models.shared import UUIDType, generate_uuid


class PushSubscription(Base):
    """Push endpoint and encryption keys for one user device."""

    __tablename__ = "push_subscriptions"
    __table_args__ = (
        UniqueConstraint("user_id", "endpoint", name="uq_push_subscriptions_user_id_endpoint"),
    )

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    user_id = Column(UUIDType, nullable=False, index=True)
    endpoint = Column(String(2048), nullable=False)
    expiration_time = Column(DateTime(timezone=True), nullable=True)
    p256dh = Column(String(255), nullable=False)
    auth = Column(String(255), nullable=False)
    device_label = Column(String(100), nullable=True)
    last_used_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
