"""Web Push subscription API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bdc.core.auth import get_current_user
from bdc.core.config import settings
from bdc.core.database import get_db
from bdc.models.notification import NotificationPriority, NotificationType
from bdc.repositories.push_subscription_repository import PushSubscriptionRepository
from bdc.schemas.notification import MessageResponse
from bdc.schemas.push_payload import PushPayload
from bdc.schemas.push_subscription import (
    PushSubscriptionCreate,
    PushSubscriptionDelete,
    PushSubscriptionResponse,
    PushSubscriptionUpdate,
    TestPushResponse,
    VapidPublicKeyResponse,
)
from bdc.services.push_service import PushService

router = APIRouter()


@router.get(
    "/vapid-public-key",
    response_model=VapidPublicKeyResponse,
    summary="Get the VAPID public key",
    responses={503: {"description": "Push notifications are not configured"}},
)
async def get_vapid_public_key() -> VapidPublicKeyResponse:
    if not settings.push_enabled:
        raise HTTPException(status_code=503, detail="Push notifications are not configured")
    return VapidPublicKeyResponse(public_key=settings.VAPID_PUBLIC_KEY)


@router.get(
    "/push-subscription",
    response_model=list[PushSubscriptionResponse],
    summary="List push subscriptions",
)
async def list_push_subscriptions(
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> list[PushSubscriptionResponse]:
    repo = PushSubscriptionRepository(db)
    return [PushSubscriptionResponse.model_validate(s) for s in repo.get_by_user(user_id)]


@router.post(
    "/push-subscription",
    response_model=PushSubscriptionResponse,
    status_code=201,
    summary="Register a push subscription",
)
async def subscribe(
    data: PushSubscriptionCreate,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> PushSubscriptionResponse:
    """Store the device's subscription; re-subscribing refreshes its keys."""
    repo = PushSubscriptionRepository(db)
    return PushSubscriptionResponse.model_validate(repo.upsert(user_id, data))


@router.put(
    "/push-subscription",
    response_model=PushSubscriptionResponse,
    summary="Update a push subscription",
    responses={404: {"description": "Push subscription not found"}},
)
async def update_subscription(
    data: PushSubscriptionUpdate,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> PushSubscriptionResponse:
    repo = PushSubscriptionRepository(db)
    subscription = repo.update(user_id, data)
    if subscription is None:
        raise HTTPException(status_code=404, detail="Push subscription not found")
    return PushSubscriptionResponse.model_validate(subscription)


@router.delete(
    "/push-subscription",
    response_model=MessageResponse,
    summary="Remove a push subscription",
    responses={404: {"description": "Push subscription not found"}},
)
async def unsubscribe(
    data: PushSubscriptionDelete,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> MessageResponse:
    repo = PushSubscriptionRepository(db)
    if not repo.delete(user_id, data.endpoint):
        raise HTTPException(status_code=404, detail="Push subscription not found")
    return MessageResponse(message="Push subscription removed")


@router.post(
    "/test-push",
    response_model=TestPushResponse,
    summary="Send a test push notification",
)
async def send_test_push(
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> TestPushResponse:
    """Send a system test message to every device the caller subscribed."""
    payload = PushPayload(
        title="Test Notification",
        body="Push notifications are working.",
        type=NotificationType.SYSTEM.value,
        tag="test-notification",
        link="/notifications",
        data={"priority": NotificationPriority.NORMAL.value},
    )
    result = PushService(db).send_to_user(user_id, payload)
    return TestPushResponse(sent=result.sent)
