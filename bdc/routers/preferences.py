"""Notification preference API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bdc.core.auth import get_current_user
from bdc.core.database import get_db
from bdc.schemas.notification_preference import (
    NotificationPreferenceResponse,
    NotificationPreferenceUpdate,
)
from bdc.services.preference_service import PreferenceService

router = APIRouter()


@router.get(
    "/preferences",
    response_model=NotificationPreferenceResponse,
    summary="Get notification preferences",
)
async def get_preferences(
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> NotificationPreferenceResponse:
    """Return the caller's preferences, creating the defaults on first access."""
    preference = PreferenceService(db).get(user_id)
    return NotificationPreferenceResponse.model_validate(preference)


@router.put(
    "/preferences",
    response_model=NotificationPreferenceResponse,
    summary="Update notification preferences",
)
async def update_preferences(
    data: NotificationPreferenceUpdate,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> NotificationPreferenceResponse:
    """Merge a partial update into the caller's preferences."""
    preference = PreferenceService(db).update(user_id, data)
    return NotificationPreferenceResponse.model_validate(preference)
