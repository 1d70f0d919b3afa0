"""
Profile API Endpoints
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from careertrail.auth import get_current_user
from careertrail.db.database import get_db
from careertrail.db.models import User
from careertrail.schemas import NotificationPreferences, ProfileRead, ProfileUpdate
from careertrail.services import profile as profile_service

router = APIRouter()


@router.get("", response_model=ProfileRead)
async def read_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """The current user's profile, created with defaults on first access"""
    return profile_service.get_profile(db, current_user.id)


@router.put("", response_model=ProfileRead)
async def update_profile(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return profile_service.update_profile(db, current_user.id, data)


@router.put("/preferences", response_model=ProfileRead)
async def update_notification_preferences(
    data: NotificationPreferences,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return profile_service.update_notification_preferences(db, current_user.id, data)
