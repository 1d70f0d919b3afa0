"""
Preferences API Endpoints
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from careertrail.auth import get_current_user
from careertrail.db.database import get_db
from careertrail.db.models import User
from careertrail.schemas import PreferenceRead, PreferenceUpdate
from careertrail.services import preferences as preference_service

router = APIRouter()


@router.get("", response_model=PreferenceRead)
async def read_preferences(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return preference_service.get_preferences(db, current_user.id)


@router.put("", response_model=PreferenceRead)
async def update_preferences(
    data: PreferenceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return preference_service.set_active_tab(db, current_user.id, data.active_tab)
