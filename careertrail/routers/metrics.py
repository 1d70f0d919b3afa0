"""
Metrics API Endpoint
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from careertrail.auth import get_current_user
from careertrail.db.database import get_db
from careertrail.db.models import User
from careertrail.schemas import JobMetrics
from careertrail.services.metrics import get_metrics

router = APIRouter()


@router.get("", response_model=JobMetrics)
async def read_metrics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Application funnel metrics for the current user"""
    return get_metrics(db, current_user.id)
