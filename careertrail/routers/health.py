"""
Health Check Endpoint
"""

import os

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from careertrail import __version__
from careertrail.db.database import get_db
from careertrail.realtime import change_feed

router = APIRouter()


@router.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """Health check endpoint"""
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "database": db_status,
        "subscribers": change_feed.subscriber_count,
        "version": __version__,
        "environment": os.getenv("ENVIRONMENT", "development"),
    }
