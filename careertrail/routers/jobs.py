"""
Jobs API Endpoints
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from careertrail.auth import get_current_user
from careertrail.db.database import get_db
from careertrail.db.models import User
from careertrail.schemas import (
    BoardColumns,
    JobActivityRead,
    JobCreate,
    JobRead,
    JobStatus,
    JobStatusUpdate,
    JobUpdate,
)
from careertrail.services import jobs as job_service

router = APIRouter()


@router.get("", response_model=List[JobRead])
async def list_jobs(
    search: Optional[str] = None,
    status: Optional[JobStatus] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List jobs, newest first, optionally filtered"""
    return job_service.list_jobs(db, current_user.id, search=search, status=status)


@router.post("", response_model=JobRead, status_code=status.HTTP_201_CREATED)
async def create_job(
    data: JobCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return job_service.create_job(db, current_user.id, data)


@router.get("/board", response_model=BoardColumns)
async def get_board(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Jobs partitioned into the four status columns"""
    try:
        return job_service.get_board(db, current_user.id)
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{job_id}", response_model=JobRead)
async def get_job(
    job_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return job_service.get_job(db, current_user.id, job_id)


@router.put("/{job_id}", response_model=JobRead)
async def update_job(
    job_id: str,
    data: JobUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return job_service.update_job(db, current_user.id, job_id, data)


@router.patch("/{job_id}/status", response_model=JobRead)
async def update_job_status(
    job_id: str,
    data: JobStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Persist a board drop; returns the updated job"""
    return job_service.update_job_status(db, current_user.id, job_id, data.status)


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(
    job_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    job_service.delete_job(db, current_user.id, job_id)


@router.get("/{job_id}/activities", response_model=List[JobActivityRead])
async def list_job_activities(
    job_id: str,
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return job_service.list_activities(db, current_user.id, job_id=job_id, limit=limit)
