"""Job service: CRUD, status persistence and the activity trail.

Every query is scoped to the owning user; a job of another user behaves
exactly like a missing one.

Usage:
    from careertrail.services.jobs import create_job, update_job_status
"""
import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from careertrail.board.columns import partition_by_status
from careertrail.db.models import (
    JOB_STATUSES,
    ContactInteraction,
    Document,
    Interview,
    Job,
    JobActivity,
)
from careertrail.errors import NotFoundError
from careertrail.schemas import JobCreate, JobUpdate

logger = logging.getLogger(__name__)


def list_jobs(
    session: Session,
    user_id: str,
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> list[Job]:
    """List a user's jobs, newest first.

    Args:
        session: SQLAlchemy session
        user_id: Owner
        search: Case-insensitive substring of company or role
        status: Restrict to one status column
    """
    query = session.query(Job).filter(Job.user_id == user_id)
    if search:
        pattern = f"%{search.lower()}%"
        query = query.filter(or_(
            Job.company.ilike(pattern),
            Job.role.ilike(pattern),
        ))
    if status:
        query = query.filter(Job.status == status)
    return query.order_by(Job.created_at.desc(), Job.id).all()


def get_job(session: Session, user_id: str, job_id: str) -> Job:
    job = (
        session.query(Job)
        .filter(Job.id == job_id, Job.user_id == user_id)
        .first()
    )
    if job is None:
        raise NotFoundError("Job", job_id)
    return job


def create_job(session: Session, user_id: str, data: JobCreate) -> Job:
    job = Job(user_id=user_id, **data.model_dump())
    session.add(job)
    session.commit()
    session.refresh(job)
    logger.info(f"Created job {job.id}: {job.role} at {job.company} [{job.status}]")
    return job


def update_job(session: Session, user_id: str, job_id: str, data: JobUpdate) -> Job:
    job = get_job(session, user_id, job_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(job, field, value)
    session.commit()
    session.refresh(job)
    return job


def update_job_status(session: Session, user_id: str, job_id: str, status: str) -> Job:
    """Persist a new board column for a job.

    The caller supplies both the id and the new status; ownership is
    enforced here. Setting the current status again is a no-op write.
    """
    if status not in JOB_STATUSES:
        raise ValueError(f"Invalid status '{status}' (expected one of {JOB_STATUSES})")
    job = get_job(session, user_id, job_id)
    old = job.status
    if old != status:
        job.status = status
        session.commit()
        session.refresh(job)
        logger.info(f"Job {job_id}: {old} → {status}")
    return job


def delete_job(session: Session, user_id: str, job_id: str) -> None:
    """Delete a job with its activity trail and contact links.

    Interviews, interactions and documents survive with ``job_id`` cleared
    through the ORM, so the change feed reports each of them as updated.
    """
    job = get_job(session, user_id, job_id)
    for model in (Interview, ContactInteraction, Document):
        for linked in session.query(model).filter(model.job_id == job_id):
            linked.job_id = None
    session.delete(job)
    session.commit()
    logger.info(f"Deleted job {job_id}")


def get_board(session: Session, user_id: str) -> dict[str, list[Job]]:
    """The user's jobs partitioned into the four status columns."""
    return partition_by_status(list_jobs(session, user_id))


def list_activities(
    session: Session,
    user_id: str,
    job_id: Optional[str] = None,
    limit: Optional[int] = None,
) -> list[JobActivity]:
    """Activity trail, newest first; one job or all of the user's jobs."""
    query = session.query(JobActivity).filter(JobActivity.user_id == user_id)
    if job_id is not None:
        get_job(session, user_id, job_id)
        query = query.filter(JobActivity.job_id == job_id)
    query = query.order_by(JobActivity.activity_date.desc())
    if limit:
        query = query.limit(limit)
    return query.all()
