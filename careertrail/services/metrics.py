"""Derived application metrics for the dashboard.

``compute_metrics`` is pure over already-loaded rows; ``get_metrics``
loads the user's rows and delegates.
"""
import math
from collections import Counter
from datetime import date, datetime, time, timezone
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from careertrail.db.models import JOB_STATUSES, Job, JobActivity
from careertrail.schemas import CompanyCount, JobActivityRead, JobMetrics
from careertrail.services.jobs import list_activities, list_jobs

TOP_COMPANIES = 5
RECENT_ACTIVITY = 10


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _response_days(job: Job) -> Optional[int]:
    """Whole days (rounded up) between applying and the last status move."""
    applied = datetime.combine(job.applied_date, time.min)
    delta = _naive_utc(job.updated_at) - applied
    days = math.ceil(delta.total_seconds() / 86400)
    return days if days > 0 else None


def compute_metrics(
    jobs: Sequence[Job],
    activities: Sequence[JobActivity] = (),
    today: Optional[date] = None,
) -> JobMetrics:
    today = today or date.today()
    total = len(jobs)
    newest = sorted(activities, key=lambda a: _naive_utc(a.activity_date), reverse=True)
    recent = [JobActivityRead.model_validate(a) for a in newest[:RECENT_ACTIVITY]]
    if total == 0:
        return JobMetrics(recent_activity=recent)

    month_start = today.replace(day=1)
    breakdown = {status: 0 for status in JOB_STATUSES}
    for job in jobs:
        breakdown[job.status] = breakdown.get(job.status, 0) + 1

    response_times = [
        days for days in (_response_days(j) for j in jobs if j.status != "applied")
        if days is not None
    ]
    average_response = round(sum(response_times) / len(response_times)) if response_times else 0

    companies = Counter(job.company for job in jobs)

    return JobMetrics(
        total_applications=total,
        applications_this_month=sum(1 for j in jobs if j.applied_date >= month_start),
        interview_rate=(breakdown["interviewing"] + breakdown["offer"]) / total * 100,
        offer_rate=breakdown["offer"] / total * 100,
        average_response_time=average_response,
        status_breakdown=breakdown,
        recent_activity=recent,
        top_companies=[
            CompanyCount(company=company, count=count)
            for company, count in companies.most_common(TOP_COMPANIES)
        ],
    )


def get_metrics(session: Session, user_id: str, today: Optional[date] = None) -> JobMetrics:
    return compute_metrics(
        list_jobs(session, user_id),
        list_activities(session, user_id, limit=RECENT_ACTIVITY),
        today=today,
    )
