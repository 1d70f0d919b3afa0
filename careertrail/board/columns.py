"""Status columns of the Kanban board.

Columns are a derived partition of the job list by ``status``; they are
recomputed on every read and never stored.
"""
from dataclasses import dataclass
from typing import Iterable, TypeVar

from careertrail.db.models import JOB_STATUSES

T = TypeVar("T")


@dataclass(frozen=True)
class Column:
    status: str
    label: str


COLUMNS: tuple[Column, ...] = (
    Column("applied", "Applied"),
    Column("interviewing", "Interviewing"),
    Column("offer", "Offer"),
    Column("rejected", "Rejected"),
)


def is_column(column_id) -> bool:
    """True if ``column_id`` names one of the four drop targets."""
    return isinstance(column_id, str) and column_id in JOB_STATUSES


def column_index(status: str) -> int:
    return JOB_STATUSES.index(status)


def partition_by_status(jobs: Iterable[T]) -> dict[str, list[T]]:
    """Split jobs into the four status columns.

    Every job lands in exactly one bucket; input order is kept within a
    bucket. Works for ORM rows, pydantic records and plain dicts.

    Raises:
        ValueError: a job carries a status outside the four columns
    """
    buckets: dict[str, list[T]] = {status: [] for status in JOB_STATUSES}
    for job in jobs:
        status = job["status"] if isinstance(job, dict) else job.status
        if status not in buckets:
            job_id = job["id"] if isinstance(job, dict) else job.id
            raise ValueError(f"Job {job_id} has unknown status '{status}'")
        buckets[status].append(job)
    return buckets
