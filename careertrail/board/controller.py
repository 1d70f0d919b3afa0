"""Kanban status board with optimistic drag-and-drop.

A drop moves the card immediately, then persists the new status in the
background. Each drop carries a per-job sequence number so only the newest
response for a job touches the board; a failed write reverts the card to
its last confirmed status unless a newer move of that job is still in
flight.

Usage:
    board = StatusBoard(jobs, client.update_job_status, notifier=ToastQueue())
    board.on_drag_start(job.id)
    task = board.on_drag_end(job.id, "interviewing")
    await board.drain()
"""
import asyncio
import itertools
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, Optional, Union

from careertrail.board.columns import is_column, partition_by_status
from careertrail.board.notifications import Notification, Notifier
from careertrail.board.sync import EntitySync, apply_event
from careertrail.schemas import ChangeEvent, JobRead

logger = logging.getLogger(__name__)

UpdateStatus = Callable[[str, str], Awaitable[JobRead]]


@dataclass(frozen=True)
class DragSession:
    """The drag in progress; at most one per board."""
    active_job_id: str
    origin_status: str


class StatusBoard:
    """Board state for one user's jobs.

    Args:
        jobs: Initial rows, in display order
        update_job_status: ``async (job_id, status) -> JobRead``; raises on failure
        notifier: Receives success and error toasts
    """

    def __init__(
        self,
        jobs: Iterable[JobRead],
        update_job_status: UpdateStatus,
        notifier: Optional[Notifier] = None,
    ):
        self._jobs: list[JobRead] = list(jobs)
        self._confirmed: dict[str, JobRead] = {job.id: job for job in self._jobs}
        self._sync: dict[str, EntitySync] = {}
        self._seq = itertools.count(1)
        self._tasks: set[asyncio.Task] = set()
        self._update_job_status = update_job_status
        self._notifier = notifier
        self.session: Optional[DragSession] = None
        self.closed = False

    # --- reads ---

    @property
    def jobs(self) -> tuple[JobRead, ...]:
        return tuple(self._jobs)

    def columns(self) -> dict[str, list[JobRead]]:
        return partition_by_status(self._jobs)

    def get(self, job_id: str) -> Optional[JobRead]:
        for job in self._jobs:
            if job.id == job_id:
                return job
        return None

    def sync_state(self, job_id: str) -> EntitySync:
        return self._sync.get(job_id, EntitySync.synced())

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    # --- drag lifecycle ---

    def on_drag_start(self, job_id: str) -> Optional[DragSession]:
        """Begin dragging a card. Ignored while another drag is active."""
        if self.closed:
            return None
        if self.session is not None:
            logger.debug(f"Drag of {job_id} ignored; {self.session.active_job_id} already active")
            return None
        job = self.get(job_id)
        if job is None:
            return None
        self.session = DragSession(active_job_id=job_id, origin_status=job.status)
        return self.session

    def on_drag_cancel(self) -> None:
        self.session = None

    def on_drag_end(self, job_id: str, over: Optional[str]) -> Optional[asyncio.Task]:
        """Drop a card over a column.

        Dropping outside a column, on an unknown card, or back on the
        card's own column does nothing. Otherwise the card moves at once
        and a persistence task is scheduled; the task is returned so
        callers may await it, but the board never waits on it.
        """
        self.session = None
        if self.closed or not is_column(over):
            return None
        job = self.get(job_id)
        if job is None or job.status == over:
            return None

        seq = next(self._seq)
        self._replace(job.model_copy(update={"status": over}))
        self._sync[job_id] = EntitySync.pending(over, seq)
        logger.debug(f"Job {job_id}: {job.status} → {over} (optimistic, seq {seq})")

        task = asyncio.get_running_loop().create_task(
            self._persist(job_id, over, seq, job.company)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _persist(self, job_id: str, status: str, seq: int, company: str) -> None:
        try:
            updated = await self._update_job_status(job_id, status)
        except Exception as e:
            if self.closed:
                logger.debug(f"Board closed; dropping failure for job {job_id}")
                return
            self._on_failure(job_id, status, seq, e)
            return
        if self.closed:
            logger.debug(f"Board closed; dropping result for job {job_id}")
            return
        self._on_success(job_id, seq, updated, company, status)

    def _on_success(self, job_id: str, seq: int, updated: JobRead, company: str, status: str) -> None:
        self._notify("success", f"Moved {company} to {status}")
        current = self._sync.get(job_id)
        if current is None or self.get(job_id) is None:
            # Deleted while the write was in flight
            return
        # Any success is what the server now holds, even if superseded
        self._confirmed[job_id] = updated
        if seq < current.seq:
            logger.debug(f"Stale response for job {job_id} (seq {seq} < {current.seq})")
            return
        self._replace(updated)
        self._sync[job_id] = EntitySync.synced(seq)

    def _on_failure(self, job_id: str, status: str, seq: int, error: Exception) -> None:
        reason = str(error) or error.__class__.__name__
        logger.warning(f"Status update for job {job_id} failed: {reason}")
        self._notify("error", f"Failed to update job status: {reason}")
        current = self._sync.get(job_id)
        if current is None or self.get(job_id) is None:
            return
        if seq < current.seq:
            return
        confirmed = self._confirmed.get(job_id)
        if confirmed is not None:
            self._replace(confirmed)
        self._sync[job_id] = EntitySync.error(status, reason, seq)

    # --- real-time merge ---

    def apply_change(self, change: Union[ChangeEvent, dict]) -> None:
        """Merge a change-feed event for the ``jobs`` table.

        A pending card keeps its optimistic status; the event only becomes
        the new baseline, unless it already shows the pending status, which
        confirms the move. Deletes always win.
        """
        if isinstance(change, dict):
            change = ChangeEvent.model_validate(change)
        if self.closed or change.table != "jobs":
            return

        job_id = change.record["id"]
        if change.event_type == "delete":
            self._jobs = apply_event(self._jobs, change, model=JobRead)
            self._confirmed.pop(job_id, None)
            self._sync.pop(job_id, None)
            return

        record = JobRead.model_validate(change.record)
        self._confirmed[job_id] = record
        current = self._sync.get(job_id)
        if current is not None and current.is_pending and record.status != current.local_value:
            return
        self._jobs = apply_event(self._jobs, change, model=JobRead)
        if current is not None:
            self._sync[job_id] = EntitySync.synced(current.seq)

    # --- teardown ---

    async def drain(self) -> None:
        """Wait for every in-flight persistence task."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        """Detach the board. Results arriving later are discarded."""
        self.closed = True
        self.session = None

    # --- helpers ---

    def _replace(self, job: JobRead) -> None:
        for index, existing in enumerate(self._jobs):
            if existing.id == job.id:
                self._jobs[index] = job
                return

    def _notify(self, level: str, message: str) -> None:
        if self._notifier is not None:
            self._notifier.notify(Notification(level=level, message=message))
