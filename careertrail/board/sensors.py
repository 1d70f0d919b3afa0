"""Input sensors that turn raw gestures into board drag events.

The pointer sensor only activates after the pointer travels
``distance`` pixels, so a short press stays a click. The keyboard sensor
offers the same drop path without a pointer.
"""
import asyncio
import math
from typing import Optional

from careertrail.board.columns import column_index
from careertrail.board.controller import StatusBoard
from careertrail.config import get_config
from careertrail.db.models import JOB_STATUSES


class PointerSensor:
    def __init__(self, board: StatusBoard, distance: Optional[float] = None):
        self.board = board
        self.distance = get_config().board.drag_distance_px if distance is None else distance
        self._job_id: Optional[str] = None
        self._origin: Optional[tuple[float, float]] = None
        self.active = False

    def pointer_down(self, job_id: str, x: float, y: float) -> None:
        self._job_id = job_id
        self._origin = (x, y)
        self.active = False

    def pointer_move(self, x: float, y: float) -> bool:
        """Track the pointer; returns True once the drag has started."""
        if self._origin is None or self.active:
            return self.active
        travelled = math.hypot(x - self._origin[0], y - self._origin[1])
        if travelled >= self.distance:
            self.active = self.board.on_drag_start(self._job_id) is not None
        return self.active

    def pointer_up(self, over: Optional[str]) -> Optional[asyncio.Task]:
        """Release over a column id (or None). A click never drops."""
        job_id, active = self._job_id, self.active
        self._job_id, self._origin, self.active = None, None, False
        if not active:
            return None
        return self.board.on_drag_end(job_id, over)

    def cancel(self) -> None:
        if self.active:
            self.board.on_drag_cancel()
        self._job_id, self._origin, self.active = None, None, False


class KeyboardSensor:
    """Space picks a card up, arrows pick a column, space drops, escape cancels."""

    def __init__(self, board: StatusBoard):
        self.board = board
        self._job_id: Optional[str] = None
        self.target: Optional[str] = None

    def pick_up(self, job_id: str) -> bool:
        session = self.board.on_drag_start(job_id)
        if session is None:
            return False
        self._job_id = job_id
        self.target = session.origin_status
        return True

    def move(self, step: int) -> Optional[str]:
        """Shift the target column by ``step``, clamped to the board edges."""
        if self.target is None:
            return None
        index = min(max(column_index(self.target) + step, 0), len(JOB_STATUSES) - 1)
        self.target = JOB_STATUSES[index]
        return self.target

    def drop(self) -> Optional[asyncio.Task]:
        if self._job_id is None:
            return None
        job_id, target = self._job_id, self.target
        self._job_id, self.target = None, None
        return self.board.on_drag_end(job_id, target)

    def cancel(self) -> None:
        if self._job_id is not None:
            self.board.on_drag_cancel()
        self._job_id, self.target = None, None
