"""Per-entity sync state and the real-time reducer.

State machine for an optimistically edited row:

    synced ──drop──▶ pending(local) ──ok──▶ synced
                          │
                          └──fail──▶ error(local, reason) ──drop──▶ pending

``apply_event`` folds one change-feed event into a list of rows. It is pure
(returns a new list) so merge behaviour is testable without a backend.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Type, Union

from pydantic import BaseModel

from careertrail.schemas import ChangeEvent


class SyncStatus(str, Enum):
    SYNCED = "synced"
    PENDING = "pending"
    ERROR = "error"


@dataclass(frozen=True)
class EntitySync:
    """Sync state of one row; ``seq`` identifies the drop that produced it."""
    status: SyncStatus = SyncStatus.SYNCED
    local_value: Optional[str] = None
    reason: Optional[str] = None
    seq: int = 0

    @classmethod
    def synced(cls, seq: int = 0) -> "EntitySync":
        return cls(SyncStatus.SYNCED, seq=seq)

    @classmethod
    def pending(cls, local_value: str, seq: int) -> "EntitySync":
        return cls(SyncStatus.PENDING, local_value=local_value, seq=seq)

    @classmethod
    def error(cls, local_value: str, reason: str, seq: int) -> "EntitySync":
        return cls(SyncStatus.ERROR, local_value=local_value, reason=reason, seq=seq)

    @property
    def is_pending(self) -> bool:
        return self.status is SyncStatus.PENDING


def _id_of(item: Any) -> str:
    return item["id"] if isinstance(item, dict) else item.id


def apply_event(
    items: Sequence[Any],
    change: Union[ChangeEvent, dict],
    model: Optional[Type[BaseModel]] = None,
) -> list:
    """Fold one change event into ``items`` and return the new list.

    - insert: append, or replace in place when the id is already present
    - update: replace by id; unknown id is treated as an insert
    - delete: remove by id; unknown id is a no-op

    Args:
        items: Current rows (dicts or objects with ``id``)
        change: ChangeEvent or its dict form
        model: Optional pydantic model the record is validated into
    """
    if isinstance(change, dict):
        change = ChangeEvent.model_validate(change)

    record = change.record
    record_id = record["id"]

    if change.event_type == "delete":
        return [item for item in items if _id_of(item) != record_id]

    row = model.model_validate(record) if model is not None else dict(record)
    out = list(items)
    for index, item in enumerate(out):
        if _id_of(item) == record_id:
            out[index] = row
            return out
    out.append(row)
    return out
