"""Kanban status board: columns, optimistic drag-and-drop, real-time merge."""
from careertrail.board.columns import COLUMNS, is_column, partition_by_status
from careertrail.board.controller import DragSession, StatusBoard
from careertrail.board.notifications import Notification, Notifier, ToastQueue
from careertrail.board.sensors import KeyboardSensor, PointerSensor
from careertrail.board.sync import EntitySync, SyncStatus, apply_event

__all__ = [
    "COLUMNS",
    "DragSession",
    "EntitySync",
    "KeyboardSensor",
    "Notification",
    "Notifier",
    "PointerSensor",
    "StatusBoard",
    "SyncStatus",
    "ToastQueue",
    "apply_event",
    "is_column",
    "partition_by_status",
]
