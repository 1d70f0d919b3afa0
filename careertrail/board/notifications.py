"""Transient user-facing notifications (toasts)."""
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    level: str  # success | error | info
    message: str
    created_at: float = field(default_factory=time.monotonic)


@runtime_checkable
class Notifier(Protocol):
    """Anything that can show a notification to the user."""

    def notify(self, notification: Notification) -> None:
        ...


class ToastQueue:
    """In-memory notifier; toasts expire after ``ttl`` seconds."""

    def __init__(self, ttl: float = 4.0, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self.history: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.history.append(notification)
        log = logger.error if notification.level == "error" else logger.info
        log(f"[{notification.level}] {notification.message}")

    def active(self) -> list[Notification]:
        """Toasts still visible now."""
        now = self._clock()
        return [n for n in self.history if now - n.created_at < self.ttl]

    def of_level(self, level: str) -> list[Notification]:
        return [n for n in self.history if n.level == level]
