"""Real-time change feed.

Every committed insert/update/delete on a tracked table is published to the
subscribers of the row's owner as a ``ChangeEvent``:

    {"table": "jobs", "event_type": "update", "record": {...}}

Flow:
  1. ``after_flush``  collects changed rows into ``session.info`` (snapshot)
  2. ``after_commit`` publishes them, ``after_rollback`` drops them
  3. each subscriber drains its own asyncio queue (WebSocket endpoint)

Publishing is thread-safe: the event is handed to the subscriber's loop
with ``call_soon_threadsafe``, so writes from a worker thread or the CLI
reach async consumers.
"""

import asyncio
import itertools
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from sqlalchemy import event
from sqlalchemy.orm import Session

from careertrail.db.models import Contact, ContactInteraction, Document, Folder, Interview, Job
from careertrail.schemas import ChangeEvent

logger = logging.getLogger(__name__)

TRACKED_MODELS = {
    Job: "jobs",
    Contact: "contacts",
    ContactInteraction: "contact_interactions",
    Interview: "interviews",
    Document: "documents",
    Folder: "folders",
}
TRACKED_TABLES = frozenset(TRACKED_MODELS.values())

_PENDING_KEY = "careertrail_changes"
_FEED_KEY = "change_feed"


@dataclass(eq=False)
class Subscription:
    """One consumer of the feed: a user, a table filter and a bounded queue."""
    id: int
    user_id: str
    tables: frozenset
    queue: asyncio.Queue
    loop: asyncio.AbstractEventLoop
    dropped: int = 0

    def wants(self, change: ChangeEvent) -> bool:
        return change.user_id == self.user_id and change.table in self.tables

    def _offer(self, change: ChangeEvent) -> None:
        # Runs on the subscriber's loop; bounded, oldest event goes first
        if self.queue.full():
            self.queue.get_nowait()
            self.dropped += 1
            logger.warning(
                f"Subscription {self.id} queue full, dropped oldest "
                f"({self.dropped} total)"
            )
        self.queue.put_nowait(change)

    async def get(self) -> ChangeEvent:
        return await self.queue.get()


@dataclass
class ChangeFeed:
    """In-process fan-out of row changes, keyed by owning user."""
    queue_size: int = 256
    _subscriptions: dict = field(default_factory=dict)
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))

    def subscribe(
        self,
        user_id: str,
        tables: Optional[Iterable[str]] = None,
    ) -> Subscription:
        """Register a consumer on the running event loop."""
        wanted = frozenset(tables) if tables else TRACKED_TABLES
        unknown = wanted - TRACKED_TABLES
        if unknown:
            raise ValueError(f"Unknown tables: {sorted(unknown)}")
        sub = Subscription(
            id=next(self._ids),
            user_id=user_id,
            tables=wanted,
            queue=asyncio.Queue(maxsize=self.queue_size),
            loop=asyncio.get_running_loop(),
        )
        self._subscriptions[sub.id] = sub
        logger.info(f"Subscribed #{sub.id} user={user_id} tables={sorted(wanted)}")
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        if self._subscriptions.pop(sub.id, None) is not None:
            logger.info(f"Unsubscribed #{sub.id}")

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def publish(self, change: ChangeEvent) -> int:
        """Deliver to every matching subscriber; returns how many matched."""
        delivered = 0
        for sub in list(self._subscriptions.values()):
            if not sub.wants(change):
                continue
            if sub.loop.is_closed():
                self._subscriptions.pop(sub.id, None)
                continue
            sub.loop.call_soon_threadsafe(sub._offer, change)
            delivered += 1
        logger.debug(
            f"Published {change.table}/{change.event_type} "
            f"id={change.record.get('id')} to {delivered} subscriber(s)"
        )
        return delivered


change_feed = ChangeFeed()


def feed_for(session: Session) -> ChangeFeed:
    """The feed a session publishes to (overridable via session.info)."""
    return session.info.get(_FEED_KEY, change_feed)


# ---------------------------------------------------------------------------
# Session hooks
# ---------------------------------------------------------------------------


def _snapshot(session: Session, objects, event_type: str) -> None:
    pending = session.info.setdefault(_PENDING_KEY, [])
    for obj in objects:
        table = TRACKED_MODELS.get(type(obj))
        if table is None:
            continue
        pending.append(ChangeEvent(
            table=table,
            event_type=event_type,
            record=obj.to_dict(),
            user_id=obj.user_id,
        ))


@event.listens_for(Session, "after_flush")
def _after_flush_collect(session, flush_context):
    _snapshot(session, session.new, "insert")
    _snapshot(
        session,
        [o for o in session.dirty if session.is_modified(o, include_collections=False)],
        "update",
    )
    _snapshot(session, session.deleted, "delete")


@event.listens_for(Session, "after_commit")
def _after_commit_publish(session):
    pending = session.info.pop(_PENDING_KEY, [])
    feed = feed_for(session)
    for change in pending:
        feed.publish(change)


@event.listens_for(Session, "after_rollback")
def _after_rollback_discard(session):
    dropped = session.info.pop(_PENDING_KEY, [])
    if dropped:
        logger.debug(f"Rollback: discarded {len(dropped)} unpublished change(s)")
