"""
Change notification for the record store.

A ``ChangeFeed`` is attached to a session factory through SQLAlchemy session
events. Every flush, and every bulk UPDATE or DELETE, records which tables
were touched; a successful commit bumps a per-table version token and
notifies subscribers, a rollback drops whatever was pending. Consumers
either poll ``version(topic)`` and compare it with the token they last saw,
or register a callback.
"""
from __future__ import annotations

import logging
import threading
from collections import defaultdict
from typing import Any, Callable, Iterable, Optional

from sqlalchemy import event
from sqlalchemy.orm import ORMExecuteState, Session, sessionmaker

logger = logging.getLogger(__name__)

_PENDING_KEY = "moodhome.pending_topics"

Callback = Callable[[str, int], None]


class Subscription:
    def __init__(self, feed: "ChangeFeed", topic: str, callback: Callback) -> None:
        self._feed = feed
        self.topic = topic
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self.active = False
            self._feed._remove(self)


class ChangeFeed:
    def __init__(self) -> None:
        self._versions: dict[str, int] = defaultdict(int)
        self._subscribers: dict[str, list[Subscription]] = defaultdict(list)
        self._lock = threading.Lock()

    # -- wiring -------------------------------------------------------------

    def attach(self, factory: sessionmaker) -> None:
        event.listen(factory, "after_flush", self._after_flush)
        event.listen(factory, "after_commit", self._after_commit)
        event.listen(factory, "after_soft_rollback", self._after_rollback)
        event.listen(factory, "do_orm_execute", self._on_orm_execute)

    def _after_flush(self, session: Session, flush_context: Any) -> None:
        pending = session.info.setdefault(_PENDING_KEY, set())
        for obj in list(session.new) + list(session.dirty) + list(session.deleted):
            table = getattr(obj, "__tablename__", None)
            if table:
                pending.add(table)

    def _on_orm_execute(self, state: ORMExecuteState) -> None:
        # bulk update/delete statements bypass the unit of work
        if (state.is_update or state.is_delete) and state.bind_mapper is not None:
            pending = state.session.info.setdefault(_PENDING_KEY, set())
            pending.add(state.bind_mapper.local_table.name)

    def _after_commit(self, session: Session) -> None:
        pending = session.info.pop(_PENDING_KEY, None)
        if pending:
            self.publish(pending)

    def _after_rollback(self, session: Session, previous_transaction: Any) -> None:
        session.info.pop(_PENDING_KEY, None)

    # -- versions & subscribers ---------------------------------------------

    def version(self, topic: str) -> int:
        with self._lock:
            return self._versions[topic]

    def versions(self) -> dict[str, int]:
        with self._lock:
            return dict(self._versions)

    def publish(self, topics: Iterable[str]) -> None:
        notify: list[tuple[Subscription, str, int]] = []
        with self._lock:
            for topic in sorted(set(topics)):
                self._versions[topic] += 1
                version = self._versions[topic]
                notify.extend((sub, topic, version) for sub in list(self._subscribers[topic]))
        for sub, topic, version in notify:
            if not sub.active:
                continue
            try:
                sub.callback(topic, version)
            except Exception:
                # a broken consumer must not undo a commit that already happened
                logger.exception("Change subscriber for %s failed", topic)

    def subscribe(self, topic: str, callback: Callback) -> Subscription:
        sub = Subscription(self, topic, callback)
        with self._lock:
            self._subscribers[topic].append(sub)
        return sub

    def observe(
        self,
        topic: str,
        loader: Callable[[], Any],
        callback: Callable[[Any], None],
    ) -> Subscription:
        """
        Continuous snapshot stream: ``callback`` receives ``loader()`` now and
        again after every commit that touches ``topic`` until cancelled.
        """
        sub = self.subscribe(topic, lambda _topic, _version: callback(loader()))
        callback(loader())
        return sub

    def _remove(self, sub: Subscription) -> None:
        with self._lock:
            subs = self._subscribers.get(sub.topic)
            if subs and sub in subs:
                subs.remove(sub)

    def subscriber_count(self, topic: Optional[str] = None) -> int:
        with self._lock:
            if topic is not None:
                return len(self._subscribers.get(topic, []))
            return sum(len(v) for v in self._subscribers.values())
