"""Synchronous publish/subscribe for scoreboard notifications.

The dispatcher publishes one notification per handled interaction so panels
(log viewers, status bars, tests) can observe engine activity without being
wired into the table view itself.

Handlers run in subscription order on the publishing thread. A failing
handler is recorded in ``errors`` (the most recent ``max_errors`` failures)
and does not stop the remaining handlers.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Deque, Dict, List, Protocol

__all__ = [
    "ScoreboardEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]


class ScoreboardEvent(str, Enum):
    TABLE_LOADED = "table_loaded"
    SORT_APPLIED = "sort_applied"
    SELECTION_CHANGED = "selection_changed"
    ROUND_TOGGLED = "round_toggled"
    ENGINE_WARNING = "engine_warning"
    LOG_RECORD_ADDED = "log_record_added"


@dataclass
class Event:
    name: str  # ScoreboardEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | ScoreboardEvent) -> str:
    return name.value if isinstance(name, ScoreboardEvent) else name


class EventBus:
    def __init__(self, max_errors: int = 100) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: Deque[tuple[Event, BaseException]] = deque(maxlen=max(1, max_errors))

    def subscribe(
        self, name: str | ScoreboardEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket and sub in bucket:
                bucket.remove(sub)
            if not bucket:
                self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    def publish(self, name: str | ScoreboardEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        # Handlers may (un)subscribe, so dispatch outside the lock
        finished: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    finished.append(sub)
        for sub in finished:
            self.unsubscribe(sub)
        return evt

    def subscriber_count(self, name: str | ScoreboardEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
