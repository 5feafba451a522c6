"""In-process log capture.

Attaches a handler to the root logger and keeps the most recent records in a
ring buffer, so a status panel or the CLI can show what the engine did (sorts,
ignored events). Each captured record is also published on the EventBus as
``ScoreboardEvent.LOG_RECORD_ADDED`` when a bus is registered.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from dataclasses import asdict, dataclass
from threading import RLock
from typing import Deque, List, Optional

from config import settings
from .event_bus import EventBus, ScoreboardEvent
from .service_locator import services

__all__ = ["LogEntry", "LoggingService", "get_logging_service"]


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__(level=logging.DEBUG)
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:
        self._svc._ingest_record(record)


class LoggingService:
    def __init__(self, capacity: int = settings.DEFAULT_LOG_CAPACITY) -> None:
        self._lock = RLock()
        self._entries: Deque[LogEntry] = deque(maxlen=max(1, capacity))
        self._handler = _RingBufferHandler(self)
        self._attached = False

    def attach_root(self, level: int = logging.DEBUG) -> None:
        if self._attached:
            return
        root = logging.getLogger()
        root.addHandler(self._handler)
        if root.level > level:
            root.setLevel(level)
        self._attached = True

    def detach_root(self) -> None:
        if not self._attached:
            return
        logging.getLogger().removeHandler(self._handler)
        self._attached = False

    def _ingest_record(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            level=record.levelname,
            name=record.name,
            message=record.getMessage(),
            created=record.created,
        )
        with self._lock:
            self._entries.append(entry)
        bus = services.try_get("event_bus")
        if isinstance(bus, EventBus):
            bus.publish(
                ScoreboardEvent.LOG_RECORD_ADDED,
                {"level": entry.level, "name": entry.name, "message": entry.message[:120]},
            )

    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        with self._lock:
            data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def filter(
        self, *, level: str | None = None, name_contains: str | None = None
    ) -> List[LogEntry]:
        return [
            e
            for e in self.recent()
            if (not level or e.level == level) and (not name_contains or name_contains in e.name)
        ]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def export_jsonl(self, path: str, *, level: str | None = None) -> int:
        """Write the (optionally level-filtered) entries as JSON Lines; returns line count."""
        entries = self.filter(level=level)
        with open(path, "w", encoding="utf-8") as f:
            for e in entries:
                f.write(json.dumps(asdict(e), sort_keys=True) + "\n")
        return len(entries)


def get_logging_service() -> LoggingService:
    return services.get_typed("logging_service", LoggingService)
