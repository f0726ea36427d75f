"""In-memory log of operational warnings raised by the station."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Deque


@dataclass
class Notification:
    level: str
    message: str
    created_at: datetime
    context: dict | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data


class NotificationLog:
    """Capped log of non-fatal faults, newest first."""

    def __init__(self, max_items: int = 50) -> None:
        self.max_items = max_items
        self._items: Deque[Notification] = deque(maxlen=max_items)
        self._lock = threading.Lock()

    def add(self, level: str, message: str, context: dict | None = None) -> Notification:
        note = Notification(
            level=level,
            message=message,
            created_at=datetime.now(timezone.utc),
            context=context,
        )
        with self._lock:
            self._items.appendleft(note)
        return note

    def recent(self, limit: int | None = None) -> list[Notification]:
        with self._lock:
            items = list(self._items)
        if limit is None:
            return items
        return items[:limit]


__all__ = ["Notification", "NotificationLog"]
