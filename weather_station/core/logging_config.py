"""Process-wide logging setup: JSON to stderr plus a recent-entries buffer."""

from __future__ import annotations

import logging
import os
import threading
from collections import deque
from datetime import datetime, timezone
from typing import Optional

from pythonjsonlogger import jsonlogger

_QUIET_LOGGERS = ("httpx", "httpcore")


class RecentLogs:
    """Bounded newest-first record of log entries served by ``/logs``."""

    def __init__(self, maxlen: int = 200) -> None:
        self._entries: deque[dict[str, str]] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def append(self, entry: dict[str, str]) -> None:
        with self._lock:
            self._entries.appendleft(entry)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def entries(self, limit: int = 100, min_level: Optional[str] = None) -> list[dict[str, str]]:
        with self._lock:
            items = list(self._entries)
        threshold = _level_number(min_level) if min_level else None
        if threshold is not None:
            items = [item for item in items if (_level_number(item["level"]) or 0) >= threshold]
        return items[:limit]


RECENT_LOGS = RecentLogs()


class _RecentLogsHandler(logging.Handler):
    def __init__(self, sink: RecentLogs) -> None:
        super().__init__()
        self.sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.sink.append(
                {
                    "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
                    "level": record.levelname,
                    "name": record.name,
                    "message": record.getMessage(),
                }
            )
        except Exception:
            self.handleError(record)


def _level_number(name: str) -> int | None:
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else None


def _json_handler(service: str) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "time", "levelname": "level"},
            static_fields={"service": service},
        )
    )
    return handler


_configured = False


def setup_logging(service_name: Optional[str] = None, level: Optional[str] = None) -> None:
    """Install JSON and in-memory handlers on the root logger.

    Only the first call takes effect, so both the app factory and the CLI may
    call it. ``LOG_LEVEL`` and ``SERVICE_NAME`` fill in missing arguments.
    """
    global _configured
    if _configured:
        return

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_json_handler(service_name or os.getenv("SERVICE_NAME", "weather-station")))
    root.addHandler(_RecentLogsHandler(RECENT_LOGS))
    root.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())
    # One request line per poll cycle is noise.
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.captureWarnings(True)
    _configured = True


def get_log_buffer(limit: int = 100, min_level: Optional[str] = None) -> list[dict[str, str]]:
    return RECENT_LOGS.entries(limit=limit, min_level=min_level)


__all__ = ["RECENT_LOGS", "RecentLogs", "get_log_buffer", "setup_logging"]
