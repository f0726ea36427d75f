"""Tests for the recent-log buffer behind ``/logs``."""

from __future__ import annotations

import logging

from weather_station.core.logging_config import RecentLogs, _RecentLogsHandler


def _logger(sink: RecentLogs) -> logging.Logger:
    logger = logging.getLogger("weather_station.tests.recent")
    logger.handlers = [_RecentLogsHandler(sink)]
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    return logger


def test_handler_records_newest_first() -> None:
    sink = RecentLogs()
    logger = _logger(sink)

    logger.info("cycle %d", 1)
    logger.warning("cycle %d", 2)

    entries = sink.entries()
    assert [entry["message"] for entry in entries] == ["cycle 2", "cycle 1"]
    assert entries[0]["level"] == "WARNING"
    assert entries[0]["name"] == "weather_station.tests.recent"
    assert entries[0]["time"].endswith("+00:00")


def test_entries_respect_capacity_limit_and_level() -> None:
    sink = RecentLogs(maxlen=3)
    logger = _logger(sink)
    for level in (logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR):
        logger.log(level, logging.getLevelName(level))

    assert [entry["message"] for entry in sink.entries()] == ["ERROR", "WARNING", "INFO"]
    assert [entry["message"] for entry in sink.entries(limit=1)] == ["ERROR"]
    assert [entry["message"] for entry in sink.entries(min_level="warning")] == ["ERROR", "WARNING"]
    # An unknown level name does not filter anything out.
    assert len(sink.entries(min_level="loud")) == 3


def test_clear_empties_the_buffer() -> None:
    sink = RecentLogs()
    sink.append({"time": "t", "level": "INFO", "name": "n", "message": "m"})

    sink.clear()

    assert sink.entries() == []
