"""Tests for the payload file and startup restore."""

from __future__ import annotations

import logging
from datetime import time
from pathlib import Path

import pytest

from tests.conftest import SAMPLE_PAYLOAD, make_payload
from weather_station.models import Snapshot
from weather_station.services.persistence import PayloadFile, PersistenceWriteError


def test_load_missing_file_returns_none(tmp_path: Path) -> None:
    assert PayloadFile(tmp_path / "absent.json").load() is None


def test_save_creates_directory_and_overwrites(tmp_path: Path) -> None:
    payload_file = PayloadFile(tmp_path / "nested" / "state.json")

    payload_file.save("first")
    payload_file.save("second")

    assert payload_file.load() == "second"
    assert sorted(p.name for p in payload_file.path.parent.iterdir()) == ["state.json"]


def test_save_keeps_line_endings_verbatim(tmp_path: Path) -> None:
    payload_file = PayloadFile(tmp_path / "state.json")
    raw = '{\r\n  "main": {"temp": 1}\n}\r'

    payload_file.save(raw)

    assert payload_file.path.read_bytes() == raw.encode("utf-8")
    assert payload_file.load() == raw


def test_save_failure_raises_persistence_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(PersistenceWriteError):
        PayloadFile(blocker / "state.json").save(SAMPLE_PAYLOAD)


def test_delete_is_idempotent(tmp_path: Path) -> None:
    payload_file = PayloadFile(tmp_path / "state.json")
    payload_file.save(SAMPLE_PAYLOAD)

    payload_file.delete()
    payload_file.delete()

    assert not payload_file.path.exists()


def test_station_restores_persisted_payload(make_station, state_path: Path) -> None:
    PayloadFile(state_path).save(make_payload(temp=7.25, humidity=91, situation=701))

    station = make_station()
    state = station.state()

    assert state.snapshot.situation_code == 701
    assert state.snapshot.temperature_celsius == 7.25
    assert state.snapshot.humidity_percent == 91
    assert state.snapshot.sunrise == time(12, 26, 40)
    assert state.last_fetched_at is None
    assert state.last_changed_at is None
    # The first live fetch is still compared against nothing.
    assert station.poller.last_raw_payload is None


def test_station_without_persisted_payload_uses_defaults(make_station, state_path: Path) -> None:
    station = make_station()

    assert station.state().snapshot == Snapshot()
    assert not state_path.exists()


@pytest.mark.parametrize("content", ["", "{not json", '{"sys":{},"main":{},"weather":[]}'])
def test_corrupt_persisted_payload_is_deleted(
    make_station, state_path: Path, caplog, content: str
) -> None:
    state_path.parent.mkdir(parents=True)
    state_path.write_text(content, encoding="utf-8")

    for _ in range(2):
        with caplog.at_level(logging.WARNING):
            station = make_station()
        assert station.state().snapshot == Snapshot()
        assert not state_path.exists()

    assert caplog.text.count("Unable to load persisted weather station values") == 1
    assert station.notifications.recent() == []


def test_corrupt_persisted_payload_records_notification(make_station, state_path: Path) -> None:
    state_path.parent.mkdir(parents=True)
    state_path.write_text("garbage", encoding="utf-8")

    station = make_station()
    notes = station.notifications.recent()

    assert len(notes) == 1
    assert notes[0].level == "warning"
    assert notes[0].message == "Unable to load persisted weather station values"
