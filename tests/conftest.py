"""Shared fixtures for weather station tests."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from weather_station.services.persistence import PayloadFile
from weather_station.services.station import WeatherStation

SAMPLE_PAYLOAD = (
    '{"sys":{"sunrise":1600000000,"sunset":1600040000},'
    '"main":{"temp":18.5,"humidity":60},"weather":[{"id":800}]}'
)


def make_payload(
    temp: float = 18.5,
    humidity: float = 60,
    situation: int = 800,
    sunrise: int = 1600000000,
    sunset: int = 1600040000,
) -> str:
    return json.dumps(
        {
            "sys": {"sunrise": sunrise, "sunset": sunset},
            "main": {"temp": temp, "humidity": humidity},
            "weather": [{"id": situation, "main": "Clear"}],
        }
    )


class FakeFetcher:
    """Replays queued responses; an Exception entry is raised instead of returned."""

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.calls = 0

    async def fetch(self) -> str:
        self.calls += 1
        if not self.responses:
            raise AssertionError("FakeFetcher ran out of responses")
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "WeatherStationValues.json"


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def make_station(state_path: Path, clock: StepClock):
    def _make(*responses: Any, **kwargs: Any) -> WeatherStation:
        kwargs.setdefault("tz", timezone.utc)
        kwargs.setdefault("clock", clock)
        return WeatherStation(
            "http://provider.test/weather?lat=1&lon=2&APPID=key&units=metric",
            PayloadFile(state_path),
            fetcher=FakeFetcher(*responses),
            interval_seconds=0,
            **kwargs,
        )

    return _make
