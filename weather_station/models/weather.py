"""Weather state value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from typing import Any

_MIDNIGHT = time(0, 0, 0)


@dataclass(frozen=True)
class Snapshot:
    """Current weather conditions as reported by the provider or an override."""

    situation_code: int = 0
    temperature_celsius: float = 0.0
    humidity_percent: float = 0.0
    sunrise: time = _MIDNIGHT
    sunset: time = _MIDNIGHT


@dataclass(frozen=True)
class StationState:
    """Snapshot plus fetch timestamps, swapped as one value by the store."""

    snapshot: Snapshot = field(default_factory=Snapshot)
    last_fetched_at: datetime | None = None
    last_changed_at: datetime | None = None

    def to_dict(self, source_url: str) -> dict[str, Any]:
        snapshot = self.snapshot
        return {
            "uri": source_url,
            "situation": snapshot.situation_code,
            "temperature": snapshot.temperature_celsius,
            "humidity": snapshot.humidity_percent,
            "lastFetched": _isoformat(self.last_fetched_at),
            "lastFetchedDifferentResponse": _isoformat(self.last_changed_at),
            "sunrise": format_time_of_day(snapshot.sunrise),
            "sunset": format_time_of_day(snapshot.sunset),
        }


@dataclass(frozen=True)
class Daylight:
    """Position of a time of day relative to sunrise and sunset."""

    now: time
    sunrise: time
    sunset: time

    @property
    def is_day(self) -> bool:
        if self.sunrise <= self.sunset:
            return self.sunrise <= self.now < self.sunset
        # Sunset falls after midnight in the configured zone.
        return self.now >= self.sunrise or self.now < self.sunset

    @property
    def is_night(self) -> bool:
        return not self.is_day

    def time_until_sunrise(self) -> timedelta:
        return _until(self.now, self.sunrise)

    def time_until_sunset(self) -> timedelta:
        return _until(self.now, self.sunset)

    def to_dict(self) -> dict[str, Any]:
        return {
            "now": format_time_of_day(self.now),
            "sunrise": format_time_of_day(self.sunrise),
            "sunset": format_time_of_day(self.sunset),
            "isDay": self.is_day,
            "untilSunrise": int(self.time_until_sunrise().total_seconds()),
            "untilSunset": int(self.time_until_sunset().total_seconds()),
        }


def format_time_of_day(value: time) -> str:
    return value.isoformat(timespec="seconds")


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _seconds(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second


def _until(start: time, target: time) -> timedelta:
    delta = _seconds(target) - _seconds(start)
    if delta < 0:
        delta += 24 * 3600
    return timedelta(seconds=delta)


__all__ = ["Snapshot", "StationState", "Daylight", "format_time_of_day"]
