"""Background loop that keeps the snapshot store in sync with the provider."""

from __future__ import annotations

import asyncio
import enum
import logging
import time
from datetime import datetime, tzinfo
from typing import Awaitable, Callable, Protocol

from prometheus_client import Counter, Histogram

from weather_station.services.fetcher import NetworkError
from weather_station.services.notifications import NotificationLog
from weather_station.services.parser import MalformedPayloadError, parse_payload
from weather_station.services.persistence import PayloadFile, PersistenceWriteError
from weather_station.services.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)

POLL_CYCLES = Counter(
    "weather_station_cycles_total",
    "Poll cycles grouped by outcome.",
    ["outcome"],
)
FETCH_LATENCY_SECONDS = Histogram(
    "weather_station_fetch_seconds",
    "Latency of provider requests that returned a body.",
)


class Fetcher(Protocol):
    def fetch(self) -> Awaitable[str]: ...


class CycleOutcome(str, enum.Enum):
    FAILED = "failed"
    UNCHANGED = "unchanged"
    CHANGED = "changed"
    MALFORMED = "malformed"


def local_now() -> datetime:
    return datetime.now().astimezone()


class WeatherPoller:
    """Fetch, diff, parse and publish on a fixed cadence, forever."""

    def __init__(
        self,
        fetcher: Fetcher,
        store: SnapshotStore,
        payload_file: PayloadFile,
        interval_seconds: float = 5.0,
        tz: tzinfo | None = None,
        notifications: NotificationLog | None = None,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.fetcher = fetcher
        self.store = store
        self.payload_file = payload_file
        self.interval_seconds = interval_seconds
        self.tz = tz
        self.notifications = notifications
        self.clock = clock
        self.last_raw_payload: str | None = None

    async def run_forever(self) -> None:
        logger.info("Starting weather poll loop (interval=%ss)", self.interval_seconds)
        while True:
            try:
                await self.run_cycle()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Weather poll cycle failed")
                POLL_CYCLES.labels(outcome=CycleOutcome.FAILED.value).inc()
            await asyncio.sleep(self.interval_seconds)

    async def run_cycle(self) -> CycleOutcome:
        """Execute a single fetch + diff + publish cycle."""

        started = time.perf_counter()
        try:
            raw = await self.fetcher.fetch()
        except NetworkError as exc:
            self._warn("Could not fetch weather information", exc)
            return self._record(CycleOutcome.FAILED)
        FETCH_LATENCY_SECONDS.observe(time.perf_counter() - started)
        now = self.clock()

        if raw == self.last_raw_payload:
            self.store.mark_fetched(now)
            return self._record(CycleOutcome.UNCHANGED)

        self.last_raw_payload = raw
        try:
            snapshot = parse_payload(raw, tz=self.tz)
        except MalformedPayloadError as exc:
            self._warn("Received malformed weather payload", exc)
            self.store.mark_fetched(now)
            return self._record(CycleOutcome.MALFORMED)

        try:
            self.payload_file.save(raw)
        except PersistenceWriteError as exc:
            self._warn("Could not persist weather payload", exc)

        self.store.replace_snapshot(snapshot, fetched_at=now, changed_at=now)
        logger.info(
            "Weather updated (situation=%s, temperature=%s, humidity=%s)",
            snapshot.situation_code,
            snapshot.temperature_celsius,
            snapshot.humidity_percent,
        )
        return self._record(CycleOutcome.CHANGED)

    def _record(self, outcome: CycleOutcome) -> CycleOutcome:
        POLL_CYCLES.labels(outcome=outcome.value).inc()
        return outcome

    def _warn(self, message: str, exc: Exception) -> None:
        logger.warning("%s: %s", message, exc)
        if self.notifications is not None:
            self.notifications.add("warning", message, {"error": str(exc)})


__all__ = ["WeatherPoller", "CycleOutcome", "Fetcher", "local_now"]
