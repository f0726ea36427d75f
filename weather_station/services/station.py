"""Weather station facade wiring the fetcher, poller, store and persistence."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from datetime import datetime, tzinfo
from typing import Any, Callable

from prometheus_client import Counter

from weather_station.core.config import Settings
from weather_station.models import Daylight, OverrideRequest, StationState
from weather_station.services.fetcher import OpenWeatherMapFetcher, build_source_url
from weather_station.services.notifications import NotificationLog
from weather_station.services.parser import MalformedPayloadError, parse_payload
from weather_station.services.persistence import PayloadFile
from weather_station.services.poller import Fetcher, WeatherPoller, local_now
from weather_station.services.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)

OVERRIDES_TOTAL = Counter(
    "weather_station_overrides_total",
    "Manual weather overrides accepted through the API.",
)


class WeatherStation:
    """Current weather for the configured site, kept fresh in the background.

    Construction restores the last persisted payload, if any. ``start`` then
    launches the poll loop as an asyncio task on the running event loop.
    """

    def __init__(
        self,
        source_url: str,
        payload_file: PayloadFile,
        fetcher: Fetcher | None = None,
        interval_seconds: float = 5.0,
        fetch_timeout: float = 10.0,
        tz: tzinfo | None = None,
        notifications: NotificationLog | None = None,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.source_url = source_url
        self.payload_file = payload_file
        self.tz = tz
        self.clock = clock
        self.notifications = notifications or NotificationLog()
        self.store = SnapshotStore()
        self.poller = WeatherPoller(
            fetcher or OpenWeatherMapFetcher(source_url, timeout=fetch_timeout),
            self.store,
            payload_file,
            interval_seconds=interval_seconds,
            tz=tz,
            notifications=self.notifications,
            clock=clock,
        )
        self._task: asyncio.Task[None] | None = None
        self._load_persisted()

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> WeatherStation:
        source_url = build_source_url(
            settings.latitude,
            settings.longitude,
            settings.app_id,
            base_url=settings.provider_base_url,
        )
        return cls(
            source_url,
            PayloadFile(settings.state_path),
            interval_seconds=settings.poll_interval_seconds,
            fetch_timeout=settings.fetch_timeout_seconds,
            tz=settings.tz,
            **kwargs,
        )

    def _load_persisted(self) -> None:
        try:
            raw = self.payload_file.load()
        except OSError as exc:
            # Left in place: an unreadable file is not known to be corrupt.
            self._warn("Unable to read persisted weather station values", exc)
            return
        if raw is None:
            return

        try:
            snapshot = parse_payload(raw, tz=self.tz)
        except MalformedPayloadError as exc:
            self._warn("Unable to load persisted weather station values", exc)
            try:
                self.payload_file.delete()
            except OSError as delete_exc:
                self._warn("Unable to delete persisted weather station values", delete_exc)
            return

        self.store.replace_snapshot(snapshot)
        logger.info("Restored weather station values from %s", self.payload_file.path)

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(
            self.poller.run_forever(), name="weather-station-poller"
        )

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    def state(self) -> StationState:
        return self.store.current()

    def status(self) -> dict[str, Any]:
        return self.store.current().to_dict(self.source_url)

    def override(self, request: OverrideRequest) -> StationState:
        """Replace the snapshot with caller-supplied values."""
        state = self.store.replace_snapshot(request.to_snapshot(), fetched_at=self.clock())
        OVERRIDES_TOTAL.inc()
        logger.info(
            "Weather overridden manually (situation=%s, temperature=%s, humidity=%s)",
            request.situation,
            request.temperature,
            request.humidity,
        )
        return state

    def daylight(self, now: datetime | None = None) -> Daylight:
        moment = now or self.clock()
        if self.tz is not None:
            moment = moment.astimezone(self.tz)
        snapshot = self.store.current().snapshot
        return Daylight(
            now=moment.time().replace(microsecond=0, tzinfo=None),
            sunrise=snapshot.sunrise,
            sunset=snapshot.sunset,
        )

    def _warn(self, message: str, exc: Exception) -> None:
        logger.warning("%s: %s", message, exc)
        self.notifications.add("warning", message, {"error": str(exc)})


__all__ = ["WeatherStation"]
