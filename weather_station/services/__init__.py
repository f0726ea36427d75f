"""Service-layer components of the weather station."""

from .fetcher import NetworkError, OpenWeatherMapFetcher, build_source_url
from .notifications import Notification, NotificationLog
from .parser import MalformedPayloadError, epoch_to_time_of_day, parse_payload
from .persistence import PayloadFile, PersistenceWriteError
from .poller import CycleOutcome, WeatherPoller
from .snapshot_store import SnapshotStore
from .station import WeatherStation

__all__ = [
    "CycleOutcome",
    "MalformedPayloadError",
    "NetworkError",
    "Notification",
    "NotificationLog",
    "OpenWeatherMapFetcher",
    "PayloadFile",
    "PersistenceWriteError",
    "SnapshotStore",
    "WeatherPoller",
    "WeatherStation",
    "build_source_url",
    "epoch_to_time_of_day",
    "parse_payload",
]
