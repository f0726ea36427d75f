"""Weather station data models."""

from .override import OverrideRequest
from .weather import Daylight, Snapshot, StationState, format_time_of_day

__all__ = ["Daylight", "OverrideRequest", "Snapshot", "StationState", "format_time_of_day"]
