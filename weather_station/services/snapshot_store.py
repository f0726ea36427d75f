"""Thread-safe holder for the current weather state."""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime

from weather_station.models import Snapshot, StationState


class SnapshotStore:
    """Single source of truth read by the API and written by the poller.

    The held ``StationState`` is immutable; every write builds a new value and
    swaps it in under the lock so readers never see a half-applied update.
    """

    def __init__(self, initial: StationState | None = None) -> None:
        self._state = initial or StationState()
        self._lock = threading.Lock()

    def current(self) -> StationState:
        with self._lock:
            return self._state

    def replace_snapshot(
        self,
        snapshot: Snapshot,
        *,
        fetched_at: datetime | None = None,
        changed_at: datetime | None = None,
    ) -> StationState:
        """Swap in a new snapshot, optionally stamping the fetch timestamps."""
        with self._lock:
            state = replace(self._state, snapshot=snapshot)
            if fetched_at is not None:
                state = replace(state, last_fetched_at=fetched_at)
            if changed_at is not None:
                state = replace(state, last_changed_at=changed_at)
            self._state = state
            return state

    def mark_fetched(self, fetched_at: datetime) -> StationState:
        with self._lock:
            self._state = replace(self._state, last_fetched_at=fetched_at)
            return self._state


__all__ = ["SnapshotStore"]
