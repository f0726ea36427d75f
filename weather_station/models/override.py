"""Request body accepted by the manual override endpoint."""

from __future__ import annotations

from datetime import time
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .weather import Snapshot


class OverrideRequest(BaseModel):
    situation: int
    temperature: float = Field(allow_inf_nan=False)
    humidity: float = Field(allow_inf_nan=False)
    sunrise: time
    sunset: time

    @field_validator("sunrise", "sunset", mode="before")
    @classmethod
    def _require_time_string(cls, value: Any) -> Any:
        # pydantic would otherwise read a bare number as seconds since midnight
        if isinstance(value, (int, float)):
            raise ValueError("expected a time of day string such as '06:30:00'")
        return value

    def to_snapshot(self) -> Snapshot:
        return Snapshot(
            situation_code=self.situation,
            temperature_celsius=self.temperature,
            humidity_percent=self.humidity,
            sunrise=self.sunrise.replace(microsecond=0, tzinfo=None),
            sunset=self.sunset.replace(microsecond=0, tzinfo=None),
        )


__all__ = ["OverrideRequest"]
