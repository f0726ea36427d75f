"""Application settings loaded from environment variables."""

from __future__ import annotations

from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Weather Station"
    app_version: str = "0.1.0"
    api_prefix: str = ""
    service_name: str = "weather-station"
    log_level: str = "INFO"

    latitude: float = 0.0
    longitude: float = 0.0
    app_id: str = Field(default="", repr=False)
    provider_base_url: str = "http://api.openweathermap.org/data/2.5/weather"

    poll_interval_seconds: float = 5.0
    fetch_timeout_seconds: float = 10.0
    poll_enabled: bool = True

    data_dir: Path = Path("./data")
    state_filename: str = "WeatherStationValues.json"
    # IANA zone used for sunrise/sunset; the host zone when unset
    time_zone: str | None = None

    metrics_enabled: bool = True

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_STATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("time_zone", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: object) -> object:
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        if not (-90 <= self.latitude <= 90):
            raise ValueError("latitude must be between -90 and 90.")
        if not (-180 <= self.longitude <= 180):
            raise ValueError("longitude must be between -180 and 180.")
        if self.poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be > 0.")
        if self.fetch_timeout_seconds <= 0:
            raise ValueError("fetch_timeout_seconds must be > 0.")
        if self.time_zone is not None:
            # Raises ZoneInfoNotFoundError (a KeyError) for unknown names.
            try:
                ZoneInfo(self.time_zone)
            except KeyError as exc:
                raise ValueError(f"unknown time_zone: {self.time_zone}") from exc
        return self

    @property
    def state_path(self) -> Path:
        return self.data_dir / self.state_filename

    @property
    def tz(self) -> tzinfo | None:
        return ZoneInfo(self.time_zone) if self.time_zone else None


settings = Settings()

__all__ = ["settings", "Settings"]
