"""NWS point and forecast models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PointMetadata:
    forecast_url: str
    grid_id: str | None = None
    grid_x: int | None = None
    grid_y: int | None = None
    city: str | None = None
    state: str | None = None


@dataclass(frozen=True)
class ForecastPeriod:
    number: int
    name: str
    start_time: str
    end_time: str
    is_daytime: bool
    temperature: int | None
    temperature_unit: str
    short_forecast: str
    detailed_forecast: str | None
