"""Forecast lookup against the National Weather Service API.

Two requests per forecast: ``/points/{lat},{lon}`` maps a coordinate to its
forecast office grid and links the forecast document, which is fetched next.
See https://www.weather.gov/documentation/services-web-api
"""

import logging
from collections.abc import Sequence
from typing import Any

from ipweather.errors import (
    EmptyResultError,
    InvalidInputError,
    MalformedResponseError,
)
from ipweather.ingest.http_fetcher import HttpJsonFetcher
from ipweather.models.coordinate import AxisOrder, Coordinate
from ipweather.models.forecast import ForecastPeriod, PointMetadata

logger = logging.getLogger(__name__)

NWS_BASE_URL = "https://api.weather.gov"


class ForecastResolver:
    def __init__(self, fetcher: HttpJsonFetcher, base_url: str = NWS_BASE_URL):
        self.fetcher = fetcher
        self.base_url = base_url.rstrip("/")

    def resolve(
        self,
        coordinates: Coordinate | Sequence[str | float],
        order: AxisOrder = AxisOrder.LAT_LON,
    ) -> str:
        """Return the detailed text of the first forecast period.

        ``coordinates`` is a Coordinate, or a 2-element positional pair read
        in ``order``. Bad input raises InvalidInputError before any request.
        """
        coordinate = _coerce(coordinates, order)
        point = self.lookup_point(coordinate)
        periods = self.fetch_periods(point.forecast_url)
        if not periods:
            raise EmptyResultError("no forecast information available")

        first = periods[0]
        if first.detailed_forecast is None:
            raise MalformedResponseError("first forecast period has no detailedForecast")
        place = ", ".join(p for p in (point.city, point.state) if isinstance(p, str) and p)
        logger.info(
            "Forecast for %s near %s, grid %s/%s,%s (%s): %s",
            coordinate.point_path(), place or "unknown place",
            point.grid_id, point.grid_x, point.grid_y, first.name, first.short_forecast,
        )
        return first.detailed_forecast

    def lookup_point(self, coordinate: Coordinate) -> PointMetadata:
        url = f"{self.base_url}/points/{coordinate.point_path()}"
        properties = _properties(self.fetcher.fetch_json(url), url)

        forecast_url = properties.get("forecast")
        if not isinstance(forecast_url, str) or not forecast_url:
            raise MalformedResponseError(f"point lookup {url} has no properties.forecast")

        location = properties.get("relativeLocation")
        location_props = location.get("properties") if isinstance(location, dict) else None
        if not isinstance(location_props, dict):
            location_props = {}
        return PointMetadata(
            forecast_url=forecast_url,
            grid_id=properties.get("gridId"),
            grid_x=properties.get("gridX"),
            grid_y=properties.get("gridY"),
            city=location_props.get("city"),
            state=location_props.get("state"),
        )

    def fetch_periods(self, forecast_url: str) -> list[ForecastPeriod]:
        """Fetch a forecast document and parse its periods in upstream order."""
        try:
            data = self.fetcher.fetch_json(forecast_url)
        except InvalidInputError as e:
            # The URL came from the point lookup, so a bad one is an upstream fault
            raise MalformedResponseError(f"point lookup linked a bad forecast URL: {e}") from e

        raw_periods = _properties(data, forecast_url).get("periods")
        if not isinstance(raw_periods, list):
            raise MalformedResponseError(f"forecast {forecast_url} has no properties.periods array")
        return [_parse_period(p, i) for i, p in enumerate(raw_periods)]


def _coerce(coordinates: Coordinate | Sequence[str | float], order: AxisOrder) -> Coordinate:
    if isinstance(coordinates, Coordinate):
        return coordinates
    try:
        return Coordinate.from_pair(coordinates, AxisOrder(order))
    except ValueError as e:
        raise InvalidInputError(str(e)) from e


def _properties(data: Any, url: str) -> dict[str, Any]:
    properties = data.get("properties") if isinstance(data, dict) else None
    if not isinstance(properties, dict):
        raise MalformedResponseError(f"{url} has no properties object")
    return properties


def _parse_period(raw: Any, index: int) -> ForecastPeriod:
    if not isinstance(raw, dict):
        raise MalformedResponseError(f"forecast period {index} is not an object")
    detailed = raw.get("detailedForecast")
    number = raw.get("number")
    temperature = raw.get("temperature")
    return ForecastPeriod(
        number=number if isinstance(number, int) else index + 1,
        name=raw.get("name", ""),
        start_time=raw.get("startTime", ""),
        end_time=raw.get("endTime", ""),
        is_daytime=bool(raw.get("isDaytime", False)),
        temperature=temperature if isinstance(temperature, int) else None,
        temperature_unit=raw.get("temperatureUnit", "F"),
        short_forecast=raw.get("shortForecast", ""),
        detailed_forecast=detailed if isinstance(detailed, str) else None,
    )
