"""Coordinate model with explicit axis labels.

EPSG:4326 lists latitude before longitude, but plenty of software (PostGIS,
WFS 1.0, GeoJSON) uses longitude first. A Coordinate never relies on position:
both axes are named, and any positional pair must say which order it is in.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

# api.weather.gov redirects /points requests with more precision than this
POINT_PRECISION = 4


class AxisOrder(StrEnum):
    LAT_LON = "lat,lon"
    LON_LAT = "lon,lat"


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        for name, limit in (("latitude", 90.0), ("longitude", 180.0)):
            value = float(getattr(self, name))
            if not math.isfinite(value) or abs(value) > limit:
                raise ValueError(f"{name} {value!r} outside [-{limit:g}, {limit:g}]")
            object.__setattr__(self, name, value)

    @classmethod
    def from_pair(
        cls,
        pair: Sequence[str | float],
        order: AxisOrder = AxisOrder.LAT_LON,
    ) -> "Coordinate":
        """Build a Coordinate from a positional pair in the stated order.

        Raises ValueError for a wrong length, non-numeric values or values
        out of range.
        """
        if isinstance(pair, (str, bytes)):
            raise ValueError("expected 2 coordinate values, got a single string")
        try:
            count = len(pair)
        except TypeError:
            raise ValueError(f"expected a coordinate pair, got {type(pair).__name__}") from None
        if count != 2:
            raise ValueError(f"expected 2 coordinate values, got {count}")

        first, second = (_to_float(v) for v in pair)
        if order == AxisOrder.LON_LAT:
            return cls(latitude=second, longitude=first)
        return cls(latitude=first, longitude=second)

    def as_pair(self, order: AxisOrder = AxisOrder.LAT_LON) -> tuple[float, float]:
        if order == AxisOrder.LON_LAT:
            return (self.longitude, self.latitude)
        return (self.latitude, self.longitude)

    def as_strings(self, order: AxisOrder = AxisOrder.LAT_LON) -> tuple[str, str]:
        """Canonical decimal strings, latitude first unless ``order`` says otherwise."""
        first, second = self.as_pair(order)
        return (repr(first), repr(second))

    def point_path(self) -> str:
        """The ``{lat},{lon}`` segment for the NWS points endpoint."""
        return f"{_format_axis(self.latitude)},{_format_axis(self.longitude)}"


def _to_float(value: str | float) -> float:
    # float() also takes digit grouping like "3_7.5"
    if isinstance(value, bool) or (isinstance(value, str) and "_" in value):
        raise ValueError(f"not a coordinate value: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"not a coordinate value: {value!r}") from None


def _format_axis(value: float) -> str:
    text = f"{value:.{POINT_PRECISION}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text
