"""IP address geolocation via the ipapi.co service."""

import logging
import re
from typing import Any

from ipweather.errors import EmptyResultError, InvalidInputError, MalformedResponseError
from ipweather.ingest.http_fetcher import HttpJsonFetcher
from ipweather.models.coordinate import Coordinate

logger = logging.getLogger(__name__)

IPAPI_BASE_URL = "https://ipapi.co"

_OCTET = r"(?:[01]?[0-9][0-9]?|2[0-4][0-9]|25[0-5])"
_IPV4_RE = re.compile(rf"{_OCTET}\.{_OCTET}\.{_OCTET}\.{_OCTET}")


def is_valid_ipv4(text: str) -> bool:
    """Rough dotted-quad check.

    Shape only: loopback, private and reserved ranges all pass.
    """
    return isinstance(text, str) and _IPV4_RE.fullmatch(text) is not None


class GeolocationResolver:
    def __init__(self, fetcher: HttpJsonFetcher, base_url: str = IPAPI_BASE_URL):
        self.fetcher = fetcher
        self.base_url = base_url.rstrip("/")

    def resolve(self, ip_address: str) -> Coordinate:
        """Return the approximate location of ``ip_address``, latitude first."""
        if not is_valid_ipv4(ip_address):
            raise InvalidInputError(f"IP address is not valid IPv4: {ip_address!r}")

        url = f"{self.base_url}/{ip_address}/json/"
        data = self.fetcher.fetch_json(url)
        if not isinstance(data, dict):
            raise MalformedResponseError(f"expected a JSON object from {url}")

        # ipapi answers 200 with an error envelope for reserved IPs and rate limits
        if data.get("error") is True:
            reason = data.get("reason") or data.get("message") or "no location data"
            logger.warning("Geolocation for %s unavailable: %s", ip_address, reason)
            raise EmptyResultError(f"no geolocation for {ip_address}: {reason}")

        latitude = _number(data, "latitude")
        longitude = _number(data, "longitude")
        try:
            coordinate = Coordinate(latitude=latitude, longitude=longitude)
        except ValueError as e:
            raise MalformedResponseError(f"geolocation out of range: {e}") from e

        logger.info(
            "Geolocated %s to lat=%s lon=%s",
            ip_address, coordinate.latitude, coordinate.longitude,
        )
        return coordinate


def _number(data: dict[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None or isinstance(value, bool):
        raise MalformedResponseError(f"geolocation response missing numeric {key!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise MalformedResponseError(
            f"geolocation {key!r} is not numeric: {value!r}"
        ) from None
