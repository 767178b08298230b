"""Single-shot HTTP GET with status enforcement and classified errors."""

import json
import logging
from typing import Any

import httpx

from ipweather.errors import (
    HttpStatusError,
    InvalidInputError,
    MalformedResponseError,
    NetworkFailureError,
)

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "ipweather/0.1.0"
DEFAULT_TIMEOUT = 30.0


class HttpJsonFetcher:
    """Issues exactly one GET per call: no retries, no redirects, no cache.

    Every failure leaves as a ResolutionError subclass; raw httpx errors never
    escape.
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.user_agent = user_agent
        self.timeout = timeout

    def fetch_json(self, url: str) -> Any:
        resp = self._get(url, accept="application/geo+json, application/json")
        try:
            return json.loads(resp.content)
        except ValueError as e:
            logger.warning("Unparseable JSON from %s: %s", url, e)
            raise MalformedResponseError(f"invalid JSON from {url}: {e}") from e

    def fetch_text(self, url: str) -> str:
        return self._get(url, accept="text/plain").text

    def _get(self, url: str, accept: str) -> httpx.Response:
        target = _parse_url(url)
        headers = {"User-Agent": self.user_agent, "Accept": accept}
        logger.debug("GET %s (timeout %.1fs)", url, self.timeout)
        try:
            resp = httpx.get(target, headers=headers, timeout=self.timeout)
        except httpx.TimeoutException as e:
            logger.warning("Timed out after %.1fs fetching %s", self.timeout, url)
            raise NetworkFailureError(f"timed out fetching {url}: {e}") from e
        except httpx.RequestError as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise NetworkFailureError(f"request to {url} failed: {e}") from e

        if resp.status_code != 200:
            logger.warning("%s returned HTTP %d", url, resp.status_code)
            raise HttpStatusError(resp.status_code, url)
        return resp


def _parse_url(url: str) -> httpx.URL:
    if not isinstance(url, str) or not url:
        raise InvalidInputError(f"not a URL: {url!r}")
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise InvalidInputError(f"malformed URL {url!r}: {e}") from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidInputError(f"not an absolute http(s) URL: {url!r}")
    return parsed
