"""Public IP discovery via the ipify.org service."""

import logging

from ipweather.ingest.http_fetcher import HttpJsonFetcher

logger = logging.getLogger(__name__)

IPIFY_URL = "https://api.ipify.org"


class IPAddressResolver:
    def __init__(self, fetcher: HttpJsonFetcher, url: str = IPIFY_URL):
        self.fetcher = fetcher
        self.url = url

    def resolve(self) -> str:
        """Return the caller's public IP address as reported upstream.

        The text is trimmed but not validated; GeolocationResolver checks
        its shape before using it.
        """
        ip_address = self.fetcher.fetch_text(self.url).strip()
        logger.info("Public IP address: %s", ip_address)
        return ip_address
