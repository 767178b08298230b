"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field, field_validator

from ipweather.ingest.forecast_resolver import NWS_BASE_URL
from ipweather.ingest.geolocation_resolver import IPAPI_BASE_URL
from ipweather.ingest.http_fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from ipweather.ingest.ip_resolver import IPIFY_URL


class EndpointsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    ip_url: str = IPIFY_URL
    geolocation_base_url: str = IPAPI_BASE_URL
    weather_base_url: str = NWS_BASE_URL

    @field_validator("ip_url", "geolocation_base_url", "weather_base_url")
    @classmethod
    def _http_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"must be an http(s) URL: {value!r}")
        return value.rstrip("/")


class HttpConfig(BaseModel):
    model_config = {"extra": "forbid"}

    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT, gt=0.0, le=300.0)
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    endpoints: EndpointsConfig = EndpointsConfig()
    http: HttpConfig = HttpConfig()
