"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from ipweather.config.schema import AppConfig
from ipweather.ingest.http_fetcher import HttpJsonFetcher
from ipweather.tests.stubs import FIXTURE_DIR, GEO_BASE, IP_URL, NWS_BASE

TEST_USER_AGENT = "ipweather-tests/0.1.0"


@pytest.fixture
def fetcher() -> HttpJsonFetcher:
    return HttpJsonFetcher(user_agent=TEST_USER_AGENT, timeout=5.0)


@pytest.fixture
def test_config() -> AppConfig:
    """Config pointing every endpoint at a test host."""
    return AppConfig(
        endpoints={
            "ip_url": IP_URL,
            "geolocation_base_url": GEO_BASE,
            "weather_base_url": NWS_BASE,
        },
        http={"timeout_seconds": 5.0, "user_agent": TEST_USER_AGENT},
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a config YAML pointing at the test hosts and return its path."""
    data = {
        "endpoints": {
            "ip_url": IP_URL,
            "geolocation_base_url": GEO_BASE,
            "weather_base_url": NWS_BASE,
        },
        "http": {"timeout_seconds": 5.0},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURE_DIR
