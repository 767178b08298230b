"""Weather pipeline: public IP -> geolocation -> forecast."""

import logging
import time
import uuid
from collections.abc import Callable
from typing import TypeVar

from ipweather.config.schema import AppConfig
from ipweather.errors import PipelineFailure, ResolutionError
from ipweather.ingest.forecast_resolver import ForecastResolver
from ipweather.ingest.geolocation_resolver import GeolocationResolver
from ipweather.ingest.http_fetcher import HttpJsonFetcher
from ipweather.ingest.ip_resolver import IPAddressResolver
from ipweather.models.pipeline import PipelineRun, PipelineState, Stage, StageRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WeatherPipeline:
    """Runs the three resolvers in order, once each.

    Each stage's output is the only input of the next; the first failure ends
    the run and later stages are never called.
    """

    def __init__(
        self,
        ip_resolver: IPAddressResolver,
        geolocation_resolver: GeolocationResolver,
        forecast_resolver: ForecastResolver,
    ):
        self.ip_resolver = ip_resolver
        self.geolocation_resolver = geolocation_resolver
        self.forecast_resolver = forecast_resolver

    @classmethod
    def from_config(cls, config: AppConfig) -> "WeatherPipeline":
        fetcher = HttpJsonFetcher(
            user_agent=config.http.user_agent,
            timeout=config.http.timeout_seconds,
        )
        return cls(
            IPAddressResolver(fetcher, config.endpoints.ip_url),
            GeolocationResolver(fetcher, config.endpoints.geolocation_base_url),
            ForecastResolver(fetcher, config.endpoints.weather_base_url),
        )

    def run(self) -> str:
        """Return the forecast text or raise PipelineFailure."""
        record = self.execute()
        if not record.succeeded:
            assert record.failed_stage is not None and record.error is not None
            raise PipelineFailure(record.failed_stage, record.error) from record.error
        assert record.forecast is not None
        return record.forecast

    def execute(self) -> PipelineRun:
        """Run the stages and return the full run record; never raises ResolutionError."""
        start_time = time.monotonic()
        record = PipelineRun(run_id=str(uuid.uuid4()))
        logger.info("Pipeline run %s starting", record.run_id[:8])

        try:
            ip_address = self._step(
                record, Stage.IP, PipelineState.IP_RESOLVED,
                self.ip_resolver.resolve,
            )
            record.ip_address = ip_address

            coordinate = self._step(
                record, Stage.GEOLOCATION, PipelineState.GEOLOCATION_RESOLVED,
                lambda: self.geolocation_resolver.resolve(ip_address),
            )
            record.coordinate = coordinate

            # Geolocation output is (latitude, longitude), the order /points expects
            record.forecast = self._step(
                record, Stage.FORECAST, PipelineState.FORECAST_RESOLVED,
                lambda: self.forecast_resolver.resolve(coordinate),
            )
        except ResolutionError as e:
            record.state = PipelineState.FAILED
            record.error = e
            logger.warning(
                "Pipeline run %s failed at %s stage (%s): %s",
                record.run_id[:8], record.failed_stage, e.kind.value, e,
            )

        record.duration_seconds = time.monotonic() - start_time
        return record

    def _step(
        self,
        record: PipelineRun,
        stage: Stage,
        reached: PipelineState,
        resolve: Callable[[], T],
    ) -> T:
        stage_start = time.monotonic()
        try:
            value = resolve()
        except ResolutionError as e:
            record.stages.append(
                StageRecord(stage, False, time.monotonic() - stage_start, e.kind.value, str(e))
            )
            record.failed_stage = stage
            raise

        record.stages.append(StageRecord(stage, True, time.monotonic() - stage_start))
        record.state = reached
        logger.info("Pipeline run %s -> %s", record.run_id[:8], reached.value)
        return value
