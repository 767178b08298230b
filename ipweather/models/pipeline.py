"""Pipeline stage and run-record models."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from ipweather.models.coordinate import Coordinate

if TYPE_CHECKING:
    from ipweather.errors import ResolutionError


class Stage(StrEnum):
    IP = "ip"
    GEOLOCATION = "geolocation"
    FORECAST = "forecast"


class PipelineState(StrEnum):
    START = "start"
    IP_RESOLVED = "ip_resolved"
    GEOLOCATION_RESOLVED = "geolocation_resolved"
    FORECAST_RESOLVED = "forecast_resolved"
    FAILED = "failed"


@dataclass(frozen=True)
class StageRecord:
    stage: Stage
    ok: bool
    duration_seconds: float
    error_kind: str | None = None
    error_message: str | None = None


@dataclass
class PipelineRun:
    run_id: str
    state: PipelineState = PipelineState.START
    stages: list[StageRecord] = field(default_factory=list)
    ip_address: str | None = None
    coordinate: Coordinate | None = None
    forecast: str | None = None
    failed_stage: Stage | None = None
    error: "ResolutionError | None" = None
    duration_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.state == PipelineState.FORECAST_RESOLVED
