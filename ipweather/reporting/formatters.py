"""Output formatters for pipeline runs."""

import json

from ipweather.models.pipeline import PipelineRun


def format_run_text(run: PipelineRun) -> str:
    """Plain text stage-by-stage summary for verbose output."""
    lines = [f"=== Pipeline {run.state.value} | Run {run.run_id[:8]} ==="]
    for s in run.stages:
        status = "OK" if s.ok else f"FAIL {s.error_kind}"
        lines.append(f"{s.stage.value:<12} {status} ({s.duration_seconds:.2f}s)")
    if run.ip_address is not None:
        lines.append(f"IP: {run.ip_address}")
    if run.coordinate is not None:
        lat, lon = run.coordinate.as_strings()
        lines.append(f"Location: lat={lat} lon={lon}")
    if run.forecast is not None:
        lines.append(f"Forecast: {run.forecast}")
    if run.error is not None:
        lines.append(f"Error: {run.error}")
    lines.append(f"Duration: {run.duration_seconds:.1f}s")
    return "\n".join(lines)


def format_run_json(run: PipelineRun) -> str:
    """JSON run record for programmatic consumption."""
    coordinate = None
    if run.coordinate is not None:
        coordinate = {
            "latitude": run.coordinate.latitude,
            "longitude": run.coordinate.longitude,
        }
    error = None
    if run.error is not None:
        error = {
            "stage": run.failed_stage.value if run.failed_stage else None,
            "kind": run.error.kind.value,
            "message": str(run.error),
        }
        status_code = getattr(run.error, "status_code", None)
        if status_code is not None:
            error["status_code"] = status_code

    data = {
        "run_id": run.run_id,
        "state": run.state.value,
        "ip_address": run.ip_address,
        "coordinate": coordinate,
        "forecast": run.forecast,
        "error": error,
        "stages": [
            {
                "stage": s.stage.value,
                "ok": s.ok,
                "duration_seconds": round(s.duration_seconds, 3),
                "error_kind": s.error_kind,
            }
            for s in run.stages
        ],
        "duration_seconds": round(run.duration_seconds, 3),
    }
    return json.dumps(data, indent=2)
