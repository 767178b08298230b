"""YAML config loader and dotted-key lookup."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from ipweather.config.schema import AppConfig


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate config from a YAML file.

    With no path, or an empty file, every setting takes its default.
    """
    if path is None:
        return AppConfig()
    with open(Path(path)) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return AppConfig.model_validate(raw)


def with_timeout(config: AppConfig, timeout_seconds: float) -> AppConfig:
    """Return a copy of ``config`` with the HTTP timeout overridden."""
    http = config.http.model_copy(update={"timeout_seconds": timeout_seconds})
    return AppConfig(**{**config.model_dump(), "http": http.model_dump()})


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'http.timeout_seconds'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if isinstance(obj, BaseModel) and part in type(obj).model_fields:
            obj = getattr(obj, part)
        elif isinstance(obj, dict) and part in obj:
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
