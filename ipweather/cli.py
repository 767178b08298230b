"""CLI entry point: run the whole pipeline or any single resolver."""

import argparse
import logging
import sys

import yaml
from pydantic import BaseModel, ValidationError

from ipweather.config.loader import get_config_value, load_config, with_timeout
from ipweather.config.schema import AppConfig
from ipweather.errors import ResolutionError
from ipweather.ingest.forecast_resolver import ForecastResolver
from ipweather.ingest.geolocation_resolver import GeolocationResolver
from ipweather.ingest.http_fetcher import HttpJsonFetcher
from ipweather.ingest.ip_resolver import IPAddressResolver
from ipweather.models.coordinate import AxisOrder
from ipweather.pipeline.weather_pipeline import WeatherPipeline
from ipweather.reporting.formatters import format_run_json, format_run_text

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="ipweather",
        description="Forecast for wherever this machine's public IP appears to be",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument(
        "--timeout", type=float, default=None,
        help="Per-request timeout in seconds (overrides config)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging to stderr"
    )

    sub = parser.add_subparsers(dest="command")

    # run
    run_p = sub.add_parser("run", help="IP -> geolocation -> forecast")
    run_p.add_argument("--json", action="store_true", help="Print the run record as JSON")

    # single stages
    sub.add_parser("ip", help="Print the public IP address")
    geo_p = sub.add_parser("geolocate", help="Print 'latitude longitude' for an IPv4 address")
    geo_p.add_argument("ip_address")
    fc_p = sub.add_parser("forecast", help="Print the forecast for a coordinate pair")
    fc_p.add_argument("first", help="Latitude, unless --order lon,lat")
    fc_p.add_argument("second", help="Longitude, unless --order lon,lat")
    fc_p.add_argument(
        "--order", choices=[o.value for o in AxisOrder], default=AxisOrder.LAT_LON.value,
        help="Axis order of the two values (default: lat,lon)",
    )

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    show_p = config_sub.add_parser("show", help="Display effective config")
    show_p.add_argument("key", nargs="?", help="Dotted key, e.g. http.timeout_seconds")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args.config)
        if args.timeout is not None:
            config = with_timeout(config, args.timeout)
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    try:
        if args.command == "run":
            return _cmd_run(config, args)
        elif args.command == "ip":
            return _cmd_ip(config)
        elif args.command == "geolocate":
            return _cmd_geolocate(config, args)
        elif args.command == "forecast":
            return _cmd_forecast(config, args)
        elif args.command == "config":
            return _cmd_config(config, args)
        else:
            parser.print_help()
            return 1
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 130


def _fetcher(config: AppConfig) -> HttpJsonFetcher:
    return HttpJsonFetcher(
        user_agent=config.http.user_agent,
        timeout=config.http.timeout_seconds,
    )


def _cmd_run(config: AppConfig, args) -> int:
    run = WeatherPipeline.from_config(config).execute()
    logger.debug("\n%s", format_run_text(run))
    if args.json:
        print(format_run_json(run))
    elif run.succeeded:
        print(run.forecast)
    if run.succeeded:
        return 0
    assert run.error is not None and run.failed_stage is not None
    print(
        f"Error in {run.failed_stage.value} stage ({run.error.kind.value}): {run.error}",
        file=sys.stderr,
    )
    return 1


def _cmd_ip(config: AppConfig) -> int:
    resolver = IPAddressResolver(_fetcher(config), config.endpoints.ip_url)
    try:
        ip_address = resolver.resolve()
    except ResolutionError as e:
        return _report("retrieving IP address", e)
    print(f"Public IP Address: {ip_address}")
    return 0


def _cmd_geolocate(config: AppConfig, args) -> int:
    resolver = GeolocationResolver(_fetcher(config), config.endpoints.geolocation_base_url)
    try:
        coordinate = resolver.resolve(args.ip_address)
    except ResolutionError as e:
        return _report("retrieving approximate geolocation", e)
    print(" ".join(coordinate.as_strings()))
    return 0


def _cmd_forecast(config: AppConfig, args) -> int:
    resolver = ForecastResolver(_fetcher(config), config.endpoints.weather_base_url)
    try:
        forecast = resolver.resolve([args.first, args.second], AxisOrder(args.order))
    except ResolutionError as e:
        return _report("retrieving forecast", e)
    print(forecast)
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        if args.key is None:
            print(config.model_dump_json(indent=2))
            return 0
        try:
            value = get_config_value(config, args.key)
        except KeyError as e:
            print(e.args[0], file=sys.stderr)
            return 1
        if isinstance(value, BaseModel):
            print(value.model_dump_json(indent=2))
        else:
            print(value)
        return 0
    print("Use: config show [KEY]", file=sys.stderr)
    return 1


def _report(action: str, error: ResolutionError) -> int:
    print(f"Error {action} ({error.kind.value}): {error}", file=sys.stderr)
    return 1
