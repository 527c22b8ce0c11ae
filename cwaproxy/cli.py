"""CLI entry point for the CWA weather proxy."""

import argparse
import asyncio
import json
import logging

import httpx

from cwaproxy.config import cities
from cwaproxy.config.loader import get_config_value, load_config, redacted_dump
from cwaproxy.models.errors import GENERIC_ERROR, ProxyError
from cwaproxy.pipeline.weather_service import WeatherService

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="cwaproxy",
        description="Caching proxy for the CWA 36-hour weather forecast",
    )
    parser.add_argument("--config", default=None, help="Optional config YAML path")

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default=None, help="Bind address")
    serve_p.add_argument("--port", type=int, default=None, help="Listen port")

    # cities
    sub.add_parser("cities", help="List supported city codes")

    # weather
    weather_p = sub.add_parser("weather", help="Fetch one city's forecast")
    weather_p.add_argument("city", help="City code, e.g. taipei")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display effective config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. server.port")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "cities":
        return _cmd_cities()

    config = load_config(args.config)

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "weather":
        return _cmd_weather(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_serve(config, args) -> int:
    import uvicorn

    from cwaproxy.app import create_app

    server = config.server.model_copy(
        update={
            k: v for k, v in (("host", args.host), ("port", args.port)) if v is not None
        }
    )
    config = config.model_copy(update={"server": server})
    uvicorn.run(create_app(config), host=server.host, port=server.port)
    return 0


def _cmd_cities() -> int:
    for city in cities.list_cities():
        print(f"{city['code']:<14} {city['name']}")
    return 0


def _cmd_weather(config, args) -> int:
    service = WeatherService(config)
    try:
        result = asyncio.run(service.get_city_weather(args.city))
    except ProxyError as e:
        print(json.dumps(e.to_response(), ensure_ascii=False, indent=2))
        return 1
    except httpx.RequestError:
        logger.exception("Request to CWA failed")
        print(json.dumps(GENERIC_ERROR, ensure_ascii=False, indent=2))
        return 1
    print(json.dumps(result.forecast.to_dict(), ensure_ascii=False, indent=2))
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(json.dumps(redacted_dump(config), indent=2))
        return 0
    if args.config_command == "get":
        try:
            value = get_config_value(redacted_dump(config), args.key)
        except KeyError:
            print(f"Unknown config key: {args.key}")
            return 1
        print(json.dumps(value, indent=2) if isinstance(value, dict | list) else value)
        return 0
    print("Usage: cwaproxy config {show,get KEY}")
    return 1
