"""
Command-line interface for the weather agent.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import sys

from weather_agent import __version__
from weather_agent.agent import WeatherAgent
from weather_agent.config import get_settings
from weather_agent.errors import WeatherAgentError
from weather_agent.logging_setup import configure_logging
from weather_agent.server import make_server


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="weather-agent",
        description="Weather, prayer times and hunting windows served as cached JSON",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'serve' command - run the HTTP API
    serve_parser = subparsers.add_parser("serve", help="Serve the JSON API")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: port from settings)",
    )

    # 'weather' command - one-off lookup
    weather_parser = subparsers.add_parser("weather", help="Print weather for a location")
    weather_parser.add_argument("location", help="City, 'lat,lon', postcode, ...")

    # 'ip' command - one-off lookup
    ip_parser = subparsers.add_parser("ip", help="Print geolocation for an IP address")
    ip_parser.add_argument("address", help="IPv4 or IPv6 address")

    subparsers.add_parser("info", help="Show application info")

    return parser


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: run the API until interrupted."""
    settings = get_settings()
    configure_logging(settings, debug=args.debug)

    if not settings.weather_api_key:
        print("WEATHER_API_KEY is not set.", file=sys.stderr)
        return 1

    agent = WeatherAgent(settings)
    server = make_server(settings, agent, port=args.port)
    host, port = server.server_address[:2]

    with agent, server:
        print(f"Serving API on http://{host}:{port}/api/v1 (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def cmd_weather(args: argparse.Namespace) -> int:
    """Handle the 'weather' command."""
    settings = get_settings()
    configure_logging(settings, debug=args.debug)
    agent = WeatherAgent(settings)
    try:
        weather = agent.get_weather(args.location)
    except WeatherAgentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(weather.model_dump_json(by_alias=True, indent=2))
    return 0


def cmd_ip(args: argparse.Namespace) -> int:
    """Handle the 'ip' command."""
    settings = get_settings()
    configure_logging(settings, debug=args.debug)
    agent = WeatherAgent(settings)
    try:
        lookup = agent.get_ip_lookup(args.address)
    except WeatherAgentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(lookup.model_dump_json(by_alias=True, indent=2))
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Provider: {settings.weather_api_base_url}")
    print(f"Cache duration: {settings.cache_duration}")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "serve": cmd_serve,
        "weather": cmd_weather,
        "ip": cmd_ip,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
