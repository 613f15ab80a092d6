"""
JSON HTTP API over ``http.server``.

Routes::

    GET /api/v1/weather?location=<q>&lang=<lang>
    GET /api/v1/ip?ip=<addr|auto>&lang=<lang>
    GET /api/v1/health
    GET /api/v1/translations[/<lang>]

Each request is handled on its own thread (``ThreadingHTTPServer``); the
agent's cache is the only state shared between them.

Usage::

    server = make_server(settings, agent)
    with agent, server:
        server.serve_forever()
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qs, urlsplit

from weather_agent import __version__
from weather_agent.errors import ValidationError, WeatherAgentError
from weather_agent.i18n import Bundle

if TYPE_CHECKING:
    from weather_agent.agent import WeatherAgent
    from weather_agent.config import Settings

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
ALLOWED_METHODS = "GET, OPTIONS"
ALLOWED_HEADERS = "Origin, Content-Type, Accept"


class WeatherServer(ThreadingHTTPServer):
    """HTTP server carrying the agent, settings and message catalogs."""

    daemon_threads = True

    def __init__(
        self,
        address: tuple[str, int],
        agent: WeatherAgent,
        settings: Settings,
        bundle: Bundle,
    ) -> None:
        self.agent = agent
        self.settings = settings
        self.bundle = bundle
        super().__init__(address, WeatherRequestHandler)


class WeatherRequestHandler(BaseHTTPRequestHandler):
    """Routes API requests to the agent and writes JSON responses."""

    server: WeatherServer
    server_version = f"weather-agent/{__version__}"

    # ------------------------------------------------------------------
    # HTTP verbs
    # ------------------------------------------------------------------

    def do_GET(self) -> None:  # noqa: N802
        url = urlsplit(self.path)
        query = {k: v[0] for k, v in parse_qs(url.query).items()}
        lang = query.get("lang") or self.server.settings.default_lang
        path = url.path.rstrip("/")

        if path == f"{API_PREFIX}/weather":
            self.handle_weather(query.get("location", ""), lang)
        elif path == f"{API_PREFIX}/ip":
            self.handle_ip(query.get("ip", ""), lang)
        elif path == f"{API_PREFIX}/health":
            self.handle_health()
        elif path == f"{API_PREFIX}/translations":
            self.handle_translations(self.server.settings.default_lang)
        elif path.startswith(f"{API_PREFIX}/translations/"):
            self.handle_translations(path.rsplit("/", 1)[1])
        else:
            self.send_error_json(HTTPStatus.NOT_FOUND, lang, "errors.not_found")

    def do_POST(self) -> None:  # noqa: N802
        lang = self.server.settings.default_lang
        self.send_error_json(HTTPStatus.METHOD_NOT_ALLOWED, lang, "errors.method_not_allowed")

    do_PUT = do_DELETE = do_PATCH = do_POST

    def do_OPTIONS(self) -> None:  # noqa: N802
        self.send_response(HTTPStatus.NO_CONTENT)
        self.send_cors_headers()
        self.send_header("Access-Control-Allow-Methods", ALLOWED_METHODS)
        self.send_header("Access-Control-Allow-Headers", ALLOWED_HEADERS)
        self.send_header("Content-Length", "0")
        self.end_headers()

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------

    def handle_weather(self, location: str, lang: str) -> None:
        if not location:
            self.send_error_json(HTTPStatus.BAD_REQUEST, lang, "errors.location_required")
            return
        try:
            weather = self.server.agent.get_weather(location)
        except ValidationError:
            self.send_error_json(HTTPStatus.BAD_REQUEST, lang, "errors.location_required")
            return
        except WeatherAgentError as e:
            logger.error("Weather fetch error: %s", e)
            self.send_error_json(HTTPStatus.INTERNAL_SERVER_ERROR, lang, "errors.weather_not_found")
            return
        self.send_json(HTTPStatus.OK, weather.model_dump_json(by_alias=True))

    def handle_ip(self, address: str, lang: str) -> None:
        if not address or address == "auto":
            address = self.client_address[0]
        try:
            lookup = self.server.agent.get_ip_lookup(address)
        except WeatherAgentError as e:
            logger.error("IP lookup error: %s", e)
            self.send_error_json(
                HTTPStatus.INTERNAL_SERVER_ERROR, lang, "errors.ip_lookup_failed", address
            )
            return
        self.send_json(HTTPStatus.OK, lookup.model_dump_json(by_alias=True))

    def handle_health(self) -> None:
        settings = self.server.settings
        self.send_json(
            HTTPStatus.OK,
            {
                "status": "healthy",
                "agent": f"{settings.app_name} v{__version__}",
                "admin": settings.admin_email,
                "time": datetime.now(UTC).isoformat(timespec="seconds"),
            },
        )

    def handle_translations(self, lang: str) -> None:
        self.send_json(
            HTTPStatus.OK,
            {
                "available_locales": self.server.bundle.available_locales(),
                "current_locale": lang,
            },
        )

    # ------------------------------------------------------------------
    # Response helpers
    # ------------------------------------------------------------------

    def send_cors_headers(self) -> None:
        origins = self.server.settings.origins
        if "*" in origins:
            self.send_header("Access-Control-Allow-Origin", "*")
            return
        origin = self.headers.get("Origin")
        if origin and origin in origins:
            self.send_header("Access-Control-Allow-Origin", origin)
            self.send_header("Vary", "Origin")

    def send_json(self, status: HTTPStatus, body: str | dict[str, Any]) -> None:
        payload = (body if isinstance(body, str) else json.dumps(body)).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(payload)))
        self.send_cors_headers()
        self.end_headers()
        self.wfile.write(payload)

    def send_error_json(self, status: HTTPStatus, lang: str, key: str, *args: object) -> None:
        message = self.server.bundle.translate(lang, key, *args)
        self.send_json(status, {"error": message})

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        logger.info("%s - %s", self.address_string(), format % args)


def make_server(
    settings: Settings,
    agent: WeatherAgent,
    *,
    bundle: Bundle | None = None,
    host: str | None = None,
    port: int | None = None,
) -> WeatherServer:
    """Bind a ``WeatherServer`` (does not start serving)."""
    address = (
        host if host is not None else settings.host,
        port if port is not None else settings.port,
    )
    server = WeatherServer(
        address,
        agent=agent,
        settings=settings,
        bundle=bundle if bundle is not None else Bundle.from_settings(settings),
    )
    logger.info("Server listening on %s:%d", *server.server_address[:2])
    return server
