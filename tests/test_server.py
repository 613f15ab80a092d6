"""Tests for the JSON HTTP API."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any
from unittest.mock import Mock

import pytest
import requests

from weather_agent.agent import WeatherAgent
from weather_agent.datasources.weatherapi import WeatherAPIClient
from weather_agent.errors import UpstreamError
from weather_agent.i18n import Bundle
from weather_agent.server import make_server

if TYPE_CHECKING:
    from collections.abc import Iterator

    from weather_agent.config import Settings
    from weather_agent.server import WeatherServer


@pytest.fixture
def client() -> Mock:
    return Mock(spec=WeatherAPIClient)


@pytest.fixture
def server(settings: Settings, client: Mock) -> Iterator[WeatherServer]:
    agent = WeatherAgent(settings, client=client)
    srv = make_server(settings, agent, host="127.0.0.1", port=0)
    thread = threading.Thread(target=srv.serve_forever, daemon=True)
    thread.start()
    yield srv
    srv.shutdown()
    srv.server_close()
    thread.join(timeout=5)


def _url(srv: WeatherServer, path: str) -> str:
    host, port = srv.server_address[:2]
    return f"http://{host}:{port}{path}"


def _get(srv: WeatherServer, path: str, **kwargs: Any) -> requests.Response:
    return requests.get(_url(srv, path), timeout=5, **kwargs)


class TestWeatherRoute:
    """GET /api/v1/weather"""

    def test_ok(self, server: WeatherServer, client: Mock, forecast_body: bytes) -> None:
        client.fetch.return_value = forecast_body
        resp = _get(server, "/api/v1/weather", params={"location": "Paris"})

        assert resp.status_code == 200
        assert resp.headers["Content-Type"].startswith("application/json")
        data = resp.json()
        assert data["location"]["name"] == "Paris"
        assert len(data["forecast"]["forecastday"]) == 7
        assert data["air_quality"]["us-epa-index"] == 1
        assert data["prayer_times"]["isha"] == "20:00"
        assert data["hunt_times"]["evening_start"] == "4:00 PM"

    def test_repeat_requests_hit_cache(
        self, server: WeatherServer, client: Mock, forecast_body: bytes
    ) -> None:
        client.fetch.return_value = forecast_body
        first = _get(server, "/api/v1/weather", params={"location": "Paris"})
        second = _get(server, "/api/v1/weather", params={"location": "Paris"})
        assert first.content == second.content
        assert client.fetch.call_count == 1

    def test_missing_location(self, server: WeatherServer, client: Mock) -> None:
        resp = _get(server, "/api/v1/weather")
        assert resp.status_code == 400
        assert resp.json() == {"error": "Location parameter required"}
        client.fetch.assert_not_called()

    def test_missing_location_translated(self, server: WeatherServer) -> None:
        resp = _get(server, "/api/v1/weather", params={"lang": "fr"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "Le paramètre de localisation est requis"

    def test_upstream_failure(self, server: WeatherServer, client: Mock) -> None:
        client.fetch.side_effect = UpstreamError(400, "No matching location found.")
        resp = _get(server, "/api/v1/weather", params={"location": "Nowhere"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Could not retrieve weather for this location"}


class TestIPRoute:
    """GET /api/v1/ip"""

    def test_explicit_address(self, server: WeatherServer, client: Mock, ip_body: bytes) -> None:
        client.fetch.return_value = ip_body
        resp = _get(server, "/api/v1/ip", params={"ip": "8.8.8.8"})
        assert resp.status_code == 200
        assert resp.json()["city"] == "Mountain View"
        client.fetch.assert_called_once_with("ip.json", {"q": "8.8.8.8"})

    @pytest.mark.parametrize("params", [{}, {"ip": "auto"}])
    def test_auto_uses_client_address(
        self, server: WeatherServer, client: Mock, ip_body: bytes, params: dict[str, str]
    ) -> None:
        client.fetch.return_value = ip_body
        _get(server, "/api/v1/ip", params=params)
        client.fetch.assert_called_once_with("ip.json", {"q": "127.0.0.1"})

    def test_failure(self, server: WeatherServer, client: Mock) -> None:
        client.fetch.side_effect = UpstreamError(400, "Invalid IP")
        resp = _get(server, "/api/v1/ip", params={"ip": "999.1.1.1"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Could not look up IP address 999.1.1.1"}


class TestMiscRoutes:
    """Health, translations, 404, CORS."""

    def test_health(self, server: WeatherServer) -> None:
        resp = _get(server, "/api/v1/health")
        data = resp.json()
        assert resp.status_code == 200
        assert data["status"] == "healthy"
        assert data["agent"].startswith("weather-agent v")
        assert "time" in data

    def test_translations(self, server: WeatherServer) -> None:
        data = _get(server, "/api/v1/translations/es").json()
        assert data["current_locale"] == "es"
        assert data["available_locales"] == ["en", "es", "fr"]

    def test_translations_default_lang(self, server: WeatherServer) -> None:
        assert _get(server, "/api/v1/translations").json()["current_locale"] == "en"

    def test_unknown_path(self, server: WeatherServer) -> None:
        resp = _get(server, "/nope")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Not found"}

    def test_cors_wildcard(self, server: WeatherServer) -> None:
        resp = _get(server, "/api/v1/health")
        assert resp.headers["Access-Control-Allow-Origin"] == "*"

    def test_preflight(self, server: WeatherServer) -> None:
        resp = requests.options(_url(server, "/api/v1/weather"), timeout=5)
        assert resp.status_code == 204
        assert "GET" in resp.headers["Access-Control-Allow-Methods"]

    def test_post_not_allowed(self, server: WeatherServer) -> None:
        resp = requests.post(_url(server, "/api/v1/weather"), timeout=5)
        assert resp.status_code == 405
        assert resp.json() == {"error": "Method not allowed"}


class TestCORSAllowList:
    """Only listed origins are echoed back."""

    @pytest.fixture
    def server(self, settings: Settings, client: Mock) -> Iterator[WeatherServer]:
        restricted = settings.model_copy(
            update={"allowed_origins": "http://localhost:8080,http://127.0.0.1:8080"}
        )
        agent = WeatherAgent(restricted, client=client)
        srv = make_server(restricted, agent, bundle=Bundle(), host="127.0.0.1", port=0)
        thread = threading.Thread(target=srv.serve_forever, daemon=True)
        thread.start()
        yield srv
        srv.shutdown()
        srv.server_close()
        thread.join(timeout=5)

    def test_allowed_origin(self, server: WeatherServer) -> None:
        resp = _get(server, "/api/v1/health", headers={"Origin": "http://localhost:8080"})
        assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:8080"

    def test_other_origin(self, server: WeatherServer) -> None:
        resp = _get(server, "/api/v1/health", headers={"Origin": "https://evil.example"})
        assert "Access-Control-Allow-Origin" not in resp.headers

    def test_empty_bundle_falls_back_to_keys(self, server: WeatherServer) -> None:
        resp = _get(server, "/api/v1/weather")
        assert resp.json() == {"error": "errors.location_required"}


class TestOperatorCatalogs:
    """Catalog messages that don't take arguments still produce JSON errors."""

    @pytest.fixture
    def server(self, settings: Settings, client: Mock) -> Iterator[WeatherServer]:
        bundle = Bundle(
            default_lang="en",
            catalogs={"en": {"errors.ip_lookup_failed": "IP lookup failed"}},
        )
        agent = WeatherAgent(settings, client=client)
        srv = make_server(settings, agent, bundle=bundle, host="127.0.0.1", port=0)
        thread = threading.Thread(target=srv.serve_forever, daemon=True)
        thread.start()
        yield srv
        srv.shutdown()
        srv.server_close()
        thread.join(timeout=5)

    def test_ip_failure_returns_json(self, server: WeatherServer, client: Mock) -> None:
        client.fetch.side_effect = UpstreamError(400, "Invalid IP")
        resp = _get(server, "/api/v1/ip", params={"ip": "1.2.3.4"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "IP lookup failed"}
