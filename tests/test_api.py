"""Tests for the HTTP API."""

import re

import httpx
import pytest
from fastapi.testclient import TestClient

from cwa_forecast.main import create_app, lifespan, validate_api_key
from cwa_forecast.weather.errors import ConfigurationError


class TestRoot:
    def test_lists_supported_cities(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        payload = response.json()
        assert payload["totalCities"] == 22
        assert "taipei" in payload["supportedCities"]
        assert payload["endpoints"]["health"] == "/api/health"

    def test_health(self, client: TestClient):
        response = client.get("/api/health")

        assert response.status_code == 200
        payload = response.json()
        assert payload["status"] == "OK"
        assert payload["supportedCities"] == 22
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", payload["timestamp"])

    def test_unknown_path(self, client: TestClient):
        response = client.get("/api/nowhere")

        assert response.status_code == 404
        assert response.json()["error"] == "Path not found"


class TestWeather:
    def test_success_envelope(self, client, forecast_route, forecast_document):
        forecast_route.mock(return_value=httpx.Response(200, json=forecast_document))

        response = client.get("/api/weather/taipei")

        assert response.status_code == 200
        payload = response.json()
        assert payload["success"] is True
        assert payload["data"]["city"] == "臺北市"
        assert payload["data"]["updateTime"] == "三十六小時天氣預報"
        assert payload["data"]["forecasts"][0] == {
            "startTime": "2024-01-01 06:00:00",
            "endTime": "2024-01-01 18:00:00",
            "weather": "多雲",
            "rainChancePercentText": "20%",
            "minTempText": "18°C",
            "maxTempText": "24°C",
            "comfortText": "舒適",
            "windSpeedText": "",
        }

    def test_cached_per_city(self, client, forecast_route, forecast_document):
        forecast_route.mock(return_value=httpx.Response(200, json=forecast_document))

        first = client.get("/api/weather/taipei")
        second = client.get("/api/weather/TAIPEI")

        assert first.status_code == second.status_code == 200
        assert second.json() == first.json()
        assert forecast_route.call_count == 1

    def test_unsupported_city(self, client, forecast_route):
        response = client.get("/api/weather/Atlantis")

        assert response.status_code == 400
        payload = response.json()
        assert payload["requestedCity"] == "atlantis"
        assert len(payload["supportedCities"]) == 22
        assert not forecast_route.called

    def test_no_data(self, client, forecast_route):
        body = {"records": {"datasetDescription": "三十六小時天氣預報", "location": []}}
        forecast_route.mock(return_value=httpx.Response(200, json=body))

        response = client.get("/api/weather/kinmen")

        assert response.status_code == 404
        assert "金門縣" in response.json()["message"]

    def test_upstream_status_passed_through(self, client, forecast_route):
        body = {"success": "false", "message": "Authorization failed"}
        forecast_route.mock(return_value=httpx.Response(401, json=body))

        response = client.get("/api/weather/taipei")

        assert response.status_code == 401
        payload = response.json()
        assert payload["error"] == "CWA API error"
        assert payload["message"] == "Authorization failed"
        assert payload["details"] == body

    def test_upstream_unreachable(self, client, forecast_route):
        forecast_route.mock(side_effect=httpx.ConnectTimeout("timed out"))

        response = client.get("/api/weather/taipei")

        assert response.status_code == 502
        assert response.json()["error"] == "CWA API unavailable"

    def test_malformed_upstream(self, client, forecast_route):
        forecast_route.mock(return_value=httpx.Response(200, json={"records": {"location": [{}]}}))

        response = client.get("/api/weather/taipei")

        assert response.status_code == 502

    def test_missing_key_at_request_time(self, forecast_route):
        app = create_app(api_key=None)
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/api/weather/taipei")

        assert response.status_code == 500
        assert "CWA_API_KEY" in response.json()["message"]
        assert not forecast_route.called

    def test_cors_headers(self, client, forecast_route, forecast_document):
        forecast_route.mock(return_value=httpx.Response(200, json=forecast_document))

        response = client.get("/api/weather/taipei", headers={"Origin": "http://example.com"})

        assert response.headers["access-control-allow-origin"] == "*"

    def test_plain_options_request(self, client):
        response = client.options("/api/weather/taipei", headers={"Origin": "http://example.com"})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_preflight_request(self, client):
        response = client.options(
            "/api/weather/taipei",
            headers={"Origin": "http://example.com", "Access-Control-Request-Method": "GET"}
        )

        assert response.status_code == 200
        assert "GET" in response.headers["access-control-allow-methods"]

    def test_method_not_allowed_uses_error_shape(self, client, forecast_route):
        response = client.post("/api/weather/taipei")

        assert response.status_code == 405
        assert response.json() == {"error": "Method Not Allowed", "message": "Method Not Allowed"}
        assert "GET" in response.headers["allow"]
        assert not forecast_route.called


class TestStartup:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_validate_rejects_blank(self, value):
        with pytest.raises(ConfigurationError):
            validate_api_key(value)

    def test_validate_strips(self):
        assert validate_api_key(" key ") == "key"

    @pytest.mark.asyncio
    async def test_lifespan_fails_fast_without_key(self):
        app = create_app(api_key="")

        with pytest.raises(ConfigurationError):
            async with lifespan(app):
                pass
