"""Tests for weather request orchestration with a mocked CWA client."""

import asyncio
from unittest.mock import MagicMock

import httpx
import pytest

from cwaproxy.config.cities import city_codes
from cwaproxy.config.schema import ProxyConfig
from cwaproxy.ingest.cwa_client import CwaClient
from cwaproxy.models.errors import (
    InvalidLocationCode,
    LocationNotFound,
    MissingCredential,
    UpstreamFailure,
)
from cwaproxy.pipeline.weather_service import WeatherService
from cwaproxy.storage.cache import TTLCache


def _mock_client(payload: dict | None = None) -> MagicMock:
    client = MagicMock(spec=CwaClient)
    client.fetch_forecast.return_value = payload
    return client


class TestGetCityWeather:
    def test_fetch_success(self, keyed_config: ProxyConfig, taipei_payload: dict):
        client = _mock_client(taipei_payload)
        service = WeatherService(keyed_config, client=client)

        result = asyncio.run(service.get_city_weather("taipei"))

        assert result.cached is False
        assert result.forecast.city == "臺北市"
        client.fetch_forecast.assert_called_once_with("臺北市")

    def test_cache_hit(self, keyed_config: ProxyConfig, taipei_payload: dict):
        client = _mock_client(taipei_payload)
        service = WeatherService(keyed_config, client=client)

        r1 = asyncio.run(service.get_city_weather("taipei"))
        r2 = asyncio.run(service.get_city_weather("TAIPEI"))

        assert r2.cached is True
        assert r2.forecast == r1.forecast
        # Only one API call due to cache
        assert client.fetch_forecast.call_count == 1

    def test_cache_expiry_refetches(self, keyed_config: ProxyConfig, taipei_payload: dict, clock):
        client = _mock_client(taipei_payload)
        service = WeatherService(
            keyed_config, client=client, cache=TTLCache(ttl_seconds=600, clock=clock)
        )

        asyncio.run(service.get_city_weather("taipei"))
        clock.advance(601)
        result = asyncio.run(service.get_city_weather("taipei"))

        assert result.cached is False
        assert client.fetch_forecast.call_count == 2

    def test_different_cities_cached_separately(self, keyed_config: ProxyConfig, taipei_payload: dict):
        client = _mock_client(taipei_payload)
        service = WeatherService(keyed_config, client=client)

        asyncio.run(service.get_city_weather("taipei"))
        asyncio.run(service.get_city_weather("tainan"))

        assert client.fetch_forecast.call_count == 2
        assert "weather_taipei" in service.cache
        assert "weather_tainan" in service.cache

    def test_cache_ttl_from_config(self):
        service = WeatherService(ProxyConfig(cache={"ttl_seconds": 30}))
        assert service.cache.ttl_seconds == 30


class TestGetCityWeatherErrors:
    def test_invalid_code(self, keyed_config: ProxyConfig):
        client = _mock_client()
        service = WeatherService(keyed_config, client=client)

        with pytest.raises(InvalidLocationCode) as exc_info:
            asyncio.run(service.get_city_weather("atlantis"))
        assert exc_info.value.available == city_codes()
        client.fetch_forecast.assert_not_called()

    def test_missing_credential(self):
        client = _mock_client()
        service = WeatherService(ProxyConfig(), client=client)

        with pytest.raises(MissingCredential):
            asyncio.run(service.get_city_weather("taipei"))
        client.fetch_forecast.assert_not_called()

    def test_cache_hit_does_not_need_credential(self):
        service = WeatherService(ProxyConfig(), client=_mock_client())
        service.cache.set("weather_taipei", "cached-forecast")

        result = asyncio.run(service.get_city_weather("taipei"))
        assert result.cached is True
        assert result.forecast == "cached-forecast"

    def test_location_not_found_names_location(self, keyed_config: ProxyConfig):
        client = _mock_client({"records": {"datasetDescription": "x", "location": []}})
        service = WeatherService(keyed_config, client=client)

        with pytest.raises(LocationNotFound) as exc_info:
            asyncio.run(service.get_city_weather("penghu"))
        assert exc_info.value.location_name == "澎湖縣"
        assert "澎湖縣" in exc_info.value.message
        assert len(service.cache) == 0

    def test_upstream_failure_propagates(self, keyed_config: ProxyConfig):
        client = _mock_client()
        client.fetch_forecast.side_effect = UpstreamFailure(401, {"message": "bad key"})
        service = WeatherService(keyed_config, client=client)

        with pytest.raises(UpstreamFailure):
            asyncio.run(service.get_city_weather("taipei"))
        assert len(service.cache) == 0

    def test_transport_error_propagates(self, keyed_config: ProxyConfig):
        client = _mock_client()
        client.fetch_forecast.side_effect = httpx.ConnectError("refused")
        service = WeatherService(keyed_config, client=client)

        with pytest.raises(httpx.ConnectError):
            asyncio.run(service.get_city_weather("taipei"))

    def test_builds_client_from_config(self, keyed_config: ProxyConfig):
        service = WeatherService(keyed_config)
        client = service._get_client()
        assert client.api_key == "test-key-123"
        assert client.forecast_url.startswith("https://test-cwa.example.com/api/")
