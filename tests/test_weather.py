"""
Unit tests for the Weather Fetcher, with the Open-Meteo services mocked.
"""

import os

import pytest
import requests

from weather_gateway.exceptions import (
    InvalidInputError,
    LocationNotFoundError,
    UpstreamError,
)
from weather_gateway.weather import FORECAST_URL, GEOCODING_URL, WeatherFetcher


def geocoding_payload(name="Istanbul", latitude=41.01, longitude=28.95):
    return {
        "results": [
            {
                "id": 745044,
                "name": name,
                "latitude": latitude,
                "longitude": longitude,
                "country": "Türkiye",
            }
        ]
    }


def forecast_payload(code=2, **overrides):
    current = {
        "time": "2025-06-01T12:00",
        "temperature_2m": 20,
        "apparent_temperature": 19,
        "relative_humidity_2m": 65,
        "wind_speed_10m": 10,
        "wind_gusts_10m": 15,
        "weather_code": code,
    }
    current.update(overrides)
    return {"latitude": 41.0, "longitude": 28.95, "current": current}


class TestWeatherFetcher:
    """Test cases for WeatherFetcher.fetch."""

    def setup_method(self):
        """Set up test fixtures."""
        self.fetcher = WeatherFetcher()

    def test_fetch_normalizes_current_conditions(self, requests_mock):
        """Test a successful lookup is projected into a WeatherRecord."""
        requests_mock.get(GEOCODING_URL, json=geocoding_payload())
        requests_mock.get(FORECAST_URL, json=forecast_payload(code=2))

        record = self.fetcher.fetch("Istanbul")

        assert record.to_payload() == {
            "temperature": 20,
            "feelsLike": 19,
            "humidity": 65,
            "windSpeed": 10,
            "windGust": 15,
            "conditions": "Partly cloudy",
            "location": "Istanbul",
        }

    def test_fetch_keeps_integer_values(self, requests_mock):
        """Test integer upstream values are not turned into floats."""
        requests_mock.get(GEOCODING_URL, json=geocoding_payload())
        requests_mock.get(FORECAST_URL, json=forecast_payload(temperature_2m=20.4))

        payload = self.fetcher.fetch("Istanbul").to_payload()

        assert payload["temperature"] == 20.4
        assert isinstance(payload["humidity"], int)

    def test_fetch_sends_expected_queries(self, requests_mock):
        """Test the geocoding and forecast requests carry the documented parameters."""
        requests_mock.get(GEOCODING_URL, json=geocoding_payload())
        requests_mock.get(FORECAST_URL, json=forecast_payload())

        self.fetcher.fetch("New York")

        geocoding, forecast = requests_mock.request_history
        assert geocoding.qs["name"] == ["new york"]
        assert geocoding.qs["count"] == ["1"]
        assert forecast.qs["latitude"] == ["41.01"]
        assert forecast.qs["longitude"] == ["28.95"]
        assert forecast.qs["current"] == [
            "temperature_2m,apparent_temperature,relative_humidity_2m,"
            "wind_speed_10m,wind_gusts_10m,weather_code"
        ]
        assert geocoding.timeout == 30.0

    def test_location_is_canonical_name(self, requests_mock):
        """Test case and whitespace variants resolve to the same canonical name."""
        requests_mock.get(GEOCODING_URL, json=geocoding_payload(name="Istanbul"))
        requests_mock.get(FORECAST_URL, json=forecast_payload())

        locations = {
            self.fetcher.fetch(raw).location
            for raw in ("istanbul", "ISTANBUL", "  Istanbul ")
        }

        assert locations == {"Istanbul"}
        geocoding_queries = [
            request.qs["name"]
            for request in requests_mock.request_history
            if request.url.startswith(GEOCODING_URL)
        ]
        assert geocoding_queries == [["istanbul"]] * 3

    def test_location_is_trimmed_before_geocoding(self, requests_mock):
        """Test surrounding whitespace is not sent to the geocoding service."""
        requests_mock.get(GEOCODING_URL, json=geocoding_payload())
        requests_mock.get(FORECAST_URL, json=forecast_payload())

        self.fetcher.fetch("  Istanbul ")

        assert requests_mock.request_history[0].url == (
            f"{GEOCODING_URL}?name=Istanbul&count=1"
        )

    def test_not_found_message_keeps_raw_input(self, requests_mock):
        """Test the not-found message names the location as given."""
        requests_mock.get(GEOCODING_URL, json={"results": []})

        with pytest.raises(LocationNotFoundError, match="Location ' Zzzzz ' not found"):
            self.fetcher.fetch(" Zzzzz ")

        assert requests_mock.last_request.qs["name"] == ["zzzzz"]

    def test_unknown_weather_code(self, requests_mock):
        """Test codes outside the codebook become Unknown."""
        requests_mock.get(GEOCODING_URL, json=geocoding_payload())
        requests_mock.get(FORECAST_URL, json=forecast_payload(code=42))

        assert self.fetcher.fetch("Istanbul").conditions == "Unknown"

    def test_empty_results_raise_location_not_found(self, requests_mock):
        """Test an empty result list is reported as LocationNotFoundError."""
        requests_mock.get(GEOCODING_URL, json={"results": []})

        with pytest.raises(LocationNotFoundError, match="Location 'Zzzzz' not found"):
            self.fetcher.fetch("Zzzzz")

        assert requests_mock.call_count == 1

    def test_missing_results_raise_location_not_found(self, requests_mock):
        """Test a response without a results key is reported as not found."""
        requests_mock.get(GEOCODING_URL, json={"generationtime_ms": 0.5})

        with pytest.raises(LocationNotFoundError):
            self.fetcher.fetch("Nowhere")

    @pytest.mark.parametrize("location", ["", "   ", None])
    def test_blank_location_is_invalid(self, location, requests_mock):
        """Test blank input fails without calling upstream."""
        with pytest.raises(InvalidInputError, match="Location is required"):
            self.fetcher.fetch(location)

        assert requests_mock.call_count == 0

    def test_geocoding_http_error(self, requests_mock):
        """Test a non-2xx geocoding status is an UpstreamError."""
        requests_mock.get(GEOCODING_URL, status_code=503)

        with pytest.raises(UpstreamError):
            self.fetcher.fetch("Istanbul")

    def test_forecast_http_error(self, requests_mock):
        """Test a non-2xx forecast status is an UpstreamError."""
        requests_mock.get(GEOCODING_URL, json=geocoding_payload())
        requests_mock.get(FORECAST_URL, status_code=500)

        with pytest.raises(UpstreamError):
            self.fetcher.fetch("Istanbul")

    def test_malformed_json(self, requests_mock):
        """Test a body that is not JSON is an UpstreamError."""
        requests_mock.get(GEOCODING_URL, text="<html>not json</html>")

        with pytest.raises(UpstreamError):
            self.fetcher.fetch("Istanbul")

    def test_connection_error(self, requests_mock):
        """Test network failures are UpstreamErrors."""
        requests_mock.get(
            GEOCODING_URL, exc=requests.exceptions.ConnectionError("connection refused")
        )

        with pytest.raises(UpstreamError, match="connection refused"):
            self.fetcher.fetch("Istanbul")

    def test_timeout(self, requests_mock):
        """Test an upstream timeout is an UpstreamError."""
        requests_mock.get(GEOCODING_URL, exc=requests.exceptions.ReadTimeout)

        with pytest.raises(UpstreamError, match="timed out"):
            self.fetcher.fetch("Istanbul")

    def test_missing_current_block(self, requests_mock):
        """Test a forecast without current conditions is an UpstreamError."""
        requests_mock.get(GEOCODING_URL, json=geocoding_payload())
        requests_mock.get(FORECAST_URL, json={"latitude": 41.0})

        with pytest.raises(UpstreamError, match="missing current conditions"):
            self.fetcher.fetch("Istanbul")

    def test_missing_current_field(self, requests_mock):
        """Test a forecast missing a numeric field is an UpstreamError."""
        payload = forecast_payload()
        del payload["current"]["wind_gusts_10m"]
        requests_mock.get(GEOCODING_URL, json=geocoding_payload())
        requests_mock.get(FORECAST_URL, json=payload)

        with pytest.raises(UpstreamError):
            self.fetcher.fetch("Istanbul")

    def test_malformed_geocoding_result(self, requests_mock):
        """Test a geocoding result without coordinates is an UpstreamError."""
        requests_mock.get(GEOCODING_URL, json={"results": [{"name": "Istanbul"}]})

        with pytest.raises(UpstreamError):
            self.fetcher.fetch("Istanbul")

    def test_custom_endpoints_and_timeout(self, requests_mock):
        """Test endpoints and timeout can be overridden."""
        fetcher = WeatherFetcher(
            timeout=5,
            geocoding_url="https://geo.test/search",
            forecast_url="https://forecast.test/v1",
        )
        requests_mock.get("https://geo.test/search", json=geocoding_payload())
        requests_mock.get("https://forecast.test/v1", json=forecast_payload(code=95))

        record = fetcher.fetch("Tokyo")

        assert record.conditions == "Thunderstorm"
        assert requests_mock.last_request.timeout == 5


@pytest.mark.integration
@pytest.mark.skipif(
    not os.getenv("RUN_INTEGRATION_TESTS"), reason="set RUN_INTEGRATION_TESTS to call Open-Meteo"
)
def test_live_lookup():
    """Test a lookup against the live Open-Meteo services."""
    record = WeatherFetcher().fetch("Berlin")

    assert record.location == "Berlin"
    assert 0 <= record.humidity <= 100
