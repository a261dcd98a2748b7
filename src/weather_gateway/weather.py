# Copyright 2025 Amazon.com, Inc. and its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Weather Fetcher.

Resolves a location name with the Open-Meteo geocoding service, fetches the
current conditions for the resulting coordinates, and normalizes them into a
WeatherRecord. Both transports share one fetcher instance.
"""

import logging
from typing import Any

import requests
from pydantic import ValidationError

from weather_gateway.conditions import describe_weather_code
from weather_gateway.exceptions import (
    InvalidInputError,
    LocationNotFoundError,
    UpstreamError,
)
from weather_gateway.models import CurrentConditions, GeocodeResult, WeatherRecord

logger = logging.getLogger(__name__)

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
DEFAULT_TIMEOUT = 30.0

CURRENT_FIELDS = (
    "temperature_2m",
    "apparent_temperature",
    "relative_humidity_2m",
    "wind_speed_10m",
    "wind_gusts_10m",
    "weather_code",
)


class WeatherFetcher:
    """
    Fetches and normalizes current weather for a location.

    No retries and no caching: every call performs one geocoding request and
    one forecast request.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        geocoding_url: str = GEOCODING_URL,
        forecast_url: str = FORECAST_URL,
    ):
        """
        Initialize the fetcher.

        Args:
            session: HTTP session to use (a new one is created when omitted)
            timeout: Per-request timeout in seconds for upstream calls
            geocoding_url: Geocoding search endpoint
            forecast_url: Forecast endpoint
        """
        self.session = session or requests.Session()
        self.timeout = timeout
        self.geocoding_url = geocoding_url
        self.forecast_url = forecast_url

    def fetch(self, location: str) -> WeatherRecord:
        """
        Get the current weather for a location.

        Args:
            location: Free-form place name, e.g. "Istanbul"

        Returns:
            The normalized WeatherRecord. Its `location` is the canonical name
            from geocoding, not the raw input.

        Raises:
            InvalidInputError: When the location is empty or whitespace-only
            LocationNotFoundError: When geocoding returns no results
            UpstreamError: On network errors, non-2xx statuses or malformed JSON
        """
        if not isinstance(location, str) or not location.strip():
            raise InvalidInputError("Location is required")

        logger.info(f"Fetching weather for {location}")

        place = self.geocode(location)
        current = self.current_conditions(place.latitude, place.longitude)

        return WeatherRecord(
            temperature=current.temperature_2m,
            feels_like=current.apparent_temperature,
            humidity=current.relative_humidity_2m,
            wind_speed=current.wind_speed_10m,
            wind_gust=current.wind_gusts_10m,
            conditions=describe_weather_code(current.weather_code),
            location=place.name,
        )

    def geocode(self, location: str) -> GeocodeResult:
        """Resolve a location name to coordinates and a canonical name; the query is trimmed."""
        data = self._get_json(
            self.geocoding_url, {"name": location.strip(), "count": 1}
        )

        results = data.get("results") if isinstance(data, dict) else None
        if not results:
            raise LocationNotFoundError(location)

        try:
            return GeocodeResult.model_validate(results[0])
        except ValidationError as e:
            raise UpstreamError(f"Malformed geocoding result for '{location}'") from e

    def current_conditions(self, latitude: float, longitude: float) -> CurrentConditions:
        """Fetch the current conditions for a coordinate pair."""
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": ",".join(CURRENT_FIELDS),
        }
        data = self._get_json(self.forecast_url, params)

        current = data.get("current") if isinstance(data, dict) else None
        if not isinstance(current, dict):
            raise UpstreamError("Forecast response is missing current conditions")

        try:
            return CurrentConditions.model_validate(current)
        except ValidationError as e:
            raise UpstreamError("Malformed current conditions in forecast response") from e

    def _get_json(self, url: str, params: dict[str, Any]) -> Any:
        logger.debug(f"GET {url} params={params}")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.Timeout as e:
            raise UpstreamError(
                f"Request to {url} timed out after {self.timeout} seconds"
            ) from e
        except requests.RequestException as e:
            # Covers connection errors, HTTPError from raise_for_status and
            # requests' JSONDecodeError
            raise UpstreamError(str(e) or f"Request to {url} failed") from e
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from {url}: {e}") from e
