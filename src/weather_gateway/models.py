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
Pydantic data models for the weather gateway.

This module defines the upstream payloads the Weather Fetcher consumes, the
normalized weather record both transports return, and the request bodies and
tool arguments the transports validate. Tool argument models double as the
JSON schemas advertised to tool-protocol clients.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from weather_gateway.exceptions import InvalidInputError

DEFAULT_AGENT = "weatherAgent"

# Keeps integers as integers so 20 serializes as 20, not 20.0
Number = int | float

ModelT = TypeVar("ModelT", bound=BaseModel)


class GeocodeResult(BaseModel):
    """First match returned by the geocoding service."""

    latitude: float = Field(ge=-90, le=90, description="Latitude in degrees")
    longitude: float = Field(ge=-180, le=180, description="Longitude in degrees")
    name: str = Field(description="Canonical place name")


class CurrentConditions(BaseModel):
    """The `current` object of a forecast response."""

    temperature_2m: Number
    apparent_temperature: Number
    relative_humidity_2m: Number
    wind_speed_10m: Number
    wind_gusts_10m: Number
    weather_code: int
    time: str | None = None


class WeatherRecord(BaseModel):
    """
    Normalized current-weather record.

    Serialized with camelCase keys (`feelsLike`, `windSpeed`, `windGust`), the
    shape both transports return to clients.
    """

    model_config = ConfigDict(populate_by_name=True)

    temperature: Number = Field(description="Air temperature at 2 m (°C)")
    feels_like: Number = Field(
        alias="feelsLike", description="Apparent temperature (°C)"
    )
    humidity: Number = Field(description="Relative humidity at 2 m (%)")
    wind_speed: Number = Field(alias="windSpeed", description="Wind speed at 10 m")
    wind_gust: Number = Field(alias="windGust", description="Wind gusts at 10 m")
    conditions: str = Field(description="Condition label from the codebook")
    location: str = Field(description="Canonical location name from geocoding")

    def to_payload(self) -> dict[str, Any]:
        """Return the record as a JSON-ready dict with camelCase keys."""
        return self.model_dump(by_alias=True)


class ChatRequest(BaseModel):
    """Body of `POST /api/agents/<agent>/chat`."""

    message: str = Field(min_length=1, description="Message to send to the agent")


class ToolParameters(BaseModel):
    """Parameters accepted by the `weather` tool."""

    location: str = Field(min_length=1, description="The location to get weather for")


class ToolExecuteRequest(BaseModel):
    """Body of `POST /api/tools/<tool>/execute`."""

    parameters: ToolParameters


class WeatherChatRequest(BaseModel):
    """Body of `POST /api/weather/chat`."""

    location: str = Field(min_length=1, description="The location to get weather for")
    question: str | None = Field(
        default=None, description="Optional question for the weather agent"
    )


class GetWeatherArguments(BaseModel):
    """Get weather information for a location."""

    location: str = Field(description="The location to get weather for")


class ChatWithAgentArguments(BaseModel):
    """Chat with the weather agent."""

    message: str = Field(description="Message to send to the agent")
    agent: str = Field(
        default=DEFAULT_AGENT,
        description=f"Agent name (default: {DEFAULT_AGENT})",
    )


def parse_model(model: type[ModelT], data: Any, required_message: str | None = None) -> ModelT:
    """
    Validate raw request data against a model.

    Args:
        model: The pydantic model to validate with.
        data: Decoded JSON body or tool arguments.
        required_message: Message to use for any validation failure. When
            omitted, the message names the first offending field.

    Returns:
        The validated model instance.

    Raises:
        InvalidInputError: When validation fails.
    """
    try:
        return model.model_validate(data if data is not None else {})
    except ValidationError as e:
        if required_message:
            raise InvalidInputError(required_message) from e
        raise InvalidInputError(_describe_validation_error(e)) from e


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "input"
    if first.get("type") in ("missing", "string_too_short"):
        return f"{field.capitalize()} is required"
    return f"Invalid {field}: {first.get('msg', 'invalid value')}"
