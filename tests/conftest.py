"""Shared fixtures and stub collaborators for the gateway tests."""

import pytest

from weather_gateway.agent import AgentProxy, AgentResult
from weather_gateway.exceptions import InvalidInputError, LocationNotFoundError
from weather_gateway.gateway import Gateway
from weather_gateway.http_app import create_app
from weather_gateway.models import WeatherRecord


def make_record(location: str = "Istanbul", conditions: str = "Partly cloudy") -> WeatherRecord:
    return WeatherRecord(
        temperature=20,
        feels_like=19,
        humidity=65,
        wind_speed=10,
        wind_gust=15,
        conditions=conditions,
        location=location,
    )


class StubFetcher:
    """Fetcher returning canned records keyed by lowercased location."""

    def __init__(self, records: dict[str, WeatherRecord] | None = None, error=None):
        self.records = records or {}
        self.error = error
        self.calls: list[str] = []

    def fetch(self, location: str) -> WeatherRecord:
        self.calls.append(location)
        if self.error is not None:
            raise self.error
        if not location.strip():
            raise InvalidInputError("Location is required")
        record = self.records.get(location.strip().lower())
        if record is None:
            raise LocationNotFoundError(location)
        return record


class StubAgent:
    """Agent collaborator that records prompts and returns a fixed reply."""

    def __init__(self, reply: str | None = "Sunny enough, no umbrella needed.", error=None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> AgentResult:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return AgentResult(text=self.reply)


@pytest.fixture
def fetcher():
    return StubFetcher(
        {
            "istanbul": make_record("Istanbul", "Partly cloudy"),
            "paris": make_record("Paris", "Slight rain"),
            "tokyo": make_record("Tokyo", "Thunderstorm"),
        }
    )


@pytest.fixture
def agent():
    return StubAgent()


@pytest.fixture
def gateway(fetcher, agent):
    return Gateway(fetcher, AgentProxy(agent))


@pytest.fixture
def client(gateway):
    app = create_app(gateway)
    app.config["TESTING"] = True
    return app.test_client()
