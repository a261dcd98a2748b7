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
Transport-independent gateway operations.

Both the HTTP transport and the stdio tool transport dispatch through a single
Gateway, so parameter validation, the agent/tool registry and the weather-chat
prompt are defined once. Transports only decode requests and shape responses.
"""

import json
import logging
from typing import Any

from weather_gateway.agent import AgentProxy
from weather_gateway.exceptions import UnknownAgentError, UnknownToolError
from weather_gateway.models import DEFAULT_AGENT, ToolParameters, WeatherRecord, parse_model
from weather_gateway.weather import WeatherFetcher

logger = logging.getLogger(__name__)

WEATHER_TOOL = "weather"

AGENTS = (DEFAULT_AGENT,)
TOOLS = (WEATHER_TOOL,)


def build_weather_prompt(location: str, record: WeatherRecord, question: str) -> str:
    """Embed a weather record and the user's question into an agent prompt."""
    weather_json = json.dumps(
        record.to_payload(), separators=(",", ":"), ensure_ascii=False
    )
    return (
        f"Based on this weather data for {location}: {weather_json}"
        f"\n\nUser question: {question}"
    )


class Gateway:
    """The capabilities exposed by every transport."""

    def __init__(self, fetcher: WeatherFetcher, agent_proxy: AgentProxy):
        self.fetcher = fetcher
        self.agent_proxy = agent_proxy

    def list_agents(self) -> list[str]:
        return list(AGENTS)

    def list_tools(self) -> list[str]:
        return list(TOOLS)

    def get_weather(self, location: str) -> WeatherRecord:
        return self.fetcher.fetch(location)

    def chat(self, message: str, agent_name: str = DEFAULT_AGENT) -> str:
        """
        Send a message to a registered agent.

        Raises:
            UnknownAgentError: When the agent is not registered
            InvalidInputError: When the message is empty
            AgentError: When the agent fails
        """
        if agent_name not in AGENTS:
            raise UnknownAgentError(agent_name)

        logger.info(f"Chat with {agent_name}")
        return self.agent_proxy.ask(message)

    def execute_tool(self, tool_name: str, parameters: Any) -> WeatherRecord:
        """
        Execute a registered tool with raw, unvalidated parameters.

        Raises:
            UnknownToolError: When the tool is not registered
            InvalidInputError: When the location parameter is missing
        """
        if tool_name not in TOOLS:
            raise UnknownToolError(tool_name)

        params = parse_model(
            ToolParameters, parameters, required_message="Location parameter is required"
        )
        logger.info(f"Executing tool {tool_name} for {params.location}")
        return self.fetcher.fetch(params.location)

    def weather_chat(
        self, location: str, question: str | None = None
    ) -> tuple[WeatherRecord, str | None]:
        """
        Fetch the weather and, when a question is given, ask the agent about it.

        Returns:
            The weather record and the agent's answer. The answer is None and
            the agent is not called when the question is absent or empty.
        """
        record = self.fetcher.fetch(location)
        if not question:
            return record, None

        prompt = build_weather_prompt(location, record, question)
        return record, self.agent_proxy.ask(prompt)
