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
Weather agent backed by Amazon Bedrock.

This is the default agent collaborator of the gateway. It answers prompts with
the Generative AI Toolkit's BedrockConverseAgent and has the gateway's own
weather lookup registered as a tool, so a chat question can trigger a live
lookup.
"""

import logging
import textwrap

import boto3
from generative_ai_toolkit.agent import BedrockConverseAgent

from weather_gateway.agent import AgentResult
from weather_gateway.exceptions import GatewayError
from weather_gateway.weather import WeatherFetcher

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = textwrap.dedent(
    """
    You are a helpful weather assistant that provides accurate and timely weather information.

    When users ask about weather:
    1. Use the get_weather tool to get current conditions when no weather data is given
    2. Provide clear, helpful responses with specific details
    3. Include relevant safety information for severe weather
    4. Ask for clarification if the location is unclear

    Keep responses concise and prioritize user safety when discussing weather conditions.
    """
).strip()


class BedrockWeatherAgent:
    """
    Agent collaborator that answers prompts with a Bedrock model.

    A new BedrockConverseAgent is created for every prompt, so no conversation
    history is kept between calls and concurrent calls do not share state.
    """

    def __init__(self, model_id: str, region: str, fetcher: WeatherFetcher):
        """
        Initialize the weather agent.

        Args:
            model_id: The Bedrock model ID to use
            region: AWS region for Bedrock
            fetcher: Weather fetcher used by the agent's weather tool
        """
        self.model_id = model_id
        self.region = region
        self.fetcher = fetcher
        self.session = boto3.Session(region_name=region)

        logger.info(f"BedrockWeatherAgent initialized with model {model_id} in {region}")

    def generate(self, prompt: str) -> AgentResult:
        agent = self._create_agent()
        logger.info("Calling Bedrock Converse API")
        return AgentResult(text=agent.converse(prompt))

    def _create_agent(self) -> BedrockConverseAgent:
        agent = BedrockConverseAgent(
            model_id=self.model_id,
            session=self.session,
            system_prompt=SYSTEM_PROMPT,
        )
        agent.register_tool(self._weather_tool())
        return agent

    def _weather_tool(self):
        fetcher = self.fetcher

        def get_weather(location: str) -> dict:
            """
            Get the current weather for a location.

            Parameters
            ----------
            location : str
                The city or place name to get the weather for, e.g. "Amsterdam".
            """
            try:
                return fetcher.fetch(location).to_payload()
            except GatewayError as e:
                return {"error": str(e)}

        return get_weather
