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
Process entry points.

- weather-gateway-http: serve the HTTP transport
- weather-gateway-mcp: serve the stdio tool transport
"""

import asyncio
import logging
import sys

from weather_gateway.agent import AgentProxy
from weather_gateway.bedrock_agent import BedrockWeatherAgent
from weather_gateway.config import LOG_FORMAT, GatewaySettings
from weather_gateway.gateway import Gateway
from weather_gateway.http_app import ENDPOINTS, create_app
from weather_gateway.mcp_server import serve
from weather_gateway.weather import WeatherFetcher

logger = logging.getLogger(__name__)


def build_gateway(settings: GatewaySettings) -> Gateway:
    """
    Wire the fetcher and the agent for a process.

    An agent that cannot be created is logged and left unavailable; the
    weather endpoints keep working and agent calls fail with AgentError.
    """
    fetcher = WeatherFetcher(
        timeout=settings.upstream_timeout,
        geocoding_url=settings.geocoding_url,
        forecast_url=settings.forecast_url,
    )

    try:
        collaborator = BedrockWeatherAgent(
            model_id=settings.model_id, region=settings.region, fetcher=fetcher
        )
    except Exception as e:
        logger.error(f"Failed to initialize weather agent: {e}")
        collaborator = None

    return Gateway(fetcher, AgentProxy(collaborator))


def _load_settings() -> GatewaySettings:
    settings = GatewaySettings.from_env()
    logging.getLogger().setLevel(settings.log_level)
    return settings


def http_main() -> int:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    try:
        settings = _load_settings()
        app = create_app(build_gateway(settings))
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        return 1

    logger.info(f"API server running on http://{settings.host}:{settings.port}")
    logger.info("Available endpoints:")
    for method, path, description in ENDPOINTS:
        logger.info(f"  {method:<4} {path} - {description}")

    try:
        app.run(host=settings.host, port=settings.port, threaded=True)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
        return 1
    return 0


def mcp_main() -> int:
    # stdout carries protocol frames
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, stream=sys.stderr)

    try:
        settings = _load_settings()
        asyncio.run(serve(build_gateway(settings)))
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
        return 1
    return 0


def run_http() -> None:
    sys.exit(http_main())


def run_mcp() -> None:
    sys.exit(mcp_main())
