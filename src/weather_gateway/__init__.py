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
Weather gateway.

Current-weather lookup and weather-agent chat over HTTP/JSON and over a stdio
tool protocol.
"""

from .agent import AgentProxy, AgentResult
from .conditions import describe_weather_code
from .exceptions import (
    AgentError,
    GatewayError,
    InvalidInputError,
    LocationNotFoundError,
    UnknownAgentError,
    UnknownResourceError,
    UnknownToolError,
    UpstreamError,
)
from .gateway import Gateway
from .models import WeatherRecord
from .weather import WeatherFetcher

__all__ = [
    "AgentError",
    "AgentProxy",
    "AgentResult",
    "Gateway",
    "GatewayError",
    "InvalidInputError",
    "LocationNotFoundError",
    "UnknownAgentError",
    "UnknownResourceError",
    "UnknownToolError",
    "UpstreamError",
    "WeatherFetcher",
    "WeatherRecord",
    "describe_weather_code",
]
