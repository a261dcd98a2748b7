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

"""Errors raised by the gateway components."""

UNKNOWN_ERROR = "Unknown error"


class GatewayError(Exception):
    """Base class for all gateway failures."""

    pass


class InvalidInputError(GatewayError):
    """A required field is missing or empty."""

    pass


class LocationNotFoundError(GatewayError):
    """Geocoding returned no results for the requested location."""

    def __init__(self, location: str):
        super().__init__(f"Location '{location}' not found")
        self.location = location


class UpstreamError(GatewayError):
    """The geocoding or forecast service failed or returned malformed data."""

    pass


class AgentError(GatewayError):
    """The agent collaborator raised or is not available."""

    pass


class UnknownAgentError(GatewayError):
    """The requested agent is not registered."""

    def __init__(self, agent_name: str):
        super().__init__(f"Agent {agent_name} not found")
        self.agent_name = agent_name


class UnknownToolError(GatewayError):
    """The requested tool is not registered."""

    def __init__(self, tool_name: str, message: str | None = None):
        super().__init__(message or f"Tool {tool_name} not found")
        self.tool_name = tool_name


class UnknownResourceError(GatewayError):
    """The requested resource URI is not registered."""

    def __init__(self, uri: str):
        super().__init__(f"Unknown resource: {uri}")
        self.uri = uri


def error_message(error: BaseException) -> str:
    """Return the message of an exception, or "Unknown error" when it has none."""
    return str(error) or UNKNOWN_ERROR
