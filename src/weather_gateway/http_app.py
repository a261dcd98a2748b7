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
HTTP Transport

This module implements the JSON endpoints of the gateway:
- GET /health: Health check
- GET /api/agents, GET /api/tools: Capability discovery
- GET /api/weather/<location>: Weather lookup
- POST /api/agents/<agent>/chat: Chat with an agent
- POST /api/tools/<tool>/execute: Execute a tool
- POST /api/weather/chat: Weather lookup combined with an agent question

Successful responses carry an ISO-8601 UTC timestamp. Validation failures are
400, unknown agents and tools are 404, and every other failure is 500 with
`{"error": <kind>, "message": <detail>}`.
"""

import logging
from datetime import datetime, timezone

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS

from weather_gateway.exceptions import (
    InvalidInputError,
    UnknownAgentError,
    UnknownToolError,
    error_message,
)
from weather_gateway.gateway import Gateway
from weather_gateway.models import ChatRequest, WeatherChatRequest, parse_model

logger = logging.getLogger(__name__)

EXTENSION_KEY = "weather_gateway"

ENDPOINTS = (
    ("GET", "/health", "Health check"),
    ("GET", "/api/agents", "List available agents"),
    ("GET", "/api/tools", "List available tools"),
    ("POST", "/api/agents/:agentName/chat", "Chat with an agent"),
    ("POST", "/api/tools/:toolName/execute", "Execute a tool"),
    ("GET", "/api/weather/:location", "Get weather for location"),
    ("POST", "/api/weather/chat", "Weather chat with agent"),
)

api = Blueprint("api", __name__)


def utc_timestamp() -> str:
    """Current instant as ISO-8601 UTC with millisecond precision, e.g. 2025-01-01T12:00:00.000Z."""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def _gateway() -> Gateway:
    return current_app.extensions[EXTENSION_KEY]


def _json_body() -> dict:
    # Malformed, non-JSON and non-object bodies are treated as empty
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _failure(kind: str, error: Exception):
    """Map a gateway failure to an HTTP error response."""
    if isinstance(error, InvalidInputError):
        return jsonify({"error": str(error)}), 400
    if isinstance(error, (UnknownAgentError, UnknownToolError)):
        return jsonify({"error": str(error)}), 404

    logger.error(f"{kind}: {error}")
    return jsonify({"error": kind, "message": error_message(error)}), 500


@api.route("/health", methods=["GET"])
def handle_health():
    return jsonify({"status": "ok", "timestamp": utc_timestamp()})


@api.route("/api/agents", methods=["GET"])
def handle_list_agents():
    try:
        return jsonify({"agents": _gateway().list_agents()})
    except Exception as e:
        return _failure("Failed to get agents", e)


@api.route("/api/tools", methods=["GET"])
def handle_list_tools():
    try:
        return jsonify({"tools": _gateway().list_tools()})
    except Exception as e:
        return _failure("Failed to get tools", e)


@api.route("/api/weather/<location>", methods=["GET"])
def handle_get_weather(location: str):
    """Weather lookup for mobile clients; `location` echoes the path parameter."""
    try:
        record = _gateway().get_weather(location)
        return jsonify(
            {
                "weather": record.to_payload(),
                "location": location,
                "timestamp": utc_timestamp(),
            }
        )
    except Exception as e:
        return _failure("Failed to get weather", e)


@api.route("/api/agents/<agent_name>/chat", methods=["POST"])
def handle_agent_chat(agent_name: str):
    """
    Chat with an agent.

    A missing message is rejected before the agent name is checked, so an
    unknown agent with an empty body is a 400, not a 404.
    """
    try:
        body = parse_model(ChatRequest, _json_body())
        reply = _gateway().chat(body.message, agent_name)
        return jsonify(
            {"response": reply, "agent": agent_name, "timestamp": utc_timestamp()}
        )
    except Exception as e:
        return _failure("Failed to chat with agent", e)


@api.route("/api/tools/<tool_name>/execute", methods=["POST"])
def handle_tool_execute(tool_name: str):
    try:
        parameters = _json_body().get("parameters")
        record = _gateway().execute_tool(tool_name, parameters)
        return jsonify(
            {
                "result": record.to_payload(),
                "tool": tool_name,
                "timestamp": utc_timestamp(),
            }
        )
    except Exception as e:
        return _failure("Failed to execute tool", e)


@api.route("/api/weather/chat", methods=["POST"])
def handle_weather_chat():
    try:
        body = parse_model(WeatherChatRequest, _json_body())
        record, agent_response = _gateway().weather_chat(body.location, body.question)
        return jsonify(
            {
                "weather": record.to_payload(),
                "location": body.location,
                "question": body.question,
                "agentResponse": agent_response,
                "timestamp": utc_timestamp(),
            }
        )
    except Exception as e:
        return _failure("Failed to process weather chat", e)


def handle_not_found(error):
    return (
        jsonify(
            {
                "error": "Endpoint not found",
                "message": "The requested endpoint does not exist",
            }
        ),
        404,
    )


def handle_method_not_allowed(error):
    return (
        jsonify(
            {
                "error": "Method not allowed",
                "message": "The HTTP method is not allowed for this endpoint",
            }
        ),
        405,
    )


def handle_internal_error(error):
    logger.error(f"Internal server error: {error}")
    return (
        jsonify(
            {
                "error": "Internal server error",
                "message": "An unexpected error occurred",
            }
        ),
        500,
    )


def create_app(gateway: Gateway) -> Flask:
    """
    Application factory.

    Args:
        gateway: The gateway the endpoints dispatch to

    Returns:
        Configured Flask application with permissive CORS
    """
    app = Flask(__name__)
    # Keep payload keys in construction order
    app.json.sort_keys = False

    CORS(app, send_wildcard=True)

    app.extensions[EXTENSION_KEY] = gateway
    app.register_blueprint(api)

    app.register_error_handler(404, handle_not_found)
    app.register_error_handler(405, handle_method_not_allowed)
    app.register_error_handler(500, handle_internal_error)

    return app
