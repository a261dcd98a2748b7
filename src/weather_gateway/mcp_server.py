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
Stdio Tool Transport.

Exposes the gateway over the Model Context Protocol on standard input and
output:

1. Tools: `get_weather` and `chat_with_agent`, with input schemas generated
   from the pydantic argument models
2. Resources: `mastra://agents` and `mastra://tools`, read as JSON documents
3. Tool failures are reported as error results (`isError`), never as
   protocol-level errors

Diagnostics go to standard error; standard output carries protocol frames only.
"""

import asyncio
import json
import logging
from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl

from weather_gateway.exceptions import UnknownResourceError, UnknownToolError, error_message
from weather_gateway.gateway import Gateway
from weather_gateway.models import ChatWithAgentArguments, GetWeatherArguments, parse_model

logger = logging.getLogger(__name__)

SERVER_NAME = "mastra-mcp-server"
SERVER_VERSION = "1.0.0"
STARTUP_BANNER = "Mastra MCP server running on stdio"

JSON_MIME_TYPE = "application/json"
AGENTS_URI = "mastra://agents"
TOOLS_URI = "mastra://tools"

TOOLS = [
    types.Tool(
        name="get_weather",
        description="Get weather information for a location",
        inputSchema=GetWeatherArguments.model_json_schema(),
    ),
    types.Tool(
        name="chat_with_agent",
        description="Chat with the weather agent",
        inputSchema=ChatWithAgentArguments.model_json_schema(),
    ),
]

RESOURCES = [
    types.Resource(
        uri=AGENTS_URI,
        mimeType=JSON_MIME_TYPE,
        name="Available Agents",
        description="List of available Mastra agents",
    ),
    types.Resource(
        uri=TOOLS_URI,
        mimeType=JSON_MIME_TYPE,
        name="Available Tools",
        description="List of available Mastra tools",
    ),
]


def text_result(text: str, is_error: bool = False) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)], isError=is_error
    )


async def call_tool(gateway: Gateway, name: str, arguments: dict[str, Any]) -> types.CallToolResult:
    """
    Execute a tool call against the gateway.

    Blocking gateway calls run in a worker thread so concurrent calls on one
    session can overlap.

    Args:
        gateway: The gateway to dispatch to
        name: Tool name from the request
        arguments: Raw tool arguments

    Returns:
        A single text content element, or an error result with the text
        "Error: <message>" and `isError` set.
    """
    logger.info(f"{name} called with arguments: {arguments}")
    try:
        if name == "get_weather":
            args = parse_model(GetWeatherArguments, arguments)
            record = await asyncio.to_thread(gateway.get_weather, args.location)
            text = json.dumps(record.to_payload(), indent=2, ensure_ascii=False)
        elif name == "chat_with_agent":
            args = parse_model(ChatWithAgentArguments, arguments)
            text = await asyncio.to_thread(gateway.chat, args.message, args.agent)
        else:
            raise UnknownToolError(name, f"Unknown tool: {name}")
    except Exception as e:
        logger.error(f"{name} failed: {e}")
        return text_result(f"Error: {error_message(e)}", is_error=True)

    logger.info(f"{name} completed successfully")
    return text_result(text)


def read_resource_text(gateway: Gateway, uri: str) -> str:
    """
    Render a registered resource as indented JSON.

    Raises:
        UnknownResourceError: When the URI is not registered
    """
    key = uri.rstrip("/")
    if key == AGENTS_URI:
        payload = {"agents": gateway.list_agents()}
    elif key == TOOLS_URI:
        payload = {"tools": gateway.list_tools()}
    else:
        raise UnknownResourceError(uri)
    return json.dumps(payload, indent=2)


def create_server(gateway: Gateway) -> Server:
    """
    Create the tool-protocol server for a gateway.

    Args:
        gateway: The gateway the tools and resources dispatch to

    Returns:
        A low-level MCP server, ready to be run on any pair of streams.
    """
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return list(TOOLS)

    # Error results keep the "Error: " prefix; the call_tool decorator drops it
    async def handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
        result = await call_tool(
            gateway, request.params.name, request.params.arguments or {}
        )
        return types.ServerResult(result)

    server.request_handlers[types.CallToolRequest] = handle_call_tool

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        return list(RESOURCES)

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
        logger.info(f"Reading resource {uri}")
        text = read_resource_text(gateway, str(uri))
        return [ReadResourceContents(content=text, mime_type=JSON_MIME_TYPE)]

    return server


async def serve(gateway: Gateway) -> None:
    """Run the server on standard input and output until the client disconnects."""
    server = create_server(gateway)
    async with stdio_server() as (read_stream, write_stream):
        logger.info(STARTUP_BANNER)
        await server.run(
            read_stream, write_stream, server.create_initialization_options()
        )
