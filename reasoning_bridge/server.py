"""reasoning_bridge/server.py

MCP stdio server exposing the solve_formula and search tools and the
recent-search resources.

This module only binds the MCP SDK to the Dispatcher: every handler turns
the SDK call into a Request, routes it, and renders the ResponseEnvelope.
Tool failures come back as ``isError`` results; resource failures are
raised as JSON-RPC errors.

Run with:
    reasoning-bridge
    python -m reasoning_bridge.server
"""

from __future__ import annotations

# Standard Library
import asyncio
import logging
import sys
from typing import Any

# Third-Party Libraries
import mcp.types as types
from dotenv import load_dotenv
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from pydantic import AnyUrl
from pydantic import ValidationError as PydanticValidationError

# Local Modules
from reasoning_bridge import __version__
from reasoning_bridge.dispatcher import Dispatcher
from reasoning_bridge.protocol import (
    Request,
    ResourceContents,
    ResourceDescriptor,
    ResponseEnvelope,
    ToolDescriptor,
)
from reasoning_bridge.session import BridgeSession
from reasoning_bridge.settings import BridgeSettings
from reasoning_bridge.tools import build_registry

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
# stdout carries the MCP stream, so all logging goes to stderr.
LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("reasoning-bridge")

SERVER_NAME: str = "reasoning-bridge"


# ---------------------------------------------------------------------------
# Envelope → MCP rendering
# ---------------------------------------------------------------------------


def raise_for_error(envelope: ResponseEnvelope) -> None:
    """Raise the envelope's error as an McpError, if it carries one."""
    if envelope.error is not None:
        raise McpError(types.ErrorData(code=envelope.error.code, message=envelope.text))


def to_call_tool_result(envelope: ResponseEnvelope) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=block.text) for block in envelope.content],
        isError=envelope.is_error,
    )


def to_mcp_tool(descriptor: ToolDescriptor) -> types.Tool:
    return types.Tool(
        name=descriptor.name,
        description=descriptor.description,
        inputSchema=descriptor.input_schema,
    )


def to_mcp_resource(descriptor: ResourceDescriptor) -> types.Resource:
    return types.Resource(
        uri=AnyUrl(descriptor.uri),
        name=descriptor.name,
        mimeType=descriptor.mime_type,
        description=descriptor.description,
    )


# ---------------------------------------------------------------------------
# Server factory
# ---------------------------------------------------------------------------


def build_server(dispatcher: Dispatcher) -> Server:
    """Create the MCP server with every handler routed through ``dispatcher``."""
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        envelope = await dispatcher.route(Request.list_tools())
        raise_for_error(envelope)
        return [to_mcp_tool(descriptor) for descriptor in envelope.result]

    @server.list_resources()
    async def _list_resources() -> list[types.Resource]:
        envelope = await dispatcher.route(Request.list_resources())
        raise_for_error(envelope)
        return [to_mcp_resource(descriptor) for descriptor in envelope.result]

    @server.read_resource()
    async def _read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
        envelope = await dispatcher.route(Request.read_resource(str(uri)))
        raise_for_error(envelope)
        contents: ResourceContents = envelope.result
        return [ReadResourceContents(content=contents.text, mime_type=contents.mime_type)]

    # The dispatcher's validation layer is the only argument checker.
    @server.call_tool(validate_input=False)
    async def _call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        envelope = await dispatcher.route(Request.call_tool(name, arguments))
        return to_call_tool_result(envelope)

    return server


async def serve(settings: BridgeSettings) -> None:
    """Serve one caller over stdio until the stream closes."""
    session = BridgeSession.from_settings(settings)
    dispatcher = Dispatcher(build_registry(), session)
    server = build_server(dispatcher)

    async with stdio_server() as (read_stream, write_stream):
        logger.info("%s %s running on stdio", SERVER_NAME, __version__)
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def run() -> None:
    """Launch the server (console script entry point)."""
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, stream=sys.stderr)

    try:
        settings = BridgeSettings()
    except PydanticValidationError as exc:
        logger.critical("Invalid configuration (check EXA_API_KEY and LOG_LEVEL): %s", exc)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception as exc:
        logger.critical("Fatal initialization error: %s", exc, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
