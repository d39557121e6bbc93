"""reasoning_bridge/dispatcher.py

Top-level request router.

``Dispatcher.route`` takes any Request and always returns a ResponseEnvelope:
either success content or one typed error. Only ``call_tool("search")``
changes state (the recent-search cache); every other request just reads it.
"""

from __future__ import annotations

# Standard Library
import json
import logging
import re

# Local Modules
from reasoning_bridge.cache import RESOURCE_SCHEME, resource_uri
from reasoning_bridge.errors import BridgeError, NotFoundError, ProtocolError
from reasoning_bridge.protocol import (
    Request,
    RequestKind,
    ResourceContents,
    ResourceDescriptor,
    ResponseEnvelope,
)
from reasoning_bridge.session import BridgeSession
from reasoning_bridge.tools import ToolRegistry

logger = logging.getLogger("reasoning-bridge.dispatcher")

_RESOURCE_URI_PATTERN: re.Pattern[str] = re.compile(
    rf"{re.escape(RESOURCE_SCHEME)}://searches/(\d+)",
    re.ASCII,
)

# Longer indices can never address a cached record.
_MAX_INDEX_DIGITS: int = 9

_JSON_MIME_TYPE: str = "application/json"


class Dispatcher:
    """Routes requests to the registry or the resource cache.

    Args:
        registry: The immutable tool table.
        session: Per-session state passed to every tool call.
    """

    def __init__(self, registry: ToolRegistry, session: BridgeSession) -> None:
        self.registry = registry
        self.session = session

    async def route(self, request: Request) -> ResponseEnvelope:
        """Handle one request. Never raises."""
        try:
            if request.kind is RequestKind.LIST_TOOLS:
                return ResponseEnvelope.listing(self.registry.descriptors())
            if request.kind is RequestKind.LIST_RESOURCES:
                return ResponseEnvelope.listing(self._list_resources())
            if request.kind is RequestKind.READ_RESOURCE:
                return self._read_resource(request.params.get("uri"))
            if request.kind is RequestKind.CALL_TOOL:
                return await self._call_tool(request.params)
            raise ProtocolError(f"Unsupported request kind: {request.kind}")
        except BridgeError as exc:
            logger.warning("[%s] %s: %s", request.kind, exc.kind, exc.message)
            return ResponseEnvelope.failure(exc)
        except Exception as exc:
            logger.error("[%s] unexpected failure: %s", request.kind, exc, exc_info=True)
            error = BridgeError(f"Runtime error: {exc}")
            return ResponseEnvelope.failure(error)

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def _list_resources(self) -> list[ResourceDescriptor]:
        return [
            ResourceDescriptor(
                uri=resource_uri(index),
                name=f"Recent search: {record.query}",
                mime_type=_JSON_MIME_TYPE,
                description=f"Search results for: {record.query} ({record.timestamp.isoformat()})",
            )
            for index, record in enumerate(self.session.cache.records())
        ]

    def _read_resource(self, uri: object) -> ResponseEnvelope:
        if not isinstance(uri, str):
            raise ProtocolError("resources/read requires a string 'uri' parameter")

        match = _RESOURCE_URI_PATTERN.fullmatch(uri)
        if match is None:
            raise ProtocolError(f"Unknown resource: {uri}")

        digits = match.group(1)
        record = None
        if len(digits) <= _MAX_INDEX_DIGITS:
            record = self.session.cache.get(int(digits))
        if record is None:
            raise NotFoundError(f"Search result not found: {digits}")

        contents = ResourceContents(
            uri=uri,
            mime_type=_JSON_MIME_TYPE,
            text=json.dumps(record.response, indent=2),
        )
        return ResponseEnvelope.success(contents.text, result=contents)

    # ------------------------------------------------------------------
    # Tools
    # ------------------------------------------------------------------

    async def _call_tool(self, params: dict) -> ResponseEnvelope:
        name = params.get("name")
        if not isinstance(name, str) or not name:
            raise ProtocolError("tools/call requires a string 'name' parameter")

        tool = self.registry.get(name)
        if tool is None:
            raise ProtocolError.unknown_tool(name)

        arguments = tool.validate(params.get("arguments"))
        logger.info("[call_tool] name=%s", name)
        return await tool.invoke(arguments, self.session)
