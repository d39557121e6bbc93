"""reasoning_bridge/protocol.py

Transport-neutral request and response types.

The MCP binding in ``server.py`` converts SDK requests into ``Request`` and
renders ``ResponseEnvelope`` back; nothing in the core imports the SDK's
session machinery.
"""

from __future__ import annotations

# Standard Library
import json
from enum import StrEnum
from typing import Any, Literal

# Third-Party Libraries
from pydantic import BaseModel, ConfigDict, Field

# Local Modules
from reasoning_bridge.errors import BridgeError, ErrorKind


class RequestKind(StrEnum):
    LIST_TOOLS = "tools/list"
    LIST_RESOURCES = "resources/list"
    READ_RESOURCE = "resources/read"
    CALL_TOOL = "tools/call"


class Request(BaseModel):
    """One inbound request: its kind plus kind-specific params."""

    model_config = ConfigDict(frozen=True)

    kind: RequestKind
    params: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def list_tools(cls) -> Request:
        return cls(kind=RequestKind.LIST_TOOLS)

    @classmethod
    def list_resources(cls) -> Request:
        return cls(kind=RequestKind.LIST_RESOURCES)

    @classmethod
    def read_resource(cls, uri: str) -> Request:
        return cls(kind=RequestKind.READ_RESOURCE, params={"uri": uri})

    @classmethod
    def call_tool(cls, name: str, arguments: dict[str, Any] | None = None) -> Request:
        return cls(kind=RequestKind.CALL_TOOL, params={"name": name, "arguments": arguments})


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


class ToolDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(alias="inputSchema")


class ResourceDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    uri: str
    name: str
    mime_type: str = Field("application/json", alias="mimeType")
    description: str


class ResourceContents(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    uri: str
    mime_type: str = Field("application/json", alias="mimeType")
    text: str


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


class ContentBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ErrorInfo(BaseModel):
    """Typed error carried by a failed envelope.

    Attributes:
        kind: Error family (ValidationError, ProtocolError, ...).
        code: JSON-RPC code for transports that report errors natively.
        message: Concise reason.
        detail: Raw backend diagnostic, when there is one.
    """

    kind: ErrorKind
    code: int
    message: str
    detail: str | None = None


class ResponseEnvelope(BaseModel):
    """Uniform outcome of every request.

    ``content`` is what a caller reads; ``result`` keeps the structured
    payload (descriptors, resource contents) for the transport binding.
    """

    content: list[ContentBlock] = Field(default_factory=list)
    is_error: bool = Field(False, serialization_alias="isError")
    result: Any = None
    error: ErrorInfo | None = None

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)

    @classmethod
    def success(cls, text: str, result: Any = None) -> ResponseEnvelope:
        return cls(content=[ContentBlock(text=text)], result=result)

    @classmethod
    def listing(cls, items: list[BaseModel]) -> ResponseEnvelope:
        """Envelope for list results: JSON text plus the typed items."""
        text = json.dumps([item.model_dump(by_alias=True) for item in items], indent=2)
        return cls.success(text, result=items)

    @classmethod
    def failure(cls, error: BridgeError) -> ResponseEnvelope:
        return cls(
            content=[ContentBlock(text=error.render())],
            is_error=True,
            error=ErrorInfo(
                kind=error.kind,
                code=error.code,
                message=error.message,
                detail=error.detail,
            ),
        )
