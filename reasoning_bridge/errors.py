"""reasoning_bridge/errors.py

Request-level error taxonomy.

Every failure a request can hit is one of these. The dispatcher catches them
at its boundary and turns them into a typed error envelope, so none of them
ever escapes to the transport loop.
"""

from __future__ import annotations

# Standard Library
from enum import StrEnum

# Third-Party Libraries
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST, METHOD_NOT_FOUND


class ErrorKind(StrEnum):
    """User-visible name of each error family."""

    VALIDATION = "ValidationError"
    PROTOCOL = "ProtocolError"
    NOT_FOUND = "NotFoundError"
    BACKEND = "BackendError"
    INTERNAL = "InternalError"


class BridgeError(Exception):
    """Base class for every error the dispatcher knows how to report.

    Attributes:
        kind: Error family shown to the caller.
        code: JSON-RPC error code used when the transport reports it.
        message: Concise human-readable reason.
        detail: Optional raw diagnostic text, kept apart from ``message``.
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    code: int = INTERNAL_ERROR

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def render(self) -> str:
        """Return the text block shown to the caller."""
        return f"{self.kind}: {self.message}"


class ValidationError(BridgeError):
    """Tool arguments failed their schema. Carries every offending field."""

    kind = ErrorKind.VALIDATION
    code = INVALID_PARAMS

    def __init__(self, tool_name: str, issues: list[tuple[str, str]]) -> None:
        self.tool_name = tool_name
        self.issues = issues
        summary = ", ".join(f"{path}: {reason}" for path, reason in issues)
        super().__init__(f"Invalid arguments for {tool_name}: {summary}")

    @property
    def fields(self) -> list[str]:
        return [path for path, _ in self.issues]


class ProtocolError(BridgeError):
    """Unknown tool or method, or a request whose params are malformed."""

    kind = ErrorKind.PROTOCOL

    def __init__(self, message: str, *, code: int = INVALID_REQUEST) -> None:
        super().__init__(message)
        self.code = code

    @classmethod
    def unknown_tool(cls, name: str) -> ProtocolError:
        return cls(f"Unknown tool: {name}", code=METHOD_NOT_FOUND)


class NotFoundError(BridgeError):
    """A resource index that is not present in the current cache."""

    kind = ErrorKind.NOT_FOUND
    code = INVALID_REQUEST


class BackendError(BridgeError):
    """The solver or search engine failed, transport failures included.

    ``label`` prefixes the rendered text (``Solver error``, ``Exa API error``)
    so each tool keeps its own output contract.
    """

    kind = ErrorKind.BACKEND
    code = INTERNAL_ERROR

    def __init__(self, label: str, reason: str, *, detail: str | None = None) -> None:
        super().__init__(reason, detail=detail)
        self.label = label

    def render(self) -> str:
        text = f"{self.label}: {self.message}"
        if self.detail and self.detail != self.message:
            text += f"\nDetails: {self.detail}"
        return text
