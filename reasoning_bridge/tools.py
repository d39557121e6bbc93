"""reasoning_bridge/tools.py

The tools this server exposes and the registry that looks them up.

The set of tools is closed: each one is a Tool subclass listed in ``TOOLS``,
and the registry built from them at startup cannot be changed afterwards.
Adding a tool means adding a class here.
"""

from __future__ import annotations

# Standard Library
import asyncio
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from types import MappingProxyType
from typing import ClassVar

# Third-Party Libraries
from pydantic import Field

# Local Modules
from reasoning_bridge.errors import BackendError
from reasoning_bridge.protocol import ResponseEnvelope, ToolDescriptor
from reasoning_bridge.search import DEFAULT_NUM_RESULTS
from reasoning_bridge.session import BridgeSession
from reasoning_bridge.solver import SolveStatus
from reasoning_bridge.validation import ToolArguments, validate_arguments

logger = logging.getLogger("reasoning-bridge.tools")


class Tool(ABC):
    """A named operation with a declared argument schema.

    Subclasses set ``name``, ``description`` and ``arguments_model`` and
    implement ``invoke``. ``invoke`` only ever sees validated arguments.
    """

    name: ClassVar[str]
    description: ClassVar[str]
    arguments_model: ClassVar[type[ToolArguments]]

    def describe(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            input_schema=self.arguments_model.model_json_schema(),
        )

    def validate(self, arguments: object) -> ToolArguments:
        return validate_arguments(self.name, self.arguments_model, arguments)

    @abstractmethod
    async def invoke(self, arguments: ToolArguments, session: BridgeSession) -> ResponseEnvelope:
        """Run the tool. Backend failures are raised as BackendError."""


# ---------------------------------------------------------------------------
# solve_formula
# ---------------------------------------------------------------------------


class SolveFormulaArguments(ToolArguments):
    formula: str = Field(..., description="SMT-LIB2 format logical formula")


class SolveFormulaTool(Tool):
    name = "solve_formula"
    description = "Z3 theorem prover integration for SMT-LIB2 formulas"
    arguments_model = SolveFormulaArguments

    async def invoke(self, arguments: SolveFormulaArguments, session: BridgeSession) -> ResponseEnvelope:
        # Z3 blocks; run it off the event loop so other requests keep moving.
        outcome = await asyncio.to_thread(session.solver.solve, arguments.formula)
        if outcome.status is SolveStatus.ERROR:
            raise BackendError(
                "Solver error",
                outcome.reason or "unknown solver failure",
                detail=outcome.diagnostic,
            )
        return ResponseEnvelope.success(outcome.render())


# ---------------------------------------------------------------------------
# search
# ---------------------------------------------------------------------------


class SearchArguments(ToolArguments):
    query: str = Field(..., description="Search query")
    numResults: int = Field(  # noqa: N815 - wire name
        DEFAULT_NUM_RESULTS,
        ge=1,
        le=50,
        description=f"Number of results to return (default: {DEFAULT_NUM_RESULTS})",
    )


class SearchTool(Tool):
    name = "search"
    description = "Search the web using Exa AI"
    arguments_model = SearchArguments

    async def invoke(self, arguments: SearchArguments, session: BridgeSession) -> ResponseEnvelope:
        payload = await session.search.search(arguments.query, arguments.numResults)
        # No await between here and the return: the cache update is atomic
        # with respect to other requests.
        session.cache.record(arguments.query, payload)
        return ResponseEnvelope.success(json.dumps(payload, indent=2))


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

TOOLS: tuple[type[Tool], ...] = (SolveFormulaTool, SearchTool)


class ToolRegistry:
    """Immutable name → Tool table."""

    def __init__(self, tools: Iterable[Tool]) -> None:
        table: dict[str, Tool] = {}
        for tool in tools:
            if tool.name in table:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            table[tool.name] = tool
        self._tools = MappingProxyType(table)

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def descriptors(self) -> list[ToolDescriptor]:
        return [tool.describe() for tool in self._tools.values()]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


def build_registry() -> ToolRegistry:
    """Instantiate every tool in ``TOOLS`` into a fresh registry."""
    registry = ToolRegistry(tool_cls() for tool_cls in TOOLS)
    logger.info("Registered tools: %s", ", ".join(registry.names))
    return registry
