"""reasoning_bridge/session.py

State owned by one server session and handed to every tool call.
"""

from __future__ import annotations

# Standard Library
from dataclasses import dataclass, field

# Local Modules
from reasoning_bridge.cache import ResourceCache
from reasoning_bridge.search import ExaSearchClient
from reasoning_bridge.settings import BridgeSettings
from reasoning_bridge.solver import Z3Solver


@dataclass
class BridgeSession:
    """Adapters plus the recent-search cache for a single caller.

    Attributes:
        search: Search backend adapter.
        solver: Solver backend adapter.
        cache: Recent searches, most recent first.
    """

    search: ExaSearchClient
    solver: Z3Solver = field(default_factory=Z3Solver)
    cache: ResourceCache = field(default_factory=ResourceCache)

    @classmethod
    def from_settings(cls, settings: BridgeSettings) -> BridgeSession:
        return cls(search=ExaSearchClient(settings.exa_api_key, settings.exa_base_url))
