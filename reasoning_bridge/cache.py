"""reasoning_bridge/cache.py

Bounded, most-recent-first store of past search results.

Records are addressed by their *position* in the store, so an index is only
meaningful against the current contents: every new record shifts the others
down by one and eviction silently drops the largest index. Callers are
expected to list resources again before reading one.
"""

from __future__ import annotations

# Standard Library
import logging
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger("reasoning-bridge.cache")

MAX_CACHED_SEARCHES: int = 5
RESOURCE_SCHEME: str = "exa"


def resource_uri(index: int) -> str:
    """Build the resource URI for a cache position."""
    return f"{RESOURCE_SCHEME}://searches/{index}"


@dataclass(frozen=True, slots=True)
class SearchRecord:
    """One search as the backend answered it.

    Attributes:
        query: The query string the caller sent.
        response: Backend payload, stored and returned verbatim.
        timestamp: When the response arrived (UTC).
    """

    query: str
    response: Any
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ResourceCache:
    """Fixed-capacity deque of SearchRecords, newest at index 0.

    ``record`` is the only mutating operation. It never awaits, so a record is
    always inserted and the overflow evicted in one uninterrupted step.
    """

    def __init__(self, capacity: int = MAX_CACHED_SEARCHES) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._records: deque[SearchRecord] = deque()

    def record(self, query: str, response: Any) -> SearchRecord | None:
        """Insert a new search at the front, evicting the oldest past capacity.

        Args:
            query: The search query.
            response: The raw backend payload.

        Returns:
            The evicted record, or ``None`` if nothing was dropped.
        """
        self._records.appendleft(SearchRecord(query=query, response=response))
        evicted: SearchRecord | None = None
        if len(self._records) > self.capacity:
            evicted = self._records.pop()
            logger.debug("[cache] evicted search query=%r", evicted.query)
        logger.info("[cache] stored search query=%r size=%d", query, len(self._records))
        return evicted

    def get(self, index: int) -> SearchRecord | None:
        """Return the record at ``index`` in the current ordering, if any."""
        if 0 <= index < len(self._records):
            return self._records[index]
        return None

    def records(self) -> list[SearchRecord]:
        """Snapshot of the current records, most recent first."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SearchRecord]:
        return iter(self.records())
