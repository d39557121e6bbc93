"""tests/test_cache.py

Unit tests for the ResourceCache (reasoning_bridge/cache.py).
Covers capacity, most-recent-first ordering, eviction and positional lookup.
"""

from __future__ import annotations

# Standard Library
from datetime import datetime

# Third-Party Libraries
import pytest

# Local Modules
from reasoning_bridge.cache import MAX_CACHED_SEARCHES, ResourceCache, SearchRecord, resource_uri


class TestResourceCache:
    """Test suite for ResourceCache."""

    def test_initialization_default(self) -> None:
        """A new cache is empty with the fixed capacity of 5."""
        cache = ResourceCache()
        assert cache.capacity == MAX_CACHED_SEARCHES == 5
        assert len(cache) == 0
        assert cache.records() == []

    def test_invalid_capacity_rejected(self) -> None:
        with pytest.raises(ValueError):
            ResourceCache(capacity=0)

    def test_record_inserts_at_front(self) -> None:
        """The newest record is always index 0."""
        cache = ResourceCache()
        cache.record("first", {"n": 1})
        cache.record("second", {"n": 2})

        assert cache.get(0).query == "second"
        assert cache.get(1).query == "first"

    def test_record_keeps_payload_verbatim(self) -> None:
        payload = {"results": [{"title": "t"}], "extra": None}
        cache = ResourceCache()
        cache.record("q", payload)
        assert cache.get(0).response is payload

    def test_record_timestamps_are_utc(self) -> None:
        cache = ResourceCache()
        cache.record("q", {})
        stamp = cache.get(0).timestamp
        assert isinstance(stamp, datetime)
        assert stamp.utcoffset() is not None
        assert stamp.utcoffset().total_seconds() == 0

    def test_bounded_to_most_recent_five(self) -> None:
        """After the 5th insert the cache always holds exactly the newest 5."""
        cache = ResourceCache()
        for i in range(12):
            cache.record(f"query {i}", {"i": i})
            if i >= 4:
                assert len(cache) == 5
                expected = [f"query {j}" for j in range(i, i - 5, -1)]
                assert [r.query for r in cache.records()] == expected
            else:
                assert len(cache) == i + 1

    def test_eviction_returns_oldest_record(self) -> None:
        cache = ResourceCache()
        for i in range(5):
            assert cache.record(f"q{i}", {}) is None
        evicted = cache.record("q5", {})
        assert isinstance(evicted, SearchRecord)
        assert evicted.query == "q0"

    def test_indices_shift_on_insert(self) -> None:
        """Indices are positions: a new record moves every other one down."""
        cache = ResourceCache()
        cache.record("a", {})
        assert cache.get(0).query == "a"
        cache.record("b", {})
        assert cache.get(0).query == "b"
        assert cache.get(1).query == "a"

    @pytest.mark.parametrize("index", [-1, 1, 5, 99])
    def test_get_out_of_bounds_returns_none(self, index: int) -> None:
        cache = ResourceCache()
        cache.record("only", {})
        assert cache.get(index) is None

    def test_records_is_a_snapshot(self) -> None:
        cache = ResourceCache()
        cache.record("a", {})
        snapshot = cache.records()
        cache.record("b", {})
        assert [r.query for r in snapshot] == ["a"]

    def test_custom_capacity(self) -> None:
        cache = ResourceCache(capacity=2)
        for q in ("a", "b", "c"):
            cache.record(q, {})
        assert [r.query for r in cache] == ["c", "b"]


class TestResourceUri:
    """Test suite for resource_uri."""

    @pytest.mark.parametrize("index", [0, 1, 4, 42])
    def test_format(self, index: int) -> None:
        assert resource_uri(index) == f"exa://searches/{index}"
