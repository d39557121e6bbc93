"""tests/test_validation.py

Unit tests for argument validation (reasoning_bridge/validation.py) against
the real tool argument models.
"""

from __future__ import annotations

# Standard Library
from typing import Any

# Third-Party Libraries
import pytest

# Local Modules
from reasoning_bridge.errors import ErrorKind, ValidationError
from reasoning_bridge.tools import SearchArguments, SolveFormulaArguments
from reasoning_bridge.validation import validate_arguments


def _search(arguments: Any) -> SearchArguments:
    return validate_arguments("search", SearchArguments, arguments)


class TestValidateArguments:
    """Test suite for validate_arguments."""

    def test_valid_search_arguments(self) -> None:
        args = _search({"query": "rust ownership", "numResults": 3})
        assert args.query == "rust ownership"
        assert args.numResults == 3

    def test_num_results_defaults_to_ten(self) -> None:
        assert _search({"query": "q"}).numResults == 10

    def test_missing_required_field_named(self) -> None:
        with pytest.raises(ValidationError) as info:
            _search({})
        assert info.value.fields == ["query"]
        assert info.value.kind is ErrorKind.VALIDATION
        assert "query" in info.value.message

    def test_all_violations_aggregated(self) -> None:
        """Every bad field is reported, not just the first."""
        with pytest.raises(ValidationError) as info:
            _search({"numResults": 99})
        assert sorted(info.value.fields) == ["numResults", "query"]

    @pytest.mark.parametrize("value", [0, 51, -5])
    def test_num_results_out_of_bounds(self, value: int) -> None:
        with pytest.raises(ValidationError) as info:
            _search({"query": "q", "numResults": value})
        assert info.value.fields == ["numResults"]

    @pytest.mark.parametrize("value", [1, 25, 50])
    def test_num_results_bounds_inclusive(self, value: int) -> None:
        assert _search({"query": "q", "numResults": value}).numResults == value

    @pytest.mark.parametrize(
        "arguments, field",
        [
            ({"query": 5}, "query"),
            ({"query": None}, "query"),
            ({"query": "q", "numResults": "3"}, "numResults"),
            ({"query": "q", "numResults": True}, "numResults"),
            ({"query": "q", "numResults": 2.5}, "numResults"),
        ],
    )
    def test_type_conformance(self, arguments: dict[str, Any], field: str) -> None:
        with pytest.raises(ValidationError) as info:
            _search(arguments)
        assert info.value.fields == [field]

    def test_unknown_keys_ignored(self) -> None:
        args = _search({"query": "q", "mode": "neural"})
        assert args.query == "q"

    def test_none_treated_as_empty_object(self) -> None:
        with pytest.raises(ValidationError) as info:
            validate_arguments("solve_formula", SolveFormulaArguments, None)
        assert info.value.fields == ["formula"]

    @pytest.mark.parametrize("arguments", [["query"], "query", 3])
    def test_non_object_rejected(self, arguments: Any) -> None:
        with pytest.raises(ValidationError) as info:
            _search(arguments)
        assert info.value.fields == ["arguments"]

    def test_message_lists_each_issue(self) -> None:
        with pytest.raises(ValidationError) as info:
            _search({"numResults": 0})
        message = info.value.message
        assert message.startswith("Invalid arguments for search: ")
        assert "query: " in message
        assert "numResults: " in message
        assert info.value.render().startswith("ValidationError: ")
